"""Cache-aware access to player profiles and stats."""

from __future__ import annotations

import logging
from typing import Iterable, List

from soccer_klout.cache import TTLCache
from soccer_klout.config import CacheTtls, Settings
from soccer_klout.errors import InvalidRequestError, KloutError, PlayerNotFoundError, handle_api_error
from soccer_klout.models import PlayerWithStats, SearchResponse, SearchResult

from .remote import RemotePlayerSource
from .sources import MockPlayerSource, PlayerSource


logger = logging.getLogger("uvicorn.error")


def calculate_match_score(player_name: str, query: str, aliases: Iterable[str] = ()) -> int:
    """Score how well ``query`` matches a player; the first matching rule wins."""

    name = player_name.casefold()
    needle = query.casefold()
    if needle == name or any(needle == alias.casefold() for alias in aliases):
        return 100
    if name.startswith(needle):
        return 90
    if any(part.startswith(needle) for part in name.split()):
        return 80
    if needle in name:
        return 70
    return 50


class PlayerDataProvider:
    """Serve player lookups from a source, memoized in a TTL cache."""

    def __init__(self, source: PlayerSource, cache: TTLCache, ttls: CacheTtls | None = None):
        self.source = source
        self.cache = cache
        self.ttls = ttls or CacheTtls()

    def _fail(self, action: str, exc: Exception) -> KloutError:
        error = handle_api_error(exc)
        if not isinstance(exc, KloutError):
            logger.error("%s failed: %s", action, exc)
        return error

    def search_players(self, name: str) -> SearchResponse:
        query = (name or "").strip()
        if not query:
            raise InvalidRequestError("Player name is required")

        cache_key = f"search:{query.casefold()}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit for %s", cache_key)
            return cached

        try:
            records = self.source.search(query)
        except Exception as exc:
            raise self._fail("Player search", exc) from exc

        needle = query.casefold()
        results = [
            SearchResult(
                **record.profile.model_dump(),
                match_score=calculate_match_score(record.profile.name, needle, record.aliases),
            )
            for record in records
        ]
        results.sort(key=lambda result: -result.match_score)
        response = SearchResponse(results=results, total_count=len(results))
        self.cache.set(cache_key, response, self.ttls.search)
        return response

    def get_player_stats(self, player_id: str) -> PlayerWithStats:
        cache_key = f"player:{player_id}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit for %s", cache_key)
            return cached

        try:
            record = self.source.get_by_id(player_id)
        except Exception as exc:
            raise self._fail("Fetching player stats", exc) from exc
        if record is None:
            raise PlayerNotFoundError(player_id)

        result = record.with_stats()
        self.cache.set(cache_key, result, self.ttls.player)
        return result

    def get_top_players(self, limit: int = 10) -> List[PlayerWithStats]:
        cache_key = f"top-players:{limit}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit for %s", cache_key)
            return list(cached)

        try:
            records = self.source.get_top(limit)
        except Exception as exc:
            raise self._fail("Fetching top players", exc) from exc

        players = tuple(record.with_stats() for record in records[: max(0, limit)])
        self.cache.set(cache_key, players, self.ttls.top_players)
        return list(players)


def build_provider(settings: Settings, cache: TTLCache | None = None) -> PlayerDataProvider:
    """Wire the configured source and cache into a provider."""

    if cache is None:
        cache = TTLCache(default_ttl=settings.cache_ttl, check_period=settings.cache_check_period)
    source: PlayerSource
    if settings.data_source_url:
        logger.info("Using remote player source at %s", settings.data_source_url)
        source = RemotePlayerSource(
            settings.data_source_url,
            api_key=settings.api_key,
            timeout=settings.http_timeout,
        )
    else:
        source = MockPlayerSource()
    return PlayerDataProvider(source, cache, settings.ttls)
