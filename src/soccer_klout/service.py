"""Klout, leaderboard and comparison flows shared by the API and the CLI."""

from __future__ import annotations

import re
from typing import Any, List, Sequence

from pydantic import ValidationError

from soccer_klout.errors import InvalidRequestError
from soccer_klout.models import (
    MAX_COMPARE_PLAYERS,
    MIN_COMPARE_PLAYERS,
    ComparedPlayer,
    CompareRequest,
    InfluenceScore,
    LeaderboardEntry,
    PlayerComparison,
)
from soccer_klout.providers import PlayerDataProvider
from soccer_klout.scoring import (
    compute_influence,
    compute_raw_influence,
    get_comparison_metrics,
    rank_players,
    resolve_weights,
)


DEFAULT_LEADERBOARD_LIMIT = 10
MAX_LEADERBOARD_LIMIT = 100
# Number of top players whose best raw score anchors a single player's klout.
REFERENCE_POOL_SIZE = 10

COMPARE_USAGE = f"Please provide {MIN_COMPARE_PLAYERS}-{MAX_COMPARE_PLAYERS} player IDs for comparison"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_limit(raw: Any, default: int = DEFAULT_LEADERBOARD_LIMIT, maximum: int = MAX_LEADERBOARD_LIMIT) -> int:
    """Coerce a user supplied limit; bad or non-positive values use the default.

    Strings are read up to their first non-digit, so ``"5.5"`` and ``"12abc"``
    give 5 and 12.
    """

    if isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match is None:
            return default
        value = int(match.group(1))
    else:
        try:
            value = int(raw)
        except (TypeError, ValueError, OverflowError):
            return default
    if value <= 0:
        return default
    return min(value, maximum)


def parse_compare_request(payload: Any) -> CompareRequest:
    try:
        return CompareRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidRequestError(COMPARE_USAGE) from exc


class KloutService:
    def __init__(self, provider: PlayerDataProvider):
        self.provider = provider

    def player_klout(
        self,
        player_id: str,
        position: str | None = None,
        league: str | None = None,
    ) -> InfluenceScore:
        if not player_id or not player_id.strip():
            raise InvalidRequestError("Player ID is required")

        player = self.provider.get_player_stats(player_id)
        weights = resolve_weights(position, league)

        reference = self.provider.get_top_players(REFERENCE_POOL_SIZE)
        max_influence = max(
            (compute_raw_influence(entry.stats, weights) for entry in reference),
            default=None,
        )
        return compute_influence(
            player.profile.id,
            player.profile.name,
            player.stats,
            weights,
            max_influence,
        )

    def leaderboard(
        self,
        limit: int | str | None = DEFAULT_LEADERBOARD_LIMIT,
        position: str | None = None,
        league: str | None = None,
    ) -> List[LeaderboardEntry]:
        limit = parse_limit(limit)
        players = self.provider.get_top_players(limit)
        if not players:
            return []

        weights = resolve_weights(position, league)
        max_influence = max(compute_raw_influence(entry.stats, weights) for entry in players)
        profiles = {entry.profile.id: entry.profile for entry in players}
        scores = [
            compute_influence(entry.profile.id, entry.profile.name, entry.stats, weights, max_influence)
            for entry in players
        ]
        return [
            LeaderboardEntry(rank=score.rank, player=profiles[score.player_id], influence=score)
            for score in rank_players(scores)
        ]

    def compare(self, player_ids: Sequence[str]) -> PlayerComparison:
        request = parse_compare_request({"player_ids": list(player_ids)})
        players = [self.provider.get_player_stats(player_id) for player_id in request.player_ids]

        max_influence = max(compute_raw_influence(entry.stats) for entry in players)
        scores = [
            compute_influence(entry.profile.id, entry.profile.name, entry.stats, None, max_influence)
            for entry in players
        ]
        return PlayerComparison(
            players=[
                ComparedPlayer(profile=entry.profile, stats=entry.stats, influence_score=score)
                for entry, score in zip(players, scores)
            ],
            max_influence=max_influence,
            metrics=get_comparison_metrics(scores),
        )
