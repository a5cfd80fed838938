"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Tuple


logger = logging.getLogger("uvicorn.error")

_PREFIX = "SOCCER_KLOUT_"


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class CacheTtls:
    """Per-operation cache lifetimes, in seconds."""

    search: float = 3600
    player: float = 600
    top_players: float = 1800


@dataclass(frozen=True)
class Settings:
    cache_ttl: float = 600
    cache_check_period: float = 120
    ttls: CacheTtls = field(default_factory=CacheTtls)
    data_source_url: str | None = None
    api_key: str = "demo"
    http_timeout: float = 10.0
    cors_origins: Tuple[str, ...] = ("*",)
    port: int = 5000

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        ttls = CacheTtls(
            search=_env_float(f"{_PREFIX}SEARCH_TTL", defaults.ttls.search, clamp_min=0),
            player=_env_float(f"{_PREFIX}PLAYER_TTL", defaults.ttls.player, clamp_min=0),
            top_players=_env_float(f"{_PREFIX}TOP_PLAYERS_TTL", defaults.ttls.top_players, clamp_min=0),
        )
        return cls(
            cache_ttl=_env_float(f"{_PREFIX}CACHE_TTL", defaults.cache_ttl, clamp_min=0),
            cache_check_period=_env_float(
                f"{_PREFIX}CACHE_CHECK_PERIOD", defaults.cache_check_period, clamp_min=0
            ),
            ttls=ttls,
            data_source_url=os.getenv(f"{_PREFIX}DATA_SOURCE_URL") or None,
            api_key=os.getenv("FOOTBALL_DATA_API_KEY") or defaults.api_key,
            http_timeout=_env_float(f"{_PREFIX}HTTP_TIMEOUT", defaults.http_timeout, clamp_min=0.1),
            cors_origins=_env_list(f"{_PREFIX}CORS_ORIGINS", defaults.cors_origins),
            port=_env_int("PORT", defaults.port, min_value=1),
        )
