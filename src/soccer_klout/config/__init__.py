"""Configuration helpers for influence weights and runtime settings."""

from .settings import CacheTtls, Settings
from .weights import (
    DEFAULT_WEIGHTS,
    InfluenceWeights,
    get_weights_by_league,
    get_weights_by_position,
    iter_leagues,
    iter_positions,
)

__all__ = [
    "CacheTtls",
    "DEFAULT_WEIGHTS",
    "InfluenceWeights",
    "Settings",
    "get_weights_by_league",
    "get_weights_by_position",
    "iter_leagues",
    "iter_positions",
]
