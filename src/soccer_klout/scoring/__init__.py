"""Influence scoring engine."""

from soccer_klout.config.weights import (
    DEFAULT_WEIGHTS,
    InfluenceWeights,
    get_weights_by_league,
    get_weights_by_position,
)

from .engine import (
    LOG_REFERENCE_INFLUENCE,
    compute_breakdown,
    compute_influence,
    compute_raw_influence,
    get_combined_weights,
    get_comparison_metrics,
    normalize_log_scale,
    rank_players,
    resolve_weights,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "InfluenceWeights",
    "LOG_REFERENCE_INFLUENCE",
    "compute_breakdown",
    "compute_influence",
    "compute_raw_influence",
    "get_combined_weights",
    "get_comparison_metrics",
    "get_weights_by_league",
    "get_weights_by_position",
    "normalize_log_scale",
    "rank_players",
    "resolve_weights",
]
