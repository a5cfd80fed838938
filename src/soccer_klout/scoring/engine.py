"""Influence scoring: weighted stat sums normalized to a 0-100 scale."""

from __future__ import annotations

import math
from statistics import fmean
from typing import List, Sequence

from soccer_klout.config.weights import (
    DEFAULT_WEIGHTS,
    InfluenceWeights,
    get_weights_by_league,
    get_weights_by_position,
)
from soccer_klout.models import (
    BestBreakdown,
    ComparisonMetrics,
    InfluenceBreakdown,
    InfluenceScore,
    PlayerStats,
)


# Raw score of a top real-world player; anchors the log-scale fallback.
LOG_REFERENCE_INFLUENCE = 4500


def compute_raw_influence(stats: PlayerStats, weights: InfluenceWeights | None = None) -> float:
    w = weights or DEFAULT_WEIGHTS
    return (
        stats.goals * w.goals
        + stats.assists * w.assists
        + stats.appearances * w.appearances
        + stats.social_mentions * w.social_mentions
    )


def compute_breakdown(stats: PlayerStats, weights: InfluenceWeights | None = None) -> InfluenceBreakdown:
    w = weights or DEFAULT_WEIGHTS
    return InfluenceBreakdown(
        goals_score=stats.goals * w.goals,
        assists_score=stats.assists * w.assists,
        appearances_score=stats.appearances * w.appearances,
        social_score=stats.social_mentions * w.social_mentions,
    )


def normalize_log_scale(influence: float) -> float:
    """Compress a raw score onto 0-100 relative to the log reference."""

    return math.log10(max(1.0, influence)) / math.log10(LOG_REFERENCE_INFLUENCE) * 100


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return min(high, max(low, value))


def compute_influence(
    player_id: str,
    player_name: str,
    stats: PlayerStats,
    weights: InfluenceWeights | None = None,
    max_influence: float | None = None,
) -> InfluenceScore:
    """Score a player and normalize against ``max_influence``.

    Without a positive ``max_influence`` the log-scale fallback is used. The
    normalized value is always clamped to ``[0, 100]``.
    """

    breakdown = compute_breakdown(stats, weights)
    influence = breakdown.total()

    if max_influence is not None and max_influence > 0:
        normalized = influence / max_influence * 100
    else:
        normalized = normalize_log_scale(influence)

    return InfluenceScore(
        player_id=player_id,
        player_name=player_name,
        influence=influence,
        normalized_influence=_clamp(normalized),
        breakdown=breakdown,
    )


def rank_players(scores: Sequence[InfluenceScore]) -> List[InfluenceScore]:
    """Return copies ordered by normalized influence, with 1-based ranks.

    Equal scores keep their input order.
    """

    ordered = sorted(scores, key=lambda score: -score.normalized_influence)
    return [score.model_copy(update={"rank": index}) for index, score in enumerate(ordered, start=1)]


def get_combined_weights(position: str | None, league: str | None = None) -> InfluenceWeights:
    position_weights = get_weights_by_position(position)
    league_weights = get_weights_by_league(league) if league else DEFAULT_WEIGHTS
    return position_weights.averaged_with(league_weights)


def resolve_weights(position: str | None = None, league: str | None = None) -> InfluenceWeights:
    """Pick the weight set for an optional position/league filter."""

    if position and league:
        return get_combined_weights(position, league)
    if position:
        return get_weights_by_position(position)
    if league:
        return get_weights_by_league(league)
    return DEFAULT_WEIGHTS


def get_comparison_metrics(scores: Sequence[InfluenceScore]) -> ComparisonMetrics | None:
    if not scores:
        return None

    normalized = [score.normalized_influence for score in scores]
    # max() keeps the first of equal candidates and leaves the input untouched.
    best = BestBreakdown(
        by_goals=max(scores, key=lambda score: score.breakdown.goals_score),
        by_assists=max(scores, key=lambda score: score.breakdown.assists_score),
        by_appearances=max(scores, key=lambda score: score.breakdown.appearances_score),
        by_social=max(scores, key=lambda score: score.breakdown.social_score),
    )
    return ComparisonMetrics(
        max_influence=max(normalized),
        min_influence=min(normalized),
        avg_influence=fmean(normalized),
        best_breakdown=best,
    )
