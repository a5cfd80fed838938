"""Derived influence scores. Recomputed per request, never persisted."""

from __future__ import annotations

from .player import KloutModel


class InfluenceBreakdown(KloutModel):
    goals_score: float
    assists_score: float
    appearances_score: float
    social_score: float

    def total(self) -> float:
        return self.goals_score + self.assists_score + self.appearances_score + self.social_score


class InfluenceScore(KloutModel):
    player_id: str
    player_name: str
    influence: float
    normalized_influence: float
    breakdown: InfluenceBreakdown
    rank: int | None = None


class BestBreakdown(KloutModel):
    by_goals: InfluenceScore
    by_assists: InfluenceScore
    by_appearances: InfluenceScore
    by_social: InfluenceScore


class ComparisonMetrics(KloutModel):
    max_influence: float
    min_influence: float
    avg_influence: float
    best_breakdown: BestBreakdown
