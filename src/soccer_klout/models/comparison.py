"""Side-by-side player comparison payloads."""

from __future__ import annotations

from typing import List

from pydantic import Field

from .influence import ComparisonMetrics, InfluenceScore
from .player import KloutModel, PlayerProfile, PlayerStats

MIN_COMPARE_PLAYERS = 2
MAX_COMPARE_PLAYERS = 5


class CompareRequest(KloutModel):
    player_ids: List[str] = Field(..., min_length=MIN_COMPARE_PLAYERS, max_length=MAX_COMPARE_PLAYERS)


class ComparedPlayer(KloutModel):
    profile: PlayerProfile
    stats: PlayerStats
    influence_score: InfluenceScore


class PlayerComparison(KloutModel):
    players: List[ComparedPlayer]
    max_influence: float
    metrics: ComparisonMetrics | None = None
