"""Canonical player models shared across providers, scoring and the API."""

from .comparison import (
    MAX_COMPARE_PLAYERS,
    MIN_COMPARE_PLAYERS,
    ComparedPlayer,
    CompareRequest,
    PlayerComparison,
)
from .influence import BestBreakdown, ComparisonMetrics, InfluenceBreakdown, InfluenceScore
from .leaderboard import LeaderboardEntry
from .player import (
    KloutModel,
    PlayerProfile,
    PlayerRecord,
    PlayerStats,
    PlayerWithStats,
    SearchResponse,
    SearchResult,
)

__all__ = [
    "BestBreakdown",
    "ComparedPlayer",
    "CompareRequest",
    "ComparisonMetrics",
    "InfluenceBreakdown",
    "InfluenceScore",
    "KloutModel",
    "LeaderboardEntry",
    "MAX_COMPARE_PLAYERS",
    "MIN_COMPARE_PLAYERS",
    "PlayerComparison",
    "PlayerProfile",
    "PlayerRecord",
    "PlayerStats",
    "PlayerWithStats",
    "SearchResponse",
    "SearchResult",
]
