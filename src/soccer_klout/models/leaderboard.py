"""Leaderboard rows."""

from __future__ import annotations

from .influence import InfluenceScore
from .player import KloutModel, PlayerProfile


class LeaderboardEntry(KloutModel):
    rank: int
    player: PlayerProfile
    influence: InfluenceScore
