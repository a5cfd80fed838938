"""Influence weight sets for supported positions and leagues."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable


@dataclass(frozen=True)
class InfluenceWeights:
    goals: float
    assists: float
    appearances: float
    social_mentions: float

    def averaged_with(self, other: "InfluenceWeights") -> "InfluenceWeights":
        """Field-by-field arithmetic mean of two weight sets."""

        return InfluenceWeights(
            goals=(self.goals + other.goals) / 2,
            assists=(self.assists + other.assists) / 2,
            appearances=(self.appearances + other.appearances) / 2,
            social_mentions=(self.social_mentions + other.social_mentions) / 2,
        )


DEFAULT_WEIGHTS = InfluenceWeights(goals=3, assists=2, appearances=1, social_mentions=0.5)


_POSITION_WEIGHTS: Dict[str, InfluenceWeights] = {
    "Forward": InfluenceWeights(goals=4, assists=2.5, appearances=1, social_mentions=0.6),
    "Midfielder": InfluenceWeights(goals=2.5, assists=3, appearances=1.2, social_mentions=0.5),
    "Defender": InfluenceWeights(goals=1.5, assists=1.5, appearances=2, social_mentions=0.3),
    "Goalkeeper": InfluenceWeights(goals=0, assists=0, appearances=3, social_mentions=0.2),
}

_LEAGUE_WEIGHTS: Dict[str, InfluenceWeights] = {
    "Premier_League": InfluenceWeights(goals=3.5, assists=2.2, appearances=1, social_mentions=0.4),
    "La_Liga": InfluenceWeights(goals=3, assists=2, appearances=1, social_mentions=0.6),
    "Serie_A": InfluenceWeights(goals=2.8, assists=1.8, appearances=1.2, social_mentions=0.3),
    "Bundesliga": InfluenceWeights(goals=3.2, assists=2, appearances=0.9, social_mentions=0.5),
    "Ligue_1": InfluenceWeights(goals=3, assists=2.1, appearances=1, social_mentions=0.7),
}


def iter_positions() -> Iterable[str]:
    return _POSITION_WEIGHTS.keys()


def iter_leagues() -> Iterable[str]:
    return _LEAGUE_WEIGHTS.keys()


def get_weights_by_position(position: str | None) -> InfluenceWeights:
    """Weights for a position, falling back to the defaults when unknown."""

    return _POSITION_WEIGHTS.get(position or "", DEFAULT_WEIGHTS)


def get_weights_by_league(league: str | None) -> InfluenceWeights:
    """Weights for a league, falling back to the defaults when unknown."""

    return _LEAGUE_WEIGHTS.get(league or "", DEFAULT_WEIGHTS)

