"""Player profile and statistics models."""

from __future__ import annotations

from typing import Any, List, Mapping, Tuple, Union

from pydantic import BaseModel, Field, NonNegativeFloat, NonNegativeInt
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class KloutModel(BaseModel):
    """Frozen base model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PlayerProfile(KloutModel):
    id: str = Field(..., min_length=1)
    name: str
    club: str
    position: str
    nationality: str
    age: int = Field(..., ge=0)
    photo: str | None = None
    shirt_number: int | None = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


# Whole counts stay ints on the wire; fractional values are kept as floats.
StatCount = Union[NonNegativeInt, NonNegativeFloat]


class PlayerStats(KloutModel):
    goals: StatCount
    assists: StatCount
    appearances: StatCount
    social_mentions: StatCount


class PlayerWithStats(KloutModel):
    profile: PlayerProfile
    stats: PlayerStats


class PlayerRecord(KloutModel):
    """Profile and stats as yielded by a player source.

    ``aliases`` holds the short names a player is commonly known by; they
    only take part in search matching.
    """

    profile: PlayerProfile
    stats: PlayerStats
    aliases: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PlayerRecord":
        """Build a record from a flat ``{...profile, stats, aliases}`` mapping."""

        if "stats" not in payload:
            raise ValueError(f"Player payload for {payload.get('id')!r} has no stats")
        return cls(
            profile=PlayerProfile.model_validate(payload),
            stats=PlayerStats.model_validate(payload["stats"]),
            aliases=tuple(str(alias).casefold() for alias in payload.get("aliases") or ()),
        )

    def with_stats(self) -> PlayerWithStats:
        return PlayerWithStats(profile=self.profile, stats=self.stats)


class SearchResult(PlayerProfile):
    match_score: int


class SearchResponse(KloutModel):
    results: List[SearchResult]
    total_count: int
