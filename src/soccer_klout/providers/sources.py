"""Player sources: the fixed demo dataset and the source protocol."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Protocol, Sequence

from soccer_klout.models import PlayerRecord


class PlayerSource(Protocol):
    """Anything that can look up player records."""

    def search(self, query: str) -> List[PlayerRecord]:
        ...

    def get_by_id(self, player_id: str) -> PlayerRecord | None:
        ...

    def get_top(self, limit: int) -> List[PlayerRecord]:
        ...


MOCK_PLAYERS: Sequence[Mapping[str, Any]] = (
    {
        "id": "1",
        "name": "Lionel Messi",
        "club": "Inter Miami CF",
        "position": "Forward",
        "nationality": "Argentina",
        "age": 37,
        "photo": "https://crests.football-data.org/1.svg",
        "shirtNumber": 10,
        "aliases": ["messi"],
        "stats": {"goals": 807, "assists": 318, "appearances": 1000, "socialMentions": 5_000_000},
    },
    {
        "id": "2",
        "name": "Cristiano Ronaldo",
        "club": "Al-Nassr",
        "position": "Forward",
        "nationality": "Portugal",
        "age": 39,
        "photo": "https://crests.football-data.org/2.svg",
        "shirtNumber": 7,
        "aliases": ["ronaldo"],
        "stats": {"goals": 890, "assists": 270, "appearances": 1150, "socialMentions": 6_000_000},
    },
    {
        "id": "3",
        "name": "Erling Haaland",
        "club": "Manchester City",
        "position": "Forward",
        "nationality": "Norway",
        "age": 24,
        "photo": "https://crests.football-data.org/3.svg",
        "shirtNumber": 9,
        "aliases": ["haaland"],
        "stats": {"goals": 186, "assists": 45, "appearances": 278, "socialMentions": 2_500_000},
    },
    {
        "id": "4",
        "name": "Kylian Mbappé",
        "club": "Paris Saint-Germain",
        "position": "Forward",
        "nationality": "France",
        "age": 25,
        "photo": "https://crests.football-data.org/4.svg",
        "shirtNumber": 7,
        "aliases": ["mbappé", "mbappe"],
        "stats": {"goals": 312, "assists": 95, "appearances": 456, "socialMentions": 3_500_000},
    },
    {
        "id": "5",
        "name": "Neymar Jr",
        "club": "Al-Hilal",
        "position": "Forward",
        "nationality": "Brazil",
        "age": 32,
        "photo": "https://crests.football-data.org/5.svg",
        "shirtNumber": 11,
        "aliases": ["neymar"],
        "stats": {"goals": 140, "assists": 102, "appearances": 312, "socialMentions": 4_000_000},
    },
)


class MockPlayerSource:
    """In-memory source over a fixed list of player payloads."""

    def __init__(self, players: Iterable[Mapping[str, Any]] = MOCK_PLAYERS):
        self._records: List[PlayerRecord] = [PlayerRecord.from_payload(payload) for payload in players]
        self._by_id: Dict[str, PlayerRecord] = {record.profile.id: record for record in self._records}

    def search(self, query: str) -> List[PlayerRecord]:
        needle = query.casefold()
        return [
            record
            for record in self._records
            if needle in record.profile.name.casefold()
            or any(needle in alias for alias in record.aliases)
        ]

    def get_by_id(self, player_id: str) -> PlayerRecord | None:
        return self._by_id.get(player_id)

    def get_top(self, limit: int) -> List[PlayerRecord]:
        return self._records[: max(0, limit)]
