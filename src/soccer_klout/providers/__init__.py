"""Player data sources and the cached provider in front of them."""

from .remote import RemotePlayerSource
from .service import PlayerDataProvider, build_provider, calculate_match_score
from .sources import MOCK_PLAYERS, MockPlayerSource, PlayerSource

__all__ = [
    "MOCK_PLAYERS",
    "MockPlayerSource",
    "PlayerDataProvider",
    "PlayerSource",
    "RemotePlayerSource",
    "build_provider",
    "calculate_match_score",
]
