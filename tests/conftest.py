import pytest

from soccer_klout.cache import TTLCache
from soccer_klout.providers import MockPlayerSource, PlayerDataProvider


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(default_ttl=600, check_period=0, clock=clock)


@pytest.fixture
def provider(cache: TTLCache) -> PlayerDataProvider:
    return PlayerDataProvider(MockPlayerSource(), cache)
