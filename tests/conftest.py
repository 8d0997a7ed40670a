"""Shared test fixtures: controllable clock, seeded store, HTTP client."""

import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.models.catalog import MS_PER_DAY, PairKey
from app.services.market_data_store import MarketDataStore
from app.services.price_generator import PriceSeriesGenerator
from app.store import PairSelection

# 2026-02-16 10:00:00 UTC
NOW_MS = 1_771_236_000_000
SEVEN_DAY_INTERVAL_MS = 7 * MS_PER_DAY // 20


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now_ms: int = NOW_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


# ---------------------------------------------------------------------------
# Store (function-scoped)
# ---------------------------------------------------------------------------
@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Uninitialized store with a seeded generator and a frozen clock."""
    return MarketDataStore(
        generator=PriceSeriesGenerator(rng=random.Random(1234)),
        clock=clock,
    )


@pytest.fixture
def initialized_store(store):
    store.initialize()
    return store


@pytest.fixture
def selection():
    return PairSelection([PairKey.USDBTC])


# ---------------------------------------------------------------------------
# FastAPI test client (function-scoped)
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def client(initialized_store, selection):
    """Async HTTP client with the test store and selection injected."""
    from app.main import app
    from app.store import get_selection, get_store

    app.dependency_overrides[get_store] = lambda: initialized_store
    app.dependency_overrides[get_selection] = lambda: selection

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
