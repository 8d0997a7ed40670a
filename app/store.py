"""Process-wide market data store and tick selection.

The store is built once from settings. HTTP handlers receive it through
the ``get_store`` dependency (overridable in tests); scheduler jobs import
``market_store`` directly since they run outside the request context.
"""

import random
import threading

from loguru import logger

from app.config import get_settings
from app.models.catalog import PairKey, resolve_pair_key
from app.services.market_data_store import MarketDataStore
from app.services.price_generator import PriceSeriesGenerator


class PairSelection:
    """Pairs the presentation layer currently has open; only these tick."""

    def __init__(self, pair_keys: list[PairKey] | None = None) -> None:
        self._lock = threading.Lock()
        self._pairs: set[PairKey] = set(pair_keys or [])

    def select(self, pair_key: PairKey) -> None:
        with self._lock:
            self._pairs.add(pair_key)

    def deselect(self, pair_key: PairKey) -> None:
        with self._lock:
            self._pairs.discard(pair_key)

    def replace(self, pair_keys: list[PairKey]) -> None:
        with self._lock:
            self._pairs = set(pair_keys)

    def snapshot(self) -> list[PairKey]:
        """Selected pairs in catalog order."""
        with self._lock:
            return [key for key in PairKey if key in self._pairs]


def build_store() -> MarketDataStore:
    """Construct a store configured from application settings."""
    settings = get_settings()
    seed = settings.random_seed
    return MarketDataStore(
        generator=PriceSeriesGenerator(rng=random.Random(seed)),
        depth_rng=random.Random(None if seed is None else seed + 1),
        batch_size=settings.batch_size,
        bootstrap_days=settings.bootstrap_days,
        history_volatility=settings.history_volatility,
        tick_volatility=settings.tick_volatility,
    )


def build_selection() -> PairSelection:
    settings = get_settings()
    keys = []
    for raw in settings.selected_pairs:
        key = resolve_pair_key(raw)
        if key is None:
            logger.warning("Ignoring unknown selected pair: {}", raw)
            continue
        keys.append(key)
    return PairSelection(keys)


market_store = build_store()
pair_selection = build_selection()


def get_store() -> MarketDataStore:
    """FastAPI dependency returning the process-wide store."""
    return market_store


def get_selection() -> PairSelection:
    """FastAPI dependency returning the process-wide tick selection."""
    return pair_selection
