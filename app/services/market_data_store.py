"""In-memory synthetic market data store.

Owns, per currency pair, the complete generated candle history, the cached
per-range views derived from it, and the largest span generated so far.
History is bootstrapped with 7 days of data, extended backward on demand
when a longer range is requested, and advanced by live ticks driven from
the scheduler.

All state for one pair is guarded by that pair's lock. Stored sequences
are tuples and every mutation builds a new tuple, so a series handed to a
caller never changes underneath it.
"""

import random
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from app.models.candle import Candle
from app.models.catalog import (
    CURRENCY_PAIRS,
    MS_PER_DAY,
    TIME_RANGES,
    CurrencyPair,
    PairKey,
    TimeRange,
    resolve_pair_key,
)
from app.services.price_generator import PriceSeriesGenerator


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class PriceStats:
    """Aggregate high/low/volume over a range series."""

    high: float = 0.0
    low: float = 0.0
    volume: float = 0.0


def summarize(series: tuple[Candle, ...]) -> PriceStats:
    """High, low and total volume of a series; zeros when empty."""
    if not series:
        return PriceStats()
    return PriceStats(
        high=max(candle.high for candle in series),
        low=min(candle.low for candle in series),
        volume=sum(candle.volume for candle in series),
    )


@dataclass
class PairState:
    """Mutable per-pair record: history, cached views, generated span."""

    pair: CurrencyPair
    lock: threading.Lock = field(default_factory=threading.Lock)
    history: tuple[Candle, ...] = ()
    views: dict[str, tuple[Candle, ...]] = field(default_factory=dict)
    # Lookback days behind each cached view, keyed like views
    view_days: dict[str, int] = field(default_factory=dict)
    max_span_days: int = 0

    def reset(self) -> None:
        self.history = ()
        self.views = {}
        self.view_days = {}
        self.max_span_days = 0


class MarketDataStore:
    """Range cache and complete-history store for all configured pairs.

    Call ``initialize()`` once before anything else. Until then, and for
    pair keys outside the catalog, every read returns a neutral value
    (empty series, zero stats, ``None`` tick) instead of raising.

    Args:
        generator: Candle generator; a fresh unseeded one by default.
        clock: Callable returning the current time in ms since the epoch.
        pairs: Pair catalog to serve; defaults to ``CURRENCY_PAIRS``.
        batch_size: Candles produced per generation call.
        bootstrap_days: Span of the initial forward history.
        history_volatility: Per-step volatility for generated history.
        tick_volatility: Per-step volatility for live ticks.
        depth_rng: Random source for order book and trade tape mocks,
            separate from the generator stream.
    """

    def __init__(
        self,
        generator: PriceSeriesGenerator | None = None,
        clock: Callable[[], int] = now_ms,
        pairs: dict[PairKey, CurrencyPair] | None = None,
        batch_size: int = 20,
        bootstrap_days: int = 7,
        history_volatility: float = 0.015,
        tick_volatility: float = 0.01,
        depth_rng: random.Random | None = None,
    ) -> None:
        self.generator = generator if generator is not None else PriceSeriesGenerator()
        self.clock = clock
        self.batch_size = batch_size
        self.bootstrap_days = bootstrap_days
        self.history_volatility = history_volatility
        self.tick_volatility = tick_volatility
        self.depth_rng = depth_rng if depth_rng is not None else random.Random()

        catalog = pairs if pairs is not None else CURRENCY_PAIRS
        self._pairs: dict[PairKey, PairState] = {
            key: PairState(pair=pair) for key, pair in catalog.items()
        }
        self._init_lock = threading.Lock()
        self._initialized = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def pair_keys(self) -> list[PairKey]:
        return list(self._pairs)

    def pair(self, pair_key: PairKey | str) -> CurrencyPair | None:
        """Catalog entry for a configured pair, or None if unknown."""
        state = self._state(pair_key)
        return state.pair if state is not None else None

    def initialize(self) -> None:
        """Bootstrap 7-day history for every configured pair.

        Subsequent calls are no-ops until ``clear_all()`` is invoked.
        """
        with self._init_lock:
            if self._initialized:
                logger.debug("Market data store already initialized -- skipping")
                return

            for state in self._pairs.values():
                with state.lock:
                    self._bootstrap(state)

            self._initialized = True
            logger.info(
                "Market data store initialized | pairs={pairs} days={days}",
                pairs=[key.value for key in self._pairs],
                days=self.bootstrap_days,
            )

    def clear_pair(self, pair_key: PairKey | str) -> None:
        """Drop all history and cached views for one pair.

        The next ``get_series`` call for the pair regenerates a fresh
        bootstrap series.
        """
        state = self._state(pair_key)
        if state is None:
            return
        with state.lock:
            state.reset()
        logger.info("Cleared market data | pair={pair}", pair=state.pair.pair_key.value)

    def clear_all(self) -> None:
        """Drop every pair's state and return to the uninitialized condition."""
        with self._init_lock:
            # Flag drops before any pair is wiped; get_series checks it under
            # the pair lock, so a wiped pair is never re-bootstrapped.
            self._initialized = False
            for state in self._pairs.values():
                with state.lock:
                    state.reset()
        logger.info("Cleared market data for all pairs")

    # ------------------------------------------------------------------
    # Range cache
    # ------------------------------------------------------------------

    def get_series(
        self, pair_key: PairKey | str, time_range: TimeRange
    ) -> tuple[Candle, ...]:
        """Return candles for ``time_range``, ascending by timestamp.

        Serves the cached view when present; otherwise filters the complete
        history, or extends it backward when the range is longer than
        anything generated so far.
        """
        state = self._state(pair_key)
        if state is None:
            return ()
        with state.lock:
            if not self._initialized:
                logger.warning(
                    "get_series called before initialize() | pair={pair}",
                    pair=state.pair.pair_key.value,
                )
                return ()

            if not state.history:
                self._bootstrap(state)

            cached = state.views.get(time_range.value)
            if cached is not None:
                logger.debug(
                    "Range cache hit | pair={pair} range={range}",
                    pair=state.pair.pair_key.value,
                    range=time_range.value,
                )
                return cached

            if time_range.days <= state.max_span_days:
                view = self._filter_history(state.history, time_range.days, self.clock())
                state.views[time_range.value] = view
                state.view_days[time_range.value] = time_range.days
                logger.debug(
                    "Range view filtered | pair={pair} range={range} points={points}",
                    pair=state.pair.pair_key.value,
                    range=time_range.value,
                    points=len(view),
                )
                return view

            return self._extend_history(state, time_range)

    def history(self, pair_key: PairKey | str) -> tuple[Candle, ...]:
        """Return the complete generated history for a pair."""
        state = self._state(pair_key)
        if state is None:
            return ()
        with state.lock:
            return state.history

    def max_span(self, pair_key: PairKey | str) -> int:
        """Largest range (days) generated so far for a pair; 0 if none."""
        state = self._state(pair_key)
        if state is None:
            return 0
        with state.lock:
            return state.max_span_days

    def cached_ranges(self, pair_key: PairKey | str) -> list[str]:
        """Range values that currently hold a cached view for a pair."""
        state = self._state(pair_key)
        if state is None:
            return []
        with state.lock:
            return list(state.views)

    # ------------------------------------------------------------------
    # Live ticks
    # ------------------------------------------------------------------

    def tick(self, pair_key: PairKey | str) -> Candle | None:
        """Append one live candle to a pair's history.

        The new candle opens at the last close. Every cached range view for
        the pair is refiltered against the updated history.

        Returns:
            The appended candle, or None if the pair has no history.
        """
        state = self._state(pair_key)
        if state is None:
            return None

        with state.lock:
            if not state.history:
                logger.warning(
                    "Tick skipped -- no history | pair={pair}",
                    pair=state.pair.pair_key.value,
                )
                return None

            last = state.history[-1]
            now = self.clock()
            # Keep timestamps strictly increasing if the clock has not moved
            timestamp = max(now, last.timestamp + 1)

            candle = self.generator.next_candle(
                previous_close=last.close,
                timestamp=timestamp,
                volatility=self.tick_volatility,
            )
            state.history = state.history + (candle,)

            for range_value, days in state.view_days.items():
                state.views[range_value] = self._filter_history(state.history, days, now)

            logger.debug(
                "Tick appended | pair={pair} close={close:.6f} history={size}",
                pair=state.pair.pair_key.value,
                close=candle.close,
                size=len(state.history),
            )
            return candle

    # ------------------------------------------------------------------
    # Derived statistics
    # ------------------------------------------------------------------

    def current_price(self, pair_key: PairKey | str) -> float:
        """Last close in history, the base price if empty, 0 if unknown."""
        state = self._state(pair_key)
        if state is None:
            return 0.0
        with state.lock:
            if not state.history:
                return state.pair.base_price
            return state.history[-1].close

    def price_stats(self, pair_key: PairKey | str, time_range: TimeRange) -> PriceStats:
        """High, low and total volume over the range series."""
        return summarize(self.get_series(pair_key, time_range))

    # ------------------------------------------------------------------
    # Internals (callers hold state.lock)
    # ------------------------------------------------------------------

    def _state(self, pair_key: PairKey | str) -> PairState | None:
        key = resolve_pair_key(pair_key)
        if key is None:
            return None
        return self._pairs.get(key)

    def _bootstrap(self, state: PairState) -> None:
        span_ms = self.bootstrap_days * MS_PER_DAY
        now = self.clock()
        candles = self.generator.generate(
            count=self.batch_size,
            interval_ms=span_ms // self.batch_size,
            start_timestamp=now - span_ms,
            start_price=state.pair.base_price,
            volatility=self.history_volatility,
        )
        state.history = tuple(candles)
        state.views = {}
        state.view_days = {}
        bootstrap_range = next(
            (r for r in TIME_RANGES if r.days == self.bootstrap_days), None
        )
        if bootstrap_range is not None:
            state.views[bootstrap_range.value] = state.history
            state.view_days[bootstrap_range.value] = bootstrap_range.days
        state.max_span_days = self.bootstrap_days
        logger.debug(
            "Bootstrapped history | pair={pair} points={points} start_price={price}",
            pair=state.pair.pair_key.value,
            points=len(candles),
            price=state.pair.base_price,
        )

    def _extend_history(self, state: PairState, time_range: TimeRange) -> tuple[Candle, ...]:
        now = self.clock()
        from_days = state.max_span_days
        span_ms = (time_range.days - from_days) * MS_PER_DAY
        start = now - time_range.days * MS_PER_DAY
        boundary = now - from_days * MS_PER_DAY

        if state.history:
            earliest = state.history[0]
            connect_price = earliest.open
            boundary = min(boundary, earliest.timestamp)
        else:
            connect_price = state.pair.base_price

        older = self.generator.generate_backward(
            count=self.batch_size,
            interval_ms=span_ms // self.batch_size,
            start_timestamp=start,
            boundary_timestamp=boundary,
            end_price=connect_price,
            volatility=self.history_volatility,
        )
        merged = tuple(sorted(older + list(state.history), key=lambda c: c.timestamp))

        state.history = merged
        state.max_span_days = time_range.days
        state.views[time_range.value] = merged
        state.view_days[time_range.value] = time_range.days
        logger.debug(
            "History extended | pair={pair} range={range} added={added} total={total}",
            pair=state.pair.pair_key.value,
            range=time_range.value,
            added=len(older),
            total=len(merged),
        )
        return merged

    @staticmethod
    def _filter_history(
        history: tuple[Candle, ...], days: int, now: int
    ) -> tuple[Candle, ...]:
        cutoff = now - days * MS_PER_DAY
        return tuple(
            sorted(
                (candle for candle in history if candle.timestamp >= cutoff),
                key=lambda c: c.timestamp,
            )
        )
