"""Random-walk OHLCV generator for synthetic chart history.

Produces candle series forward from a starting price, backward toward a
known connecting price (for extending history into the past), and single
live ticks. The entropy source is an injected ``random.Random`` so callers
can seed it and assert exact values.
"""

import random

from app.models.candle import Candle


class PriceSeriesGenerator:
    """Generates synthetic candles via a uniform random walk.

    Each step draws ``delta ~ U[-volatility, +volatility]`` and moves the
    price by ``(1 + delta)``. Wicks extend the body by up to WICK_FACTOR on
    either side, so every candle satisfies ``low <= min(open, close)`` and
    ``high >= max(open, close)`` by construction.

    Attributes:
        WICK_FACTOR: Maximum fractional wick beyond the body for history.
        VOLUME_FLOOR: Minimum volume per candle.
        VOLUME_SPREAD: Random volume range added on top of the floor.
        TICK_WICK_FACTOR: Maximum fractional wick for live ticks.
        TICK_VOLUME_SPREAD: Random volume range for live ticks.
    """

    WICK_FACTOR = 0.008
    VOLUME_FLOOR = 500.0
    VOLUME_SPREAD = 2000.0
    TICK_WICK_FACTOR = 0.005
    TICK_VOLUME_SPREAD = 1000.0

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def generate(
        self,
        count: int,
        interval_ms: int,
        start_timestamp: int,
        start_price: float,
        volatility: float,
    ) -> list[Candle]:
        """Walk forward ``count`` steps from ``start_price``.

        Args:
            count: Number of candles to produce.
            interval_ms: Milliseconds between consecutive candles.
            start_timestamp: Timestamp of the first candle (ms since epoch).
            start_price: Open of the first candle.
            volatility: Maximum fractional move per step, in (0, 1).

        Returns:
            ``count`` candles in chronological order; each open equals the
            previous close.
        """
        self._validate(count, interval_ms, start_price, volatility)

        candles: list[Candle] = []
        current_price = start_price
        for i in range(count):
            open_ = current_price
            close = open_ * (1 + self._draw_delta(volatility))
            candles.append(
                self._build_candle(
                    timestamp=start_timestamp + i * interval_ms,
                    open_=open_,
                    close=close,
                    wick_factor=self.WICK_FACTOR,
                    volume_spread=self.VOLUME_SPREAD,
                )
            )
            current_price = close
        return candles

    def generate_backward(
        self,
        count: int,
        interval_ms: int,
        start_timestamp: int,
        boundary_timestamp: int,
        end_price: float,
        volatility: float,
    ) -> list[Candle]:
        """Walk backward from ``end_price`` to produce older history.

        Slots are laid out at ``start_timestamp + i * interval_ms`` and
        filled newest first. The newest kept candle closes at ``end_price``
        and each step solves ``open = close / (1 + delta)``. Slots at or
        after ``boundary_timestamp`` are skipped so the result never
        overlaps existing data.

        Returns:
            Up to ``count`` candles in chronological order.
        """
        self._validate(count, interval_ms, end_price, volatility)

        newest_first: list[Candle] = []
        current_price = end_price
        for i in range(count - 1, -1, -1):
            timestamp = start_timestamp + i * interval_ms
            if timestamp >= boundary_timestamp:
                continue

            close = current_price
            open_ = close / (1 + self._draw_delta(volatility))
            newest_first.append(
                self._build_candle(
                    timestamp=timestamp,
                    open_=open_,
                    close=close,
                    wick_factor=self.WICK_FACTOR,
                    volume_spread=self.VOLUME_SPREAD,
                )
            )
            current_price = open_

        newest_first.reverse()
        return newest_first

    def next_candle(
        self,
        previous_close: float,
        timestamp: int,
        volatility: float = 0.01,
    ) -> Candle:
        """Produce one live tick opening at ``previous_close``.

        Ticks use tighter wicks and a smaller volume range than history.
        """
        self._validate(1, 1, previous_close, volatility)

        close = previous_close * (1 + self._draw_delta(volatility))
        return self._build_candle(
            timestamp=timestamp,
            open_=previous_close,
            close=close,
            wick_factor=self.TICK_WICK_FACTOR,
            volume_spread=self.TICK_VOLUME_SPREAD,
        )

    def _draw_delta(self, volatility: float) -> float:
        return self.rng.uniform(-volatility, volatility)

    def _build_candle(
        self,
        timestamp: int,
        open_: float,
        close: float,
        wick_factor: float,
        volume_spread: float,
    ) -> Candle:
        high = max(open_, close) * (1 + self.rng.random() * wick_factor)
        low = min(open_, close) * (1 - self.rng.random() * wick_factor)
        volume = self.rng.random() * volume_spread + self.VOLUME_FLOOR
        return Candle(
            timestamp=timestamp,
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=volume,
        )

    @staticmethod
    def _validate(
        count: int, interval_ms: int, price: float, volatility: float
    ) -> None:
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        if price <= 0:
            raise ValueError(f"price must be positive, got {price}")
        if not 0 < volatility < 1:
            raise ValueError(f"volatility must be in (0, 1), got {volatility}")
