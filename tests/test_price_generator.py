"""Unit tests for PriceSeriesGenerator.

Covers forward walks, backward extension toward a connecting price, live
ticks, OHLC invariants, and seeded determinism. Pure unit tests with no
store or HTTP dependencies.
"""

import random

import pytest

from app.models.candle import Candle
from app.services.price_generator import PriceSeriesGenerator


def _assert_valid(candle: Candle) -> None:
    assert candle.low <= min(candle.open, candle.close)
    assert candle.high >= max(candle.open, candle.close)
    assert candle.volume >= 0
    assert candle.close > 0


class TestGenerate:
    """Tests for PriceSeriesGenerator.generate()."""

    def setup_method(self):
        self.gen = PriceSeriesGenerator(rng=random.Random(42))

    def test_count_and_timestamps(self):
        candles = self.gen.generate(
            count=20, interval_ms=1000, start_timestamp=5000, start_price=100.0, volatility=0.015
        )

        assert len(candles) == 20
        assert [c.timestamp for c in candles] == [5000 + i * 1000 for i in range(20)]

    def test_first_open_is_start_price_and_opens_chain(self):
        candles = self.gen.generate(
            count=20, interval_ms=1000, start_timestamp=0, start_price=66360.55, volatility=0.015
        )

        assert candles[0].open == 66360.55
        for prev, cur in zip(candles, candles[1:]):
            assert cur.open == prev.close

    def test_moves_bounded_by_volatility(self):
        candles = self.gen.generate(
            count=200, interval_ms=1, start_timestamp=0, start_price=50.0, volatility=0.015
        )

        for c in candles:
            assert abs(c.close / c.open - 1) <= 0.015 + 1e-12
            assert c.high <= max(c.open, c.close) * 1.008 + 1e-9
            assert c.low >= min(c.open, c.close) * (1 - 0.008) - 1e-9
            assert 500 <= c.volume <= 2500
            _assert_valid(c)

    def test_exact_values_from_seed(self):
        """First candle matches the documented draw order for a known seed."""
        rng = random.Random(7)
        delta = rng.uniform(-0.015, 0.015)
        close = 100.0 * (1 + delta)
        high = max(100.0, close) * (1 + rng.random() * 0.008)
        low = min(100.0, close) * (1 - rng.random() * 0.008)
        volume = rng.random() * 2000 + 500

        gen = PriceSeriesGenerator(rng=random.Random(7))
        candle = gen.generate(
            count=1, interval_ms=1, start_timestamp=0, start_price=100.0, volatility=0.015
        )[0]

        assert candle == Candle(
            timestamp=0, open=100.0, high=high, low=low, close=close, volume=volume
        )

    def test_same_seed_same_series(self):
        a = PriceSeriesGenerator(rng=random.Random(99)).generate(20, 10, 0, 10.0, 0.015)
        b = PriceSeriesGenerator(rng=random.Random(99)).generate(20, 10, 0, 10.0, 0.015)

        assert a == b

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"count": 0},
            {"interval_ms": 0},
            {"start_price": 0.0},
            {"start_price": -1.0},
            {"volatility": 0.0},
            {"volatility": 1.0},
        ],
    )
    def test_invalid_arguments_raise(self, kwargs):
        params = {
            "count": 5,
            "interval_ms": 10,
            "start_timestamp": 0,
            "start_price": 10.0,
            "volatility": 0.015,
        }
        params.update(kwargs)

        with pytest.raises(ValueError):
            self.gen.generate(**params)


class TestGenerateBackward:
    """Tests for PriceSeriesGenerator.generate_backward()."""

    def setup_method(self):
        self.gen = PriceSeriesGenerator(rng=random.Random(42))

    def test_newest_close_connects_to_end_price(self):
        candles = self.gen.generate_backward(
            count=20,
            interval_ms=1000,
            start_timestamp=0,
            boundary_timestamp=100_000,
            end_price=3245.67,
            volatility=0.015,
        )

        assert len(candles) == 20
        assert candles[-1].close == 3245.67

    def test_chronological_and_chained(self):
        candles = self.gen.generate_backward(
            count=20,
            interval_ms=1000,
            start_timestamp=0,
            boundary_timestamp=100_000,
            end_price=10.0,
            volatility=0.015,
        )

        timestamps = [c.timestamp for c in candles]
        assert timestamps == sorted(timestamps)
        assert timestamps[0] == 0
        for prev, cur in zip(candles, candles[1:]):
            assert prev.close == cur.open
        for c in candles:
            _assert_valid(c)

    def test_slots_at_or_after_boundary_are_dropped(self):
        """Slots 15..19 (15000ms+) collide with existing data and are skipped."""
        candles = self.gen.generate_backward(
            count=20,
            interval_ms=1000,
            start_timestamp=0,
            boundary_timestamp=15_000,
            end_price=10.0,
            volatility=0.015,
        )

        assert len(candles) == 15
        assert candles[-1].timestamp == 14_000
        assert candles[-1].close == 10.0

    def test_all_slots_past_boundary_yields_empty(self):
        candles = self.gen.generate_backward(
            count=5,
            interval_ms=1000,
            start_timestamp=10_000,
            boundary_timestamp=10_000,
            end_price=10.0,
            volatility=0.015,
        )

        assert candles == []


class TestNextCandle:
    """Tests for PriceSeriesGenerator.next_candle()."""

    def setup_method(self):
        self.gen = PriceSeriesGenerator(rng=random.Random(3))

    def test_opens_at_previous_close(self):
        candle = self.gen.next_candle(previous_close=145.23, timestamp=123, volatility=0.01)

        assert candle.open == 145.23
        assert candle.timestamp == 123
        assert abs(candle.close / candle.open - 1) <= 0.01 + 1e-12

    def test_tick_wicks_and_volume(self):
        for i in range(100):
            c = self.gen.next_candle(previous_close=1.0, timestamp=i)
            assert c.high <= max(c.open, c.close) * 1.005 + 1e-12
            assert c.low >= min(c.open, c.close) * 0.995 - 1e-12
            assert 500 <= c.volume <= 1500
            _assert_valid(c)


class TestCandleModel:
    """Candle rejects values that break the OHLC invariants."""

    def test_low_above_body_rejected(self):
        with pytest.raises(ValueError):
            Candle(timestamp=0, open=10, high=11, low=10.5, close=10.2, volume=1)

    def test_high_below_body_rejected(self):
        with pytest.raises(ValueError):
            Candle(timestamp=0, open=10, high=10.1, low=9, close=10.2, volume=1)

    def test_negative_volume_rejected(self):
        with pytest.raises(ValueError):
            Candle(timestamp=0, open=10, high=11, low=9, close=10, volume=-1)

    def test_frozen(self):
        candle = Candle(timestamp=0, open=10, high=11, low=9, close=10, volume=1)
        with pytest.raises(ValueError):
            candle.close = 12
