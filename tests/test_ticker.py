"""Tests for ticker summaries and chart price bounds."""

import pytest

from app.models.candle import Candle
from app.models.catalog import PairKey, get_time_range
from app.services.ticker import (
    PriceBounds,
    build_ticker,
    chart_bounds,
    price_to_ratio,
)

D7 = get_time_range("7D")


def _candle(ts: int, low: float, high: float) -> Candle:
    mid = (low + high) / 2
    return Candle(timestamp=ts, open=mid, high=high, low=low, close=mid, volume=1)


def test_ticker_change_uses_last_two_closes(initialized_store):
    series = initialized_store.get_series(PairKey.USDBTC, D7)

    ticker = build_ticker(initialized_store, PairKey.USDBTC, D7)

    expected_change = series[-1].close - series[-2].close
    assert ticker.symbol == "USD/BTC"
    assert ticker.price == series[-1].close
    assert ticker.change == pytest.approx(expected_change)
    assert ticker.change_percent == pytest.approx(expected_change / series[-2].close * 100)


def test_ticker_volume_and_range(initialized_store):
    stats = initialized_store.price_stats(PairKey.USDETH, D7)

    ticker = build_ticker(initialized_store, "USDETH", D7)

    assert ticker.high == stats.high
    assert ticker.low == stats.low
    assert ticker.volume == stats.volume
    assert ticker.secondary_volume == pytest.approx(stats.volume * 0.7)


def test_ticker_unknown_pair(initialized_store):
    assert build_ticker(initialized_store, "USDXYZ", D7) is None


def test_ticker_before_initialize_has_no_change(store):
    ticker = build_ticker(store, PairKey.USDSOL, D7)

    assert ticker.price == 145.23
    assert ticker.change == 0
    assert ticker.change_percent == 0
    assert ticker.volume == 0


def test_chart_bounds_pads_ten_percent():
    bounds = chart_bounds([_candle(0, 90, 100), _candle(1, 95, 110)])

    assert bounds.min == pytest.approx(88.0)
    assert bounds.max == pytest.approx(112.0)


def test_chart_bounds_flat_series_has_zero_padding():
    flat = Candle(timestamp=0, open=5, high=5, low=5, close=5, volume=0)

    bounds = chart_bounds([flat])

    assert bounds == PriceBounds(min=5, max=5)
    assert price_to_ratio(5, bounds) == 0.5


def test_chart_bounds_empty():
    assert chart_bounds([]) == PriceBounds(min=0, max=0)


def test_price_to_ratio():
    bounds = PriceBounds(min=100, max=200)

    assert price_to_ratio(100, bounds) == 0
    assert price_to_ratio(150, bounds) == 0.5
    assert price_to_ratio(200, bounds) == 1


def test_ticker_figures_come_from_one_series(initialized_store, clock, monkeypatch):
    """A tick landing mid-summary cannot split price from the range stats."""
    read_series = initialized_store.get_series
    seen = []

    def get_series_then_tick(pair_key, time_range):
        series = read_series(pair_key, time_range)
        seen.append(series)
        clock.advance(60_000)
        initialized_store.tick(pair_key)
        return series

    monkeypatch.setattr(initialized_store, "get_series", get_series_then_tick)

    ticker = build_ticker(initialized_store, PairKey.USDBTC, D7)

    assert len(seen) == 1
    series = seen[0]
    assert ticker.price == series[-1].close
    assert ticker.price != initialized_store.current_price(PairKey.USDBTC)
    assert ticker.high == max(c.high for c in series)
    assert ticker.low == min(c.low for c in series)
    assert ticker.volume == pytest.approx(sum(c.volume for c in series))
