"""Dashboard header figures and chart price bounds derived from the store."""

from collections.abc import Sequence
from dataclasses import dataclass

from app.models.candle import Candle
from app.models.catalog import PairKey, TimeRange, resolve_pair_key
from app.services.market_data_store import MarketDataStore, summarize

# Share of primary volume reported as the secondary-asset volume
SECONDARY_VOLUME_RATIO = 0.7
CHART_PADDING_RATIO = 0.1


@dataclass(frozen=True)
class TickerSummary:
    pair_key: PairKey
    symbol: str
    price: float
    change: float
    change_percent: float
    high: float
    low: float
    volume: float
    secondary_volume: float


@dataclass(frozen=True)
class PriceBounds:
    min: float = 0.0
    max: float = 0.0


def build_ticker(
    store: MarketDataStore,
    pair_key: PairKey | str,
    time_range: TimeRange,
) -> TickerSummary | None:
    """Summarize a pair over a range for the dashboard header.

    Change compares the last two closes in the range series, not the first
    and last. Returns None for a pair key outside the catalog.
    """
    key = resolve_pair_key(pair_key)
    if key is None or key not in store.pair_keys:
        return None

    # Price, change and stats all come from one series snapshot
    series = store.get_series(key, time_range)
    stats = summarize(series)
    price = series[-1].close if series else store.current_price(key)

    change = 0.0
    change_percent = 0.0
    if len(series) > 1:
        previous_close = series[-2].close
        change = series[-1].close - previous_close
        change_percent = (change / previous_close) * 100 if previous_close > 0 else 0.0

    return TickerSummary(
        pair_key=key,
        symbol=store.pair(key).symbol,
        price=price,
        change=change,
        change_percent=change_percent,
        high=stats.high,
        low=stats.low,
        volume=stats.volume,
        secondary_volume=stats.volume * SECONDARY_VOLUME_RATIO,
    )


def chart_bounds(candles: Sequence[Candle]) -> PriceBounds:
    """Vertical price bounds for a chart, padded by 10% of the range.

    A flat series (max == min) gets zero padding; an empty one gets zeros.
    """
    if not candles:
        return PriceBounds()

    lowest = min(c.low for c in candles)
    highest = max(c.high for c in candles)
    padding = (highest - lowest) * CHART_PADDING_RATIO
    return PriceBounds(min=lowest - padding, max=highest + padding)


def price_to_ratio(price: float, bounds: PriceBounds) -> float:
    """Position of ``price`` within ``bounds`` as a fraction from the bottom.

    Zero-height bounds place every price at the midpoint.
    """
    height = bounds.max - bounds.min
    if height <= 0:
        return 0.5
    return (price - bounds.min) / height
