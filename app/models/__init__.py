"""Domain models package -- candles and the static pair/range catalogs."""

from app.models.candle import Candle
from app.models.catalog import (
    CURRENCY_PAIRS,
    MS_PER_DAY,
    TIME_RANGES,
    CurrencyPair,
    PairKey,
    TimeRange,
    get_time_range,
    resolve_pair_key,
)

__all__ = [
    "Candle",
    "CurrencyPair",
    "PairKey",
    "TimeRange",
    "CURRENCY_PAIRS",
    "TIME_RANGES",
    "MS_PER_DAY",
    "get_time_range",
    "resolve_pair_key",
]
