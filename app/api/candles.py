"""Candle series API endpoints.

Serves chart data per currency pair and time range from the in-memory
store, and lets clients push a live tick on demand.
"""

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from app.models.catalog import TIME_RANGES, PairKey, TimeRange
from app.schemas.candle import CandleResponse, SeriesResponse
from app.services.market_data_store import MarketDataStore
from app.store import get_store

router = APIRouter(prefix="/pairs", tags=["candles"])


# Valid time range values, derived from the catalog
RangeEnum = Enum(
    "RangeEnum", [(r.value, r.value) for r in TIME_RANGES], type=str
)
DEFAULT_RANGE = RangeEnum(TIME_RANGES[0].value)

_RANGES_BY_VALUE: dict[str, TimeRange] = {r.value: r for r in TIME_RANGES}


def to_time_range(value: RangeEnum) -> TimeRange:
    return _RANGES_BY_VALUE[value.value]


@router.get("/{pair_key}/candles", response_model=SeriesResponse)
async def get_candles(
    pair_key: PairKey,
    range: RangeEnum = Query(default=DEFAULT_RANGE, description="Lookback window"),
    store: MarketDataStore = Depends(get_store),
) -> SeriesResponse:
    """Return the candle series for a pair over a time range.

    Candles are ordered by timestamp ascending (oldest first). Requesting
    a range longer than anything generated so far extends history backward.
    """
    time_range = to_time_range(range)
    series = store.get_series(pair_key, time_range)
    return SeriesResponse(
        pair_key=pair_key.value,
        range=time_range.value,
        candles=[CandleResponse.model_validate(c) for c in series],
    )


@router.post("/{pair_key}/tick", response_model=CandleResponse)
async def post_tick(
    pair_key: PairKey,
    store: MarketDataStore = Depends(get_store),
) -> CandleResponse:
    """Append one live candle to the pair's history and return it."""
    candle = store.tick(pair_key)
    if candle is None:
        raise HTTPException(
            status_code=404, detail=f"No history for {pair_key.value} -- not initialized"
        )
    return CandleResponse.model_validate(candle)
