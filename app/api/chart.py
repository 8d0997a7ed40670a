"""Chart summary endpoints: ticker header, range statistics, price bounds."""

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.candles import DEFAULT_RANGE, RangeEnum, to_time_range
from app.models.catalog import PairKey
from app.schemas.candle import PriceBoundsResponse, PriceStatsResponse, TickerResponse
from app.services.market_data_store import MarketDataStore
from app.services.ticker import build_ticker, chart_bounds
from app.store import get_store
from app.utils.formatting import format_percentage, format_price, format_volume

router = APIRouter(prefix="/pairs", tags=["chart"])


@router.get("/{pair_key}/ticker", response_model=TickerResponse)
async def get_ticker(
    pair_key: PairKey,
    range: RangeEnum = Query(default=DEFAULT_RANGE),
    store: MarketDataStore = Depends(get_store),
) -> TickerResponse:
    """Return price, change, and range statistics for the dashboard header."""
    summary = build_ticker(store, pair_key, to_time_range(range))
    if summary is None:
        raise HTTPException(status_code=404, detail=f"Unknown pair {pair_key.value}")

    return TickerResponse(
        pair_key=summary.pair_key.value,
        symbol=summary.symbol,
        price=summary.price,
        change=summary.change,
        change_percent=summary.change_percent,
        high=summary.high,
        low=summary.low,
        volume=summary.volume,
        secondary_volume=summary.secondary_volume,
        price_display=format_price(summary.price),
        change_percent_display=format_percentage(summary.change_percent),
        high_display=format_price(summary.high),
        low_display=format_price(summary.low),
        volume_display=format_volume(summary.volume),
    )


@router.get("/{pair_key}/stats", response_model=PriceStatsResponse)
async def get_stats(
    pair_key: PairKey,
    range: RangeEnum = Query(default=DEFAULT_RANGE),
    store: MarketDataStore = Depends(get_store),
) -> PriceStatsResponse:
    """Return high, low, and total volume over the range (zeros if empty)."""
    stats = store.price_stats(pair_key, to_time_range(range))
    return PriceStatsResponse.model_validate(stats)


@router.get("/{pair_key}/bounds", response_model=PriceBoundsResponse)
async def get_bounds(
    pair_key: PairKey,
    range: RangeEnum = Query(default=DEFAULT_RANGE),
    store: MarketDataStore = Depends(get_store),
) -> PriceBoundsResponse:
    """Return padded vertical price bounds for rendering the chart."""
    series = store.get_series(pair_key, to_time_range(range))
    return PriceBoundsResponse.model_validate(chart_bounds(series))
