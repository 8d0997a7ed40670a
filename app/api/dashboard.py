"""Dashboard API endpoints -- catalogs, order book, trade tape, order tabs."""

from fastapi import APIRouter, Depends

from app.models.catalog import TIME_RANGES, PairKey
from app.schemas.market import (
    CurrencyPairResponse,
    OrderBookEntryResponse,
    OrderResponse,
    OrderTabsResponse,
    TimeRangeResponse,
    TradeResponse,
)
from app.services.market_data_store import MarketDataStore
from app.services.market_depth import (
    Order,
    generate_order_book,
    generate_order_tabs,
    generate_trades,
)
from app.store import get_store
from app.utils.formatting import (
    format_amount,
    format_price,
    format_time,
    format_time_ago,
)

router = APIRouter(tags=["dashboard"])


@router.get("/pairs", response_model=list[CurrencyPairResponse])
async def list_pairs(
    store: MarketDataStore = Depends(get_store),
) -> list[CurrencyPairResponse]:
    """Return the currency pair catalog with each pair's current price."""
    pairs = []
    for key in store.pair_keys:
        pair = store.pair(key)
        price = store.current_price(key)
        pairs.append(
            CurrencyPairResponse(
                pair_key=key.value,
                symbol=pair.symbol,
                name=pair.name,
                price=price,
                price_display=format_price(price),
            )
        )
    return pairs


@router.get("/ranges", response_model=list[TimeRangeResponse])
async def list_ranges() -> list[TimeRangeResponse]:
    """Return the time range catalog in display order."""
    return [TimeRangeResponse.model_validate(r) for r in TIME_RANGES]


@router.get("/pairs/{pair_key}/orderbook", response_model=list[OrderBookEntryResponse])
async def get_order_book(
    pair_key: PairKey,
    store: MarketDataStore = Depends(get_store),
) -> list[OrderBookEntryResponse]:
    """Return a freshly generated order book around the current price."""
    book = generate_order_book(store.current_price(pair_key), rng=store.depth_rng)
    return [
        OrderBookEntryResponse(
            price=entry.price,
            amount=entry.amount,
            is_bid=entry.is_bid,
            total=entry.total,
            price_display=format_price(entry.price),
            amount_display=format_amount(entry.amount),
        )
        for entry in book
    ]


@router.get("/pairs/{pair_key}/trades", response_model=list[TradeResponse])
async def get_trades(
    pair_key: PairKey,
    store: MarketDataStore = Depends(get_store),
) -> list[TradeResponse]:
    """Return a freshly generated trade tape, newest first."""
    trades = generate_trades(
        store.current_price(pair_key), now_ms=store.clock(), rng=store.depth_rng
    )
    return [
        TradeResponse(
            price=trade.price,
            amount=trade.amount,
            timestamp=trade.timestamp,
            side=trade.side.value,
            price_display=format_price(trade.price),
            amount_display=format_amount(trade.amount),
            time_display=format_time(trade.timestamp),
        )
        for trade in trades
    ]


def _order_response(order: Order, now_ms: int) -> OrderResponse:
    return OrderResponse(
        **order.model_dump(exclude={"status"}),
        status=order.status.value,
        placed_display=format_time_ago(order.timestamp, now_ms),
    )


@router.get("/orders", response_model=OrderTabsResponse)
async def get_orders(
    store: MarketDataStore = Depends(get_store),
) -> OrderTabsResponse:
    """Return the demo orders for the open/filled/cancelled tabs."""
    now = store.clock()
    tabs = generate_order_tabs(now)
    return OrderTabsResponse(
        open=[_order_response(o, now) for o in tabs.open],
        filled=[_order_response(o, now) for o in tabs.filled],
        cancelled=[_order_response(o, now) for o in tabs.cancelled],
    )
