"""Mock order book, trade tape, and order tabs around a reference price.

These are regenerated from scratch on every request; nothing here is
cached or persisted.
"""

import random
from enum import Enum

from pydantic import BaseModel


class TradeSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderStatus(str, Enum):
    OPEN = "open"
    FILLED = "filled"
    CANCELLED = "cancelled"


class OrderBookEntry(BaseModel):
    """One price level. ``total`` is the cumulative amount within its side."""

    price: float
    amount: float
    is_bid: bool
    total: float = 0.0


class Trade(BaseModel):
    price: float
    amount: float
    timestamp: int
    side: TradeSide


class Order(BaseModel):
    """A demo order row as shown in the order-status tabs."""

    id: str
    type: str  # "Buy" or "Sell"
    pair: str
    price: str
    amount: str
    executed: str
    timestamp: int
    status: OrderStatus


class OrderTabs(BaseModel):
    open: list[Order]
    filled: list[Order]
    cancelled: list[Order]


# Bid/ask levels sit within this fraction of the reference price
BOOK_SPREAD = 0.002
TRADE_SPREAD = 0.002
MIN_AMOUNT = 0.001
AMOUNT_RANGE = 0.1
TRADE_INTERVAL_MS = 60_000


def _random_amount(rng: random.Random) -> float:
    return rng.random() * AMOUNT_RANGE + MIN_AMOUNT


def generate_order_book(
    base_price: float,
    levels: int = 12,
    rng: random.Random | None = None,
) -> list[OrderBookEntry]:
    """Build a random order book around ``base_price``.

    Each level is a bid or an ask with equal probability. Bids are priced
    up to BOOK_SPREAD below the reference, asks up to BOOK_SPREAD above.

    Returns:
        Bids first (highest price first), then asks (lowest price first).
    """
    rng = rng if rng is not None else random.Random()

    bids: list[OrderBookEntry] = []
    asks: list[OrderBookEntry] = []
    for _ in range(levels):
        is_bid = rng.random() > 0.5
        variation = rng.random() * BOOK_SPREAD
        price = base_price * (1 - variation) if is_bid else base_price * (1 + variation)
        entry = OrderBookEntry(price=price, amount=_random_amount(rng), is_bid=is_bid)
        (bids if is_bid else asks).append(entry)

    bids.sort(key=lambda e: e.price, reverse=True)
    asks.sort(key=lambda e: e.price)

    book: list[OrderBookEntry] = []
    for side in (bids, asks):
        running = 0.0
        for entry in side:
            running += entry.amount
            book.append(entry.model_copy(update={"total": running}))
    return book


def generate_trades(
    base_price: float,
    now_ms: int,
    count: int = 20,
    rng: random.Random | None = None,
) -> list[Trade]:
    """Build a trade tape of ``count`` trades, one minute apart, newest first."""
    rng = rng if rng is not None else random.Random()

    trades = []
    for i in range(count):
        price = base_price + (rng.random() - 0.5) * (base_price * TRADE_SPREAD)
        trades.append(
            Trade(
                price=price,
                amount=_random_amount(rng),
                timestamp=now_ms - i * TRADE_INTERVAL_MS,
                side=TradeSide.BUY if rng.random() > 0.5 else TradeSide.SELL,
            )
        )
    trades.sort(key=lambda t: t.timestamp, reverse=True)
    return trades


def generate_order_tabs(now_ms: int) -> OrderTabs:
    """Return the fixed demo orders for the open/filled/cancelled tabs."""
    return OrderTabs(
        open=[
            Order(
                id="1",
                type="Buy",
                pair="BTC/ETH",
                price="0.001230BTC",
                amount="0.001230ETH",
                executed="0.000ETH",
                timestamp=now_ms - 60_000,
                status=OrderStatus.OPEN,
            ),
        ],
        filled=[
            Order(
                id="4",
                type="Buy",
                pair="BTC/ETH",
                price="0.001220BTC",
                amount="0.001220ETH",
                executed="0.001220ETH",
                timestamp=now_ms - 300_000,
                status=OrderStatus.FILLED,
            ),
        ],
        cancelled=[
            Order(
                id="8",
                type="Buy",
                pair="BTC/ETH",
                price="0.001200BTC",
                amount="0.005000ETH",
                executed="0.000ETH",
                timestamp=now_ms - 86_400_000,
                status=OrderStatus.CANCELLED,
            ),
        ],
    )
