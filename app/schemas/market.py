"""Response schemas for catalogs, market depth, and tick selection."""

from pydantic import BaseModel, ConfigDict


class CurrencyPairResponse(BaseModel):
    pair_key: str
    symbol: str
    name: str
    price: float
    price_display: str


class TimeRangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    value: str
    days: int


class OrderBookEntryResponse(BaseModel):
    price: float
    amount: float
    is_bid: bool
    total: float
    price_display: str
    amount_display: str


class TradeResponse(BaseModel):
    price: float
    amount: float
    timestamp: int
    side: str
    price_display: str
    amount_display: str
    time_display: str


class OrderResponse(BaseModel):
    id: str
    type: str
    pair: str
    price: str
    amount: str
    executed: str
    timestamp: int
    status: str
    placed_display: str


class OrderTabsResponse(BaseModel):
    open: list[OrderResponse]
    filled: list[OrderResponse]
    cancelled: list[OrderResponse]


class SelectionResponse(BaseModel):
    """Pairs currently receiving scheduled ticks."""

    pairs: list[str]
