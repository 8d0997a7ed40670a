"""Pydantic response schemas for candle series and chart figures."""

from pydantic import BaseModel, ConfigDict


class CandleResponse(BaseModel):
    """Response model for an individual candle (timestamp in ms)."""

    model_config = ConfigDict(from_attributes=True)

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float


class SeriesResponse(BaseModel):
    """Candle series for one pair and range, oldest first."""

    pair_key: str
    range: str
    candles: list[CandleResponse]


class PriceStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    high: float
    low: float
    volume: float


class PriceBoundsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    min: float
    max: float


class TickerResponse(BaseModel):
    """Dashboard header figures with display strings alongside raw values."""

    pair_key: str
    symbol: str
    price: float
    change: float
    change_percent: float
    high: float
    low: float
    volume: float
    secondary_volume: float
    price_display: str
    change_percent_display: str
    high_display: str
    low_display: str
    volume_display: str
