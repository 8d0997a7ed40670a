"""OHLCV candle data model."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Candle(BaseModel):
    """A single synthetic OHLCV point.

    Timestamps are integer milliseconds since the Unix epoch. Candles are
    frozen: history grows by appending new points, never by editing old ones.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    open: float = Field(gt=0)
    high: float = Field(gt=0)
    low: float = Field(gt=0)
    close: float = Field(gt=0)
    volume: float = Field(ge=0)

    @model_validator(mode="after")
    def check_wicks(self) -> "Candle":
        """Reject candles whose wicks do not contain the body."""
        if self.low > min(self.open, self.close):
            raise ValueError("low must be <= min(open, close)")
        if self.high < max(self.open, self.close):
            raise ValueError("high must be >= max(open, close)")
        return self
