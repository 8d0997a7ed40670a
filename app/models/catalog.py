"""Static catalogs: tradable currency pairs and chart time ranges."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PairKey(str, Enum):
    """Closed set of currency pair identifiers."""

    USDBTC = "USDBTC"
    USDETH = "USDETH"
    USDADA = "USDADA"
    USDSOL = "USDSOL"


class CurrencyPair(BaseModel):
    """Display metadata and seed price for a currency pair."""

    model_config = ConfigDict(frozen=True)

    pair_key: PairKey
    symbol: str
    name: str
    base_price: float = Field(gt=0)


class TimeRange(BaseModel):
    """A named lookback window for chart data."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    days: int = Field(gt=0)


MS_PER_DAY = 24 * 60 * 60 * 1000

TIME_RANGES: tuple[TimeRange, ...] = (
    TimeRange(label="7D", value="7D", days=7),
    TimeRange(label="1M", value="1M", days=30),
    TimeRange(label="3M", value="3M", days=90),
    TimeRange(label="1Y", value="1Y", days=365),
    TimeRange(label="5Y", value="5Y", days=1825),
    TimeRange(label="Max", value="Max", days=3650),
)

CURRENCY_PAIRS: dict[PairKey, CurrencyPair] = {
    PairKey.USDBTC: CurrencyPair(
        pair_key=PairKey.USDBTC, symbol="USD/BTC", name="Bitcoin", base_price=66360.55
    ),
    PairKey.USDETH: CurrencyPair(
        pair_key=PairKey.USDETH, symbol="USD/ETH", name="Ethereum", base_price=3245.67
    ),
    PairKey.USDADA: CurrencyPair(
        pair_key=PairKey.USDADA, symbol="USD/ADA", name="Cardano", base_price=0.45
    ),
    PairKey.USDSOL: CurrencyPair(
        pair_key=PairKey.USDSOL, symbol="USD/SOL", name="Solana", base_price=145.23
    ),
}


def resolve_pair_key(pair_key: "PairKey | str") -> PairKey | None:
    """Map a pair key or its string value to a PairKey, or None if unknown."""
    if isinstance(pair_key, PairKey):
        return pair_key
    try:
        return PairKey(pair_key)
    except ValueError:
        return None


def get_time_range(value: str) -> TimeRange | None:
    """Look up a catalog TimeRange by its value (e.g. "1M")."""
    for time_range in TIME_RANGES:
        if time_range.value == value:
            return time_range
    return None
