"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings sourced from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    # Restrict per-pair log lines to these keys (empty = all pairs)
    log_pairs: list[str] = []

    # Synthetic market data
    history_volatility: float = 0.015
    tick_volatility: float = 0.01
    batch_size: int = 20
    bootstrap_days: int = 7
    # Seeds the price generator; depth mocks use seed + 1 (unset = nondeterministic)
    random_seed: int | None = None

    # Scheduling
    scheduler_enabled: bool = True
    tick_interval_seconds: int = 5
    selected_pairs: list[str] = ["USDBTC"]

    @field_validator("history_volatility", "tick_volatility")
    @classmethod
    def check_volatility(cls, value: float) -> float:
        """Volatility is a fractional move per step and must lie in (0, 1)."""
        if not 0 < value < 1:
            raise ValueError("volatility must be between 0 and 1 (exclusive)")
        return value

    @field_validator("batch_size", "bootstrap_days", "tick_interval_seconds")
    @classmethod
    def check_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached singleton Settings instance."""
    return Settings()
