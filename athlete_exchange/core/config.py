"""
Exchange configuration loaded from environment variables.

Defaults come from `athlete_exchange.core.constants`; any field can be
overridden with an ``EXCHANGE_`` prefixed environment variable, e.g.
``EXCHANGE_FEE_RATE=0.01``.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from athlete_exchange.core.constants import (
    DEFAULT_LEADERBOARD_LIMIT,
    DEFAULT_STARTING_CASH,
    DEFAULT_TRADE_HISTORY_LIMIT,
    MAX_SHARES_PER_TRADE,
    MIN_PRICE,
    SENTIMENT_IMPACT,
    TRADING_FEE_RATE,
    VOLUME_IMPACT,
)
from athlete_exchange.core.exceptions.exchange import ConfigurationError


class ExchangeSettings(BaseSettings):
    """Runtime settings for the ledger and pricing engine."""

    model_config = SettingsConfigDict(env_prefix="EXCHANGE_", env_file=".env", extra="ignore")

    fee_rate: Decimal = Field(default=TRADING_FEE_RATE, ge=0, lt=1)
    starting_cash: Decimal = Field(default=DEFAULT_STARTING_CASH, ge=0)
    max_shares_per_trade: int = Field(default=MAX_SHARES_PER_TRADE, gt=0)
    serialize_all_trades: bool = False  # one global trade lock instead of one per user

    min_price: Decimal = Field(default=MIN_PRICE, gt=0)
    volume_impact: float = Field(default=VOLUME_IMPACT, ge=0)
    sentiment_impact: float = Field(default=SENTIMENT_IMPACT, ge=0)

    trade_history_limit: int = Field(default=DEFAULT_TRADE_HISTORY_LIMIT, gt=0)
    leaderboard_limit: int = Field(default=DEFAULT_LEADERBOARD_LIMIT, gt=0)

    log_level: str = "INFO"


@lru_cache
def get_settings() -> ExchangeSettings:
    """Get cached settings instance.

    Raises:
        ConfigurationError: If an EXCHANGE_ variable holds an invalid value
    """
    try:
        return ExchangeSettings()
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid exchange settings: {e.error_count()} errors") from e
