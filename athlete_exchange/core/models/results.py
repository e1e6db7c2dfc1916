"""
Result types returned by the ledger's read and write paths.
"""

from dataclasses import dataclass
from decimal import Decimal

from athlete_exchange.core.exceptions.exchange import TradeError
from athlete_exchange.core.models.holding import Holding
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.trade import Trade
from athlete_exchange.core.types.money import ZERO, round_money, round_percentage


@dataclass(frozen=True)
class TradeResult:
    """Outcome of `Ledger.execute_trade`: exactly one of `trade` or `error` is set."""

    trade: Trade | None = None
    error: TradeError | None = None

    def __post_init__(self) -> None:
        if (self.trade is None) == (self.error is None):
            raise ValueError("TradeResult requires exactly one of trade or error")

    @property
    def ok(self) -> bool:
        """Check if the trade was committed."""
        return self.trade is not None

    def unwrap(self) -> Trade:
        """Return the committed trade or raise the rejection."""
        if self.error is not None:
            raise self.error
        if self.trade is None:
            raise ValueError("TradeResult requires exactly one of trade or error")
        return self.trade


@dataclass(frozen=True)
class PortfolioPosition:
    """A holding joined with its instrument and valued at the current price."""

    holding: Holding
    instrument: Instrument

    @property
    def market_value(self) -> Decimal:
        return self.holding.market_value(self.instrument.current_price)

    @property
    def unrealized_gain(self) -> Decimal:
        return self.holding.unrealized_gain(self.instrument.current_price)


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregate valuation of a user's holdings."""

    user_id: int
    cash: Decimal
    total_value: Decimal
    total_cost: Decimal

    @property
    def total_gain(self) -> Decimal:
        return self.total_value - self.total_cost

    @property
    def total_gain_percent(self) -> Decimal:
        if self.total_cost <= ZERO:
            return round_percentage(ZERO)
        return round_percentage(self.total_gain / self.total_cost * 100)

    @property
    def net_worth(self) -> Decimal:
        return round_money(self.cash + self.total_value)
