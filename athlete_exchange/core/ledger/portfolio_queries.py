"""
Read-side queries over holdings and the trade log.

Valuations here always use live instrument prices, never the cached
`User.portfolio_value` or `Holding.total_value` snapshots.
"""

from athlete_exchange.core.constants import DEFAULT_RECENT_TRADES_LIMIT, DEFAULT_TRADE_HISTORY_LIMIT
from athlete_exchange.core.exceptions.exchange import NotFoundError
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.results import PortfolioPosition, PortfolioSummary
from athlete_exchange.core.models.trade import Trade
from athlete_exchange.core.models.user import User
from athlete_exchange.core.types.money import ZERO_MONEY
from athlete_exchange.core.utils.validation import validate_limit


class PortfolioQueries:
    """Portfolio, history and valuation reads."""

    def __init__(self, repository: IExchangeRepository) -> None:
        self.repository = repository

    def get_portfolio(self, user_id: int) -> list[PortfolioPosition]:
        """A user's holdings joined with their instruments.

        Raises:
            NotFoundError: If the user does not exist
        """
        self._require_user(user_id)
        return [
            PortfolioPosition(holding=holding, instrument=self._require_instrument(holding.instrument_id))
            for holding in self.repository.list_holdings(user_id)
        ]

    def get_portfolio_summary(self, user_id: int) -> PortfolioSummary:
        """Total value, cost and gain of a user's holdings at current prices."""
        user = self._require_user(user_id)
        total_value = ZERO_MONEY
        total_cost = ZERO_MONEY
        for position in self.get_portfolio(user_id):
            total_value += position.market_value
            total_cost += position.holding.cost_basis()
        return PortfolioSummary(
            user_id=user_id, cash=user.cash, total_value=total_value, total_cost=total_cost
        )

    def get_trade_history(
        self, user_id: int, limit: int = DEFAULT_TRADE_HISTORY_LIMIT
    ) -> list[Trade]:
        """A user's trades, newest first.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If limit is not a positive integer
        """
        validate_limit(limit)
        self._require_user(user_id)
        return self.repository.list_trades(user_id, limit)

    def get_recent_trades(self, limit: int = DEFAULT_RECENT_TRADES_LIMIT) -> list[Trade]:
        """Trades across all users, newest first."""
        validate_limit(limit)
        return self.repository.list_recent_trades(limit)

    def _require_user(self, user_id: int) -> User:
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def _require_instrument(self, instrument_id: int) -> Instrument:
        instrument = self.repository.get_instrument(instrument_id)
        if instrument is None:
            raise NotFoundError("instrument", instrument_id)
        return instrument
