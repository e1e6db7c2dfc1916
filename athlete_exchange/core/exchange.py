"""
Main Exchange class - orchestrates all exchange components.

This module provides the interface consumed by the (external) API layer by
composing the focused components: ledger, portfolio queries, ranking,
repricing and market statistics.
"""

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from loguru import logger

from athlete_exchange.core.config import ExchangeSettings, get_settings
from athlete_exchange.core.enums import InjuryStatus, PlayerPosition, TradeDirection
from athlete_exchange.core.exceptions.exchange import NotFoundError
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.ledger import Ledger, PortfolioQueries, TradeQuote
from athlete_exchange.core.market import (
    MarketOverview,
    MarketStats,
    RepricingReport,
    RepricingService,
    list_instrument,
)
from athlete_exchange.core.market.repricing import SnapshotInput
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.results import PortfolioPosition, PortfolioSummary, TradeResult
from athlete_exchange.core.models.trade import Trade
from athlete_exchange.core.models.user import User
from athlete_exchange.core.ranking import LeaderboardEntry, RankingService
from athlete_exchange.core.utils.decorators import log_operation
from athlete_exchange.core.utils.validation import validate_username


class Exchange:
    """Main Exchange implementation.

    Orchestrates exchange operations by composing focused components:
    - Ledger: trade validation and atomic commits
    - PortfolioQueries: holdings, summaries and trade history
    - RankingService: leaderboard
    - RepricingService: periodic price updates
    - MarketStats: market overview and trending instruments

    The repository is injected; nothing here owns global state.
    """

    def __init__(
        self,
        repository: IExchangeRepository,
        settings: ExchangeSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize Exchange with composition pattern."""
        self.repository = repository
        self.settings = settings or get_settings()
        clock = clock or (lambda: datetime.now(UTC))

        self._ledger = Ledger(repository, self.settings, clock=clock)
        self._queries = PortfolioQueries(repository)
        self._ranking = RankingService(repository)
        self._repricing = RepricingService(repository, self.settings)
        self._market = MarketStats(repository, clock=clock)

    # Users
    @log_operation
    def register_user(self, username: str, starting_cash: Decimal | None = None) -> User:
        """Register a user with the configured starting cash.

        Raises:
            ValidationError: If the username is malformed
            DuplicateUsernameError: If the username is taken
        """
        username = validate_username(username)
        cash = self.settings.starting_cash if starting_cash is None else starting_cash
        user = self.repository.create_user(username, cash)
        logger.info(f"Registered user {user.id} ({username}) with {user.cash}")
        return user

    def get_user(self, user_id: int) -> User:
        """Get a user by id or raise NotFoundError."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def get_user_by_username(self, username: str) -> User:
        """Get a user by username or raise NotFoundError."""
        user = self.repository.get_user_by_username(username)
        if user is None:
            raise NotFoundError("user", username)
        return user

    # Trading
    @log_operation
    def execute_trade(
        self,
        user_id: int,
        instrument_id: int,
        direction: TradeDirection | str,
        share_count: int,
    ) -> TradeResult:
        """Execute a trade; rejections come back inside the result."""
        return self._ledger.execute_trade(user_id, instrument_id, direction, share_count)

    def quote_trade(
        self, instrument_id: int, direction: TradeDirection | str, share_count: int
    ) -> TradeQuote:
        """Preview subtotal, fee and total at the current price."""
        return self._ledger.quote(instrument_id, direction, share_count)

    # Portfolio reads
    def get_portfolio(self, user_id: int) -> list[PortfolioPosition]:
        """Holdings joined with their instruments."""
        return self._queries.get_portfolio(user_id)

    def get_portfolio_summary(self, user_id: int) -> PortfolioSummary:
        """Total value, cost and gain at current prices."""
        return self._queries.get_portfolio_summary(user_id)

    def get_trade_history(self, user_id: int, limit: int | None = None) -> list[Trade]:
        """A user's trades, newest first."""
        return self._queries.get_trade_history(
            user_id, self.settings.trade_history_limit if limit is None else limit
        )

    def get_recent_trades(self, limit: int = 50) -> list[Trade]:
        """Trades across all users, newest first."""
        return self._queries.get_recent_trades(limit)

    # Ranking
    def get_leaderboard(self, limit: int | None = None) -> list[LeaderboardEntry]:
        """Ranked (rank, username, net worth) rows."""
        return self._ranking.get_leaderboard(
            self.settings.leaderboard_limit if limit is None else limit
        )

    def top_traders(self, n: int | None = None) -> list[User]:
        """Users ordered by net worth."""
        return self._ranking.top_traders(self.settings.leaderboard_limit if n is None else n)

    # Instruments and market
    def list_instruments(self) -> list[Instrument]:
        return self.repository.list_instruments()

    def get_instrument(self, instrument_id: int) -> Instrument:
        """Get an instrument by id or raise NotFoundError."""
        instrument = self.repository.get_instrument(instrument_id)
        if instrument is None:
            raise NotFoundError("instrument", instrument_id)
        return instrument

    @log_operation
    def list_instrument(
        self,
        name: str,
        position: PlayerPosition | str,
        team: str,
        stats: Mapping[str, Any] | None = None,
        price: Decimal | str | float | None = None,
        **kwargs: Any,
    ) -> Instrument:
        """List a new instrument, pricing it from stats when no price is given."""
        return list_instrument(self.repository, name, position, team, stats, price, **kwargs)

    def trending_instruments(self, limit: int = 10) -> list[Instrument]:
        return self._market.trending_instruments(limit)

    def market_overview(self, now: datetime | None = None) -> MarketOverview:
        return self._market.market_overview(now)

    # Repricing
    @log_operation
    def reprice_instrument(self, instrument_id: int, stats_snapshot: SnapshotInput = None) -> Instrument:
        """Reprice one instrument; invoked by the external scheduler."""
        return self._repricing.reprice_instrument(instrument_id, stats_snapshot)

    @log_operation
    def reprice_all(self, snapshots: Mapping[int, SnapshotInput]) -> RepricingReport:
        """Reprice a batch with per-instrument failure isolation."""
        return self._repricing.reprice_all(snapshots)

    def update_injury_status(self, instrument_id: int, status: InjuryStatus | str) -> Instrument:
        """Reprice an instrument for an injury update only."""
        return self.reprice_instrument(instrument_id, {"injury_status": status})
