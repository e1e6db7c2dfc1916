"""
Trade execution.

An order is Received, then either Rejected (with a typed TradeError and no
side effects) or Validated and Committed as one atomic repository unit.

Thread Safety:
    The read-validate-commit sequence of a trade runs under the user's lock
    from `KeyedLockManager`, so two trades of the same user never interleave.
    The commit itself runs inside `repository.atomic()`, so readers never see
    cash debited without the holding updated.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

from loguru import logger

from athlete_exchange.core.config import ExchangeSettings, get_settings
from athlete_exchange.core.enums import TradeDirection
from athlete_exchange.core.exceptions.exchange import NotFoundError, TradeError
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.models.holding import Holding
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.results import TradeResult
from athlete_exchange.core.models.trade import Trade
from athlete_exchange.core.models.user import User
from athlete_exchange.core.types.money import ZERO_MONEY, round_money
from athlete_exchange.core.utils.validation import validate_direction, validate_share_count

from .ledger_helpers import CostBasisCalculator, FeeCalculator, OrderValidator, TradeQuote
from .locks import KeyedLockManager


class Ledger:
    """Validates and commits trades against the repository."""

    def __init__(
        self,
        repository: IExchangeRepository,
        settings: ExchangeSettings | None = None,
        clock: Callable[[], datetime] | None = None,
        locks: KeyedLockManager | None = None,
    ) -> None:
        """Initialize the ledger.

        Args:
            repository: Store holding users, instruments, holdings and trades
            settings: Fee rate and order limits; defaults to `get_settings()`
            clock: Source of trade timestamps
            locks: Lock manager; pass a shared one if several ledgers share a store
        """
        self.repository = repository
        self.settings = settings or get_settings()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._locks = locks or KeyedLockManager(serialize_all=self.settings.serialize_all_trades)

    def execute_trade(
        self,
        user_id: int,
        instrument_id: int,
        direction: TradeDirection | str,
        share_count: int,
    ) -> TradeResult:
        """Execute a buy or sell at the instrument's current price.

        Returns:
            TradeResult holding the committed Trade, or the TradeError that
            rejected the order. Rejections leave all state unchanged.
        """
        try:
            trade = self._execute(user_id, instrument_id, direction, share_count)
        except TradeError as e:
            logger.warning(
                f"Trade rejected ({e.code}): user={user_id} instrument={instrument_id} "
                f"{direction} x{share_count}: {e}"
            )
            return TradeResult(error=e)
        return TradeResult(trade=trade)

    def quote(
        self, instrument_id: int, direction: TradeDirection | str, share_count: int
    ) -> TradeQuote:
        """Preview the amounts of an order at the current price without executing it.

        Raises:
            InvalidOrderError: If the order is malformed
            NotFoundError: If the instrument does not exist
        """
        share_count = validate_share_count(share_count, self.settings.max_shares_per_trade)
        direction = validate_direction(direction)
        instrument = self._require_instrument(instrument_id)
        return FeeCalculator.quote(
            direction, share_count, instrument.current_price, self.settings.fee_rate
        )

    def _execute(
        self,
        user_id: int,
        instrument_id: int,
        direction: TradeDirection | str,
        share_count: int,
    ) -> Trade:
        share_count = validate_share_count(share_count, self.settings.max_shares_per_trade)
        direction = validate_direction(direction)

        with self._locks.hold(user_id):
            user = self._require_user(user_id)
            instrument = self._require_instrument(instrument_id)

            # Single price snapshot for validation, fee and commit
            quote = FeeCalculator.quote(
                direction, share_count, instrument.current_price, self.settings.fee_rate
            )
            holding = self.repository.get_holding(user_id, instrument_id)

            sell_from: Holding | None = None
            if direction.is_sell:
                sell_from = OrderValidator.check_sufficient_shares(quote, holding, instrument_id)
            else:
                OrderValidator.check_sufficient_funds(quote, user, instrument_id)

            with self.repository.atomic():
                if sell_from is None:
                    self._commit_buy(user, holding, quote, instrument_id)
                else:
                    self._commit_sell(user, sell_from, quote)

                trade = self.repository.append_trade(
                    user_id=user_id,
                    instrument_id=instrument_id,
                    direction=direction,
                    shares=quote.shares,
                    price_per_share=quote.price_per_share,
                    subtotal=quote.subtotal,
                    fee=quote.fee,
                    total_amount=quote.total_amount,
                    timestamp=self._clock(),
                )
                self.repository.increment_instrument_volume(instrument_id, quote.shares)
                self.refresh_portfolio_value(user_id)

        logger.info(
            f"Trade {trade.id} committed: user={user_id} {direction.value} "
            f"{quote.shares} x {instrument.name} @ {quote.price_per_share} "
            f"(fee={quote.fee}, total={quote.total_amount})"
        )
        return trade

    def _commit_buy(
        self, user: User, holding: Holding | None, quote: TradeQuote, instrument_id: int
    ) -> None:
        self.repository.update_user_cash(user.id, user.cash - quote.total_amount)

        shares, average_cost = CostBasisCalculator.after_buy(holding, quote)
        total_value = round_money(quote.price_per_share * shares)
        if holding is None:
            self.repository.create_holding(
                user_id=user.id,
                instrument_id=instrument_id,
                shares=shares,
                average_cost=average_cost,
                total_value=total_value,
            )
        else:
            self.repository.update_holding(holding.id, shares, average_cost, total_value)

    def _commit_sell(self, user: User, holding: Holding, quote: TradeQuote) -> None:
        self.repository.update_user_cash(user.id, user.cash + quote.total_amount)

        remaining = CostBasisCalculator.after_sell(holding, quote)
        if remaining == 0:
            self.repository.delete_holding(holding.id)
            logger.debug(f"Holding {holding.id} closed")
        else:
            self.repository.update_holding(
                holding.id,
                remaining,
                holding.average_cost,
                round_money(quote.price_per_share * remaining),
            )

    def refresh_portfolio_value(self, user_id: int) -> Decimal:
        """Recompute and store a user's cached portfolio value from current prices."""
        total = ZERO_MONEY
        for holding in self.repository.list_holdings(user_id):
            instrument = self._require_instrument(holding.instrument_id)
            total += holding.market_value(instrument.current_price)
        self.repository.update_user_portfolio_value(user_id, total)
        return total

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
