"""Helper classes for the Ledger to keep execution steps small."""

from dataclasses import dataclass
from decimal import Decimal

from athlete_exchange.core.constants import TRADING_FEE_RATE
from athlete_exchange.core.enums import TradeDirection
from athlete_exchange.core.exceptions.exchange import (
    CalculationError,
    InsufficientFundsError,
    InsufficientSharesError,
)
from athlete_exchange.core.models.holding import Holding
from athlete_exchange.core.models.user import User
from athlete_exchange.core.types.money import (
    ZERO,
    calculate_fee,
    calculate_subtotal,
    round_cost_basis,
    round_money,
)


@dataclass(frozen=True)
class TradeQuote:
    """Amounts for one order, computed from a single price snapshot."""

    direction: TradeDirection
    shares: int
    price_per_share: Decimal
    subtotal: Decimal
    fee: Decimal
    total_amount: Decimal

    @property
    def cash_delta(self) -> Decimal:
        """Signed change to the user's cash if this quote is executed."""
        return -self.total_amount if self.direction.is_buy else self.total_amount


class FeeCalculator:
    """Calculates trade amounts and fees."""

    @staticmethod
    def quote(
        direction: TradeDirection,
        shares: int,
        price_per_share: Decimal,
        fee_rate: Decimal = TRADING_FEE_RATE,
    ) -> TradeQuote:
        """Build a quote: subtotal, fee and the cash that moves.

        Buys pay ``subtotal + fee``; sells receive ``subtotal - fee``.
        """
        if price_per_share <= ZERO:
            raise CalculationError(f"Price must be positive, got {price_per_share}")

        subtotal = calculate_subtotal(shares, price_per_share)
        fee = calculate_fee(subtotal, fee_rate)
        total = subtotal + fee if direction.is_buy else subtotal - fee
        return TradeQuote(
            direction=direction,
            shares=shares,
            price_per_share=price_per_share,
            subtotal=subtotal,
            fee=fee,
            total_amount=round_money(total),
        )


class OrderValidator:
    """Validates an order against balances and holdings."""

    @staticmethod
    def check_sufficient_funds(quote: TradeQuote, user: User, instrument_id: int) -> None:
        """Check the user can pay for a buy including fees."""
        if user.cash < quote.total_amount:
            raise InsufficientFundsError(
                required=quote.total_amount,
                available=user.cash,
                operation=f"buying {quote.shares} shares of instrument {instrument_id}",
            )

    @staticmethod
    def check_sufficient_shares(
        quote: TradeQuote, holding: Holding | None, instrument_id: int
    ) -> Holding:
        """Check the user holds enough shares for a sell and return the holding."""
        held = holding.shares if holding is not None else 0
        if holding is None or held < quote.shares:
            raise InsufficientSharesError(
                requested=quote.shares, held=held, instrument_id=instrument_id
            )
        return holding


class CostBasisCalculator:
    """Weighted-average cost basis updates."""

    @staticmethod
    def after_buy(holding: Holding | None, quote: TradeQuote) -> tuple[int, Decimal]:
        """Share count and average cost after a buy fill.

        A first buy uses the raw price per share; fees are a transaction
        cost and are not amortized into the basis.
        """
        if holding is None:
            return quote.shares, round_cost_basis(quote.price_per_share)

        new_shares = holding.shares + quote.shares
        total_cost = holding.average_cost * holding.shares + quote.subtotal
        return new_shares, round_cost_basis(total_cost / new_shares)

    @staticmethod
    def after_sell(holding: Holding, quote: TradeQuote) -> int:
        """Share count after a sell fill; the average cost does not change."""
        return holding.shares - quote.shares
