"""
Holding domain model.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from athlete_exchange.core.exceptions.exchange import ValidationError
from athlete_exchange.core.types.money import ZERO, round_cost_basis, round_money


@dataclass(frozen=True)
class Holding:
    """A user's position in one instrument.

    `average_cost` is the weighted average price over all buy fills; sells
    never move it. `total_value` is the valuation written at the last commit
    and is informational only, use `market_value` with a live price.
    """

    id: int
    user_id: int
    instrument_id: int
    shares: int
    average_cost: Decimal
    total_value: Decimal
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Normalize and validate holding data after initialization."""
        object.__setattr__(self, "average_cost", round_cost_basis(self.average_cost))
        object.__setattr__(self, "total_value", round_money(self.total_value))

        if isinstance(self.shares, bool) or not isinstance(self.shares, int):
            raise ValidationError(f"Shares must be an integer, got {self.shares!r}")
        if self.shares <= 0:
            raise ValidationError(f"Shares must be positive, got {self.shares}")
        if self.average_cost <= ZERO:
            raise ValidationError(f"Average cost must be positive, got {self.average_cost}")

    def market_value(self, current_price: Decimal) -> Decimal:
        """Value of the holding at the given price."""
        return round_money(current_price * self.shares)

    def cost_basis(self) -> Decimal:
        """Total acquisition cost of the held shares (fees excluded)."""
        return round_money(self.average_cost * self.shares)

    def unrealized_gain(self, current_price: Decimal) -> Decimal:
        """Gain or loss against the cost basis at the given price."""
        return self.market_value(current_price) - self.cost_basis()
