"""
User domain model.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from athlete_exchange.core.exceptions.exchange import ValidationError
from athlete_exchange.core.types.money import ZERO, round_money


@dataclass(frozen=True)
class User:
    """A registered trader.

    `cash` is mutated only by the ledger. `portfolio_value` is a cached
    valuation refreshed after each of the user's trades; ranking recomputes
    it from live prices instead of trusting this field.
    """

    id: int
    username: str
    cash: Decimal
    portfolio_value: Decimal
    created_at: datetime

    def __post_init__(self) -> None:
        """Normalize and validate user data after initialization."""
        object.__setattr__(self, "cash", round_money(self.cash))
        object.__setattr__(self, "portfolio_value", round_money(self.portfolio_value))

        if not self.username or not self.username.strip():
            raise ValidationError("Username must be a non-empty string")
        if self.cash < ZERO:
            raise ValidationError(f"Cash must be non-negative, got {self.cash}")
        if self.portfolio_value < ZERO:
            raise ValidationError(
                f"Portfolio value must be non-negative, got {self.portfolio_value}"
            )
