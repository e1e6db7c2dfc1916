"""
Trade domain model.
Trades are append-only audit records and are never mutated.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from athlete_exchange.core.enums import TradeDirection
from athlete_exchange.core.exceptions.exchange import ValidationError
from athlete_exchange.core.types.money import ZERO


@dataclass(frozen=True)
class Trade:
    """Represents an executed trade."""

    id: int
    user_id: int
    instrument_id: int
    direction: TradeDirection
    shares: int
    price_per_share: Decimal
    subtotal: Decimal
    fee: Decimal
    total_amount: Decimal
    timestamp: datetime

    def __post_init__(self) -> None:
        """Validate trade data after initialization."""
        if self.shares <= 0:
            raise ValidationError(f"Shares must be positive, got {self.shares}")
        if self.price_per_share <= ZERO:
            raise ValidationError(f"Price must be positive, got {self.price_per_share}")
        if self.fee < ZERO:
            raise ValidationError(f"Fee must be non-negative, got {self.fee}")
        if self.total_amount < ZERO:
            raise ValidationError(f"Total amount must be non-negative, got {self.total_amount}")

    @property
    def cash_delta(self) -> Decimal:
        """Signed change to the user's cash caused by this trade."""
        return -self.total_amount if self.direction.is_buy else self.total_amount

    def to_dict(self) -> dict:
        """Convert trade to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "instrument_id": self.instrument_id,
            "type": self.direction.value,
            "shares": self.shares,
            "price_per_share": str(self.price_per_share),
            "subtotal": str(self.subtotal),
            "fee": str(self.fee),
            "total_amount": str(self.total_amount),
            "timestamp": self.timestamp.isoformat(),
        }
