"""
Trade direction enumerations.

This module defines the allowed directions of a trade on the exchange.
"""

from enum import StrEnum


class TradeDirection(StrEnum):
    """
    Allowed trade directions.

    The exchange is single-sided: users buy shares from and sell shares back
    to the market at the instrument's current price.
    """

    BUY = "buy"
    SELL = "sell"

    @property
    def is_buy(self) -> bool:
        """Check if direction debits cash."""
        return self == self.BUY

    @property
    def is_sell(self) -> bool:
        """Check if direction credits cash."""
        return self == self.SELL

    @classmethod
    def from_string(cls, value: str) -> "TradeDirection":
        """
        Convert string to TradeDirection enum.

        Args:
            value: String representation of the direction (case-insensitive)

        Returns:
            Corresponding TradeDirection enum value

        Raises:
            ValueError: If direction is not supported
        """
        if isinstance(value, cls):
            return value

        value_lower = str(value).strip().lower()
        for direction in cls:
            if direction.value == value_lower:
                return direction

        raise ValueError(
            f"Unsupported trade direction: {value}. "
            f"Supported directions: {', '.join([d.value for d in cls])}"
        )
