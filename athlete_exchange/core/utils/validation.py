"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

from typing import Any

from athlete_exchange.core.enums import TradeDirection
from athlete_exchange.core.exceptions.exchange import InvalidOrderError, ValidationError


def validate_share_count(value: Any, max_shares: int | None = None) -> int:
    """Validate that a share count is a positive integer.

    Args:
        value: Value to validate
        max_shares: Optional upper bound for a single order

    Returns:
        The validated share count

    Raises:
        InvalidOrderError: If value is not a positive int (bools are rejected)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOrderError(f"Share count must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidOrderError(f"Share count must be positive, got {value}")
    if max_shares is not None and value > max_shares:
        raise InvalidOrderError(f"Share count too large: {value} > {max_shares}")
    return value


def validate_direction(value: Any) -> TradeDirection:
    """Validate and parse a trade direction.

    Raises:
        InvalidOrderError: If the direction is not buy or sell
    """
    try:
        return TradeDirection.from_string(value)
    except ValueError as e:
        raise InvalidOrderError(str(e)) from e


def validate_limit(value: Any, param_name: str = "limit") -> int:
    """Validate that a result limit is a positive integer.

    Raises:
        ValidationError: If value is not a positive int
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{param_name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return value


def validate_username(value: Any) -> str:
    """Validate and normalize a username.

    Raises:
        ValidationError: If the username is empty or contains whitespace
    """
    if not isinstance(value, str):
        raise ValidationError(f"Username must be a string, got {type(value).__name__}")
    username = value.strip()
    if not username:
        raise ValidationError("Username must be non-empty")
    if any(ch.isspace() for ch in username):
        raise ValidationError(f"Username must not contain whitespace: {username!r}")
    return username
