"""
Custom exception hierarchy for the exchange.

This module defines domain-specific exceptions for better error handling.
Trade errors carry structured attributes so the API layer can map them to
user-facing messages without parsing strings.
"""

from decimal import Decimal


class ExchangeException(Exception):
    """Base exception for all exchange-related errors."""

    pass


class ValidationError(ExchangeException):
    """Raised when input validation fails."""

    pass


class CalculationError(ExchangeException):
    """Raised when mathematical calculations fail."""

    pass


class ConfigurationError(ExchangeException):
    """Raised when configuration is invalid."""

    pass


class RepositoryError(ExchangeException):
    """Raised when the repository rejects a mutation."""

    pass


class DuplicateUsernameError(RepositoryError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already exists: {username}")


class TradeError(ExchangeException):
    """Base class for trade rejections returned by the ledger."""

    code = "trade_error"


class NotFoundError(TradeError):
    """Raised when a user or instrument does not exist."""

    code = "not_found"

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found: {entity_id}")


class InvalidOrderError(TradeError, ValidationError):
    """Raised when an order is malformed (e.g. non-positive share count)."""

    code = "invalid_order"


class InsufficientFundsError(TradeError):
    """Raised when a user cannot pay for a buy including fees."""

    code = "insufficient_funds"

    def __init__(self, required: Decimal, available: Decimal, operation: str = "operation"):
        self.required = required
        self.available = available
        self.operation = operation
        super().__init__(
            f"Insufficient funds for {operation}: required={required:.2f}, available={available:.2f}"
        )


class InsufficientSharesError(TradeError):
    """Raised when a user sells more shares than they hold."""

    code = "insufficient_shares"

    def __init__(self, requested: int, held: int, instrument_id: int):
        self.requested = requested
        self.held = held
        self.instrument_id = instrument_id
        super().__init__(
            f"Insufficient shares of instrument {instrument_id}: requested={requested}, held={held}"
        )


class RepricingError(ExchangeException):
    """Raised when a single instrument cannot be repriced."""

    def __init__(self, instrument_id: int, reason: str):
        self.instrument_id = instrument_id
        self.reason = reason
        super().__init__(f"Repricing failed for instrument {instrument_id}: {reason}")
