"""
Exchange exception hierarchy.
"""

from .exchange import (
    CalculationError,
    ConfigurationError,
    DuplicateUsernameError,
    ExchangeException,
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidOrderError,
    NotFoundError,
    RepositoryError,
    RepricingError,
    TradeError,
    ValidationError,
)

__all__ = [
    "ExchangeException",
    "ValidationError",
    "CalculationError",
    "ConfigurationError",
    "RepositoryError",
    "DuplicateUsernameError",
    "TradeError",
    "NotFoundError",
    "InvalidOrderError",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "RepricingError",
]
