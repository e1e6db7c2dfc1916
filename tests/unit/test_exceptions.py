"""
Unit tests for the exchange exception hierarchy.
"""

from decimal import Decimal

from athlete_exchange.core.exceptions import (
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


class TestExceptionHierarchy:
    """Test that exceptions nest as callers expect."""

    def test_should_derive_from_exchange_exception(self) -> None:
        """Test that every domain error is an ExchangeException."""
        for exc_type in (
            ValidationError,
            RepositoryError,
            TradeError,
            RepricingError,
            DuplicateUsernameError,
        ):
            assert issubclass(exc_type, ExchangeException)

    def test_should_treat_invalid_order_as_trade_and_validation_error(self) -> None:
        """Test dual inheritance of InvalidOrderError."""
        error = InvalidOrderError("bad")
        assert isinstance(error, TradeError)
        assert isinstance(error, ValidationError)

    def test_should_carry_distinct_codes(self) -> None:
        """Test that each trade rejection has its own code."""
        codes = {
            NotFoundError.code,
            InvalidOrderError.code,
            InsufficientFundsError.code,
            InsufficientSharesError.code,
        }
        assert codes == {"not_found", "invalid_order", "insufficient_funds", "insufficient_shares"}


class TestExceptionPayloads:
    """Test structured attributes and messages."""

    def test_should_describe_missing_entity(self) -> None:
        """Test NotFoundError message and attributes."""
        error = NotFoundError("user", 5)
        assert str(error) == "User not found: 5"
        assert error.entity == "user"
        assert error.entity_id == 5

    def test_should_carry_insufficient_funds_amounts(self) -> None:
        """Test InsufficientFundsError attributes."""
        error = InsufficientFundsError(Decimal("857.68"), Decimal("100.00"), "buying 10 shares")
        assert error.required == Decimal("857.68")
        assert error.available == Decimal("100.00")
        assert "required=857.68, available=100.00" in str(error)

    def test_should_carry_insufficient_shares_counts(self) -> None:
        """Test InsufficientSharesError attributes."""
        error = InsufficientSharesError(requested=5, held=2, instrument_id=3)
        assert (error.requested, error.held, error.instrument_id) == (5, 2, 3)
        assert "requested=5, held=2" in str(error)

    def test_should_describe_duplicate_username(self) -> None:
        """Test DuplicateUsernameError."""
        error = DuplicateUsernameError("alice")
        assert isinstance(error, RepositoryError)
        assert error.username == "alice"

    def test_should_describe_repricing_failure(self) -> None:
        """Test RepricingError message."""
        error = RepricingError(7, "invalid snapshot")
        assert error.instrument_id == 7
        assert str(error) == "Repricing failed for instrument 7: invalid snapshot"
