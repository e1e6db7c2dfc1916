"""
Unit tests for the operation logging decorator.
"""

from decimal import Decimal
from unittest.mock import Mock, patch

import pytest

from athlete_exchange.core.enums import TradeDirection
from athlete_exchange.core.exceptions import InsufficientSharesError
from athlete_exchange.core.models.results import TradeResult
from athlete_exchange.core.utils.decorators import log_operation


class TestLogOperationDecorator:
    """Test suite for @log_operation decorator."""

    @patch("athlete_exchange.core.utils.decorators.logger")
    def test_should_bind_operation_context(self, mock_logger: Mock) -> None:
        """Test that trade parameters are bound to the log context."""

        @log_operation
        def execute(user_id: int, instrument_id: int, direction: TradeDirection, share_count: int) -> int:
            return 1

        # Act
        result = execute(1, 2, TradeDirection.BUY, 10)

        # Assert
        assert result == 1
        context = mock_logger.bind.call_args.kwargs
        assert context["user_id"] == 1
        assert context["instrument_id"] == 2
        assert context["direction"] == "buy"
        assert context["share_count"] == 10
        assert len(context["correlation_id"]) == 8

    @patch("athlete_exchange.core.utils.decorators.logger")
    def test_should_log_start_and_completion(self, mock_logger: Mock) -> None:
        """Test debug log lines on success."""
        bound = mock_logger.bind.return_value

        @log_operation
        def list_things(limit: int = 10) -> list[int]:
            return [1, 2, 3]

        list_things()

        assert bound.debug.call_count == 1
        completion = bound.bind.call_args.kwargs
        assert completion["count"] == 3
        assert "execution_time_ms" in completion
        assert bound.bind.return_value.debug.call_count == 1

    @patch("athlete_exchange.core.utils.decorators.logger")
    def test_should_report_rejected_trade_result(self, mock_logger: Mock) -> None:
        """Test that rejection codes reach the completion log."""
        bound = mock_logger.bind.return_value

        @log_operation
        def trade() -> TradeResult:
            return TradeResult(error=InsufficientSharesError(5, 0, 1))

        trade()

        completion = bound.bind.call_args.kwargs
        assert completion["ok"] is False
        assert completion["error_code"] == "insufficient_shares"

    @patch("athlete_exchange.core.utils.decorators.logger")
    def test_should_log_and_reraise_failures(self, mock_logger: Mock) -> None:
        """Test that exceptions are logged and propagated."""
        bound = mock_logger.bind.return_value

        @log_operation
        def failing(username: str) -> None:
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            failing("alice")

        assert mock_logger.bind.call_args.kwargs["username"] == "alice"
        assert bound.bind.call_args.kwargs["error_type"] == "ValueError"
        assert bound.bind.return_value.error.call_count == 1

    @patch("athlete_exchange.core.utils.decorators.logger")
    def test_should_serialize_decimal_parameters(self, mock_logger: Mock) -> None:
        """Test Decimal handling in context values."""

        @log_operation
        def with_limit(limit: Decimal) -> None:
            return None

        with_limit(Decimal("1.50"))

        assert mock_logger.bind.call_args.kwargs["limit"] == "1.50"

    def test_should_generate_unique_correlation_ids(self) -> None:
        """Test that each call gets its own correlation id."""
        with patch("athlete_exchange.core.utils.decorators.logger") as mock_logger:

            @log_operation
            def noop() -> None:
                return None

            noop()
            noop()

            first = mock_logger.bind.call_args_list[0].kwargs["correlation_id"]
            second = mock_logger.bind.call_args_list[1].kwargs["correlation_id"]
            assert first != second

    def test_should_preserve_function_metadata(self) -> None:
        """Test functools.wraps."""

        @log_operation
        def documented() -> None:
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
