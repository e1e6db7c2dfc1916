"""
Unit tests for fixed-point money helpers.
"""

from decimal import Decimal

import pytest

from athlete_exchange.core.types.money import (
    calculate_fee,
    calculate_percent_change,
    calculate_subtotal,
    round_cost_basis,
    round_money,
    round_percentage,
    to_decimal,
)


class TestToDecimal:
    """Test conversion of numeric inputs to Decimal."""

    def test_should_convert_float_through_string(self) -> None:
        """Test that floats do not leak their binary expansion."""
        assert to_decimal(84.5) == Decimal("84.5")
        assert str(to_decimal(0.1)) == "0.1"

    def test_should_pass_decimal_through(self) -> None:
        """Test that Decimal inputs are returned unchanged."""
        value = Decimal("10000.00")
        assert to_decimal(value) is value

    def test_should_reject_bool(self) -> None:
        """Test that booleans are not treated as numbers."""
        with pytest.raises(ValueError, match="bool"):
            to_decimal(True)

    @pytest.mark.parametrize("value", ["nan", "inf", float("inf")])
    def test_should_reject_non_finite_values(self, value: object) -> None:
        """Test that NaN and infinity are rejected."""
        with pytest.raises(ValueError, match="finite"):
            to_decimal(value)  # type: ignore[arg-type]

    def test_should_reject_non_numeric_string(self) -> None:
        """Test that garbage strings are rejected."""
        with pytest.raises(ValueError, match="Cannot convert"):
            to_decimal("abc")


class TestRounding:
    """Test the rounding policy."""

    def test_should_round_money_half_up(self) -> None:
        """Test that half a cent rounds away from zero."""
        assert round_money(Decimal("12.675")) == Decimal("12.68")
        assert round_money(Decimal("0.005")) == Decimal("0.01")
        assert round_money(Decimal("12.674")) == Decimal("12.67")

    def test_should_quantize_to_two_places(self) -> None:
        """Test that money always carries two decimal places."""
        assert str(round_money(5)) == "5.00"

    def test_should_round_cost_basis_to_six_places(self) -> None:
        """Test cost basis precision."""
        assert round_cost_basis(Decimal("1295") / 15) == Decimal("86.333333")

    def test_should_round_percentage(self) -> None:
        """Test percentage rounding."""
        assert round_percentage(Decimal("3.4674")) == Decimal("3.47")


class TestTradeAmounts:
    """Test subtotal, fee and percentage calculations."""

    def test_should_calculate_subtotal(self) -> None:
        """Test shares times price."""
        assert calculate_subtotal(10, Decimal("84.50")) == Decimal("845.00")

    def test_should_round_fee_half_up(self) -> None:
        """Test that 1.5% of 845.00 (12.675) rounds to 12.68."""
        assert calculate_fee(Decimal("845.00"), Decimal("0.015")) == Decimal("12.68")

    def test_should_calculate_exact_fee(self) -> None:
        """Test a fee with no rounding needed."""
        assert calculate_fee(Decimal("900.00"), Decimal("0.015")) == Decimal("13.50")

    def test_should_reject_negative_fee_rate(self) -> None:
        """Test fee rate validation."""
        with pytest.raises(ValueError, match="non-negative"):
            calculate_fee(Decimal("100.00"), Decimal("-0.01"))

    def test_should_calculate_percent_change(self) -> None:
        """Test percentage change between two prices."""
        assert calculate_percent_change(Decimal("81.26"), Decimal("84.50")) == Decimal("3.99")
        assert calculate_percent_change(Decimal("100.00"), Decimal("90.00")) == Decimal("-10.00")

    def test_should_reject_non_positive_reference(self) -> None:
        """Test that a zero reference price is rejected."""
        with pytest.raises(ValueError, match="positive"):
            calculate_percent_change(Decimal("0"), Decimal("10"))
