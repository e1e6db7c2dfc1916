"""
Fixed-point money types for the exchange ledger.

All balances, prices, fees and cost bases are `Decimal`. Floats appear only
inside the pricing model's transcendental maths and are converted back
through `to_decimal` before anything is stored.

ROUNDING POLICY:
- Cash amounts, prices and fees: 2 decimal places, ROUND_HALF_UP
  (12.675 -> 12.68)
- Average cost basis: 6 decimal places, ROUND_HALF_UP, so repeated
  weighted averaging does not drift at cent granularity
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

# Precision (number of decimal places)
MONEY_DECIMALS = 2
COST_BASIS_DECIMALS = 6
PERCENTAGE_DECIMALS = 2

CENT = Decimal("0.01")
COST_BASIS_QUANTUM = Decimal("0.000001")
PERCENT_QUANTUM = Decimal("0.01")

# Common values
ZERO = Decimal("0")
ZERO_MONEY = Decimal("0.00")
HUNDRED = Decimal("100")


def to_decimal(value: str | int | float | Decimal) -> Decimal:
    """Convert various numeric types to Decimal.

    Floats go through `str()` so that ``84.5`` becomes ``Decimal("84.5")``
    rather than its binary expansion.

    Args:
        value: Numeric value to convert

    Returns:
        Decimal representation of the value

    Raises:
        ValueError: If value is not numeric or not finite

    Examples:
        >>> to_decimal(84.5)
        Decimal('84.5')
        >>> to_decimal("10000.00")
        Decimal('10000.00')
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert bool to Decimal: {value}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Cannot convert {value!r} to Decimal") from e

    if not result.is_finite():
        raise ValueError(f"Value must be finite, got {value}")
    return result


def round_money(amount: Decimal | int | float | str) -> Decimal:
    """Round a cash amount, price or fee to cents (half-up)."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def round_cost_basis(amount: Decimal | int | float | str) -> Decimal:
    """Round an average cost to cost-basis precision (half-up)."""
    return to_decimal(amount).quantize(COST_BASIS_QUANTUM, rounding=ROUND_HALF_UP)


def round_percentage(percentage: Decimal | int | float | str) -> Decimal:
    """Round a percentage to two decimal places (half-up)."""
    return to_decimal(percentage).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)


def calculate_subtotal(shares: int, price_per_share: Decimal) -> Decimal:
    """Calculate the pre-fee value of a fill.

    Args:
        shares: Number of shares
        price_per_share: Price snapshot for the fill

    Returns:
        Subtotal rounded to cents
    """
    return round_money(price_per_share * shares)


def calculate_fee(subtotal: Decimal, fee_rate: Decimal) -> Decimal:
    """Calculate the trading fee for a subtotal.

    Args:
        subtotal: Pre-fee trade value
        fee_rate: Fee rate as a fraction (0.015 for 1.5%)

    Returns:
        Fee rounded to cents (half-up)

    Examples:
        >>> calculate_fee(Decimal("845.00"), Decimal("0.015"))
        Decimal('12.68')
    """
    if fee_rate < ZERO:
        raise ValueError(f"Fee rate must be non-negative, got {fee_rate}")
    return round_money(subtotal * fee_rate)


def calculate_percent_change(old: Decimal, new: Decimal) -> Decimal:
    """Percentage change from `old` to `new`.

    Raises:
        ValueError: If `old` is not positive
    """
    if old <= ZERO:
        raise ValueError(f"Reference value must be positive, got {old}")
    return round_percentage((new - old) / old * HUNDRED)
