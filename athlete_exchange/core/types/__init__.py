"""
Core type definitions and utilities.
"""

# Re-export money utilities for easy access
from .money import (
    CENT,
    COST_BASIS_DECIMALS,
    HUNDRED,
    MONEY_DECIMALS,
    PERCENTAGE_DECIMALS,
    ZERO,
    ZERO_MONEY,
    calculate_fee,
    calculate_percent_change,
    calculate_subtotal,
    round_cost_basis,
    round_money,
    round_percentage,
    to_decimal,
)

__all__ = [
    # Utility functions
    "to_decimal",
    "round_money",
    "round_cost_basis",
    "round_percentage",
    "calculate_subtotal",
    "calculate_fee",
    "calculate_percent_change",
    # Constants
    "MONEY_DECIMALS",
    "COST_BASIS_DECIMALS",
    "PERCENTAGE_DECIMALS",
    "CENT",
    "ZERO",
    "ZERO_MONEY",
    "HUNDRED",
]
