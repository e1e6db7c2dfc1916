"""
Pricing model: pure functions from stats, injuries and volume to prices.
"""

from .price_model import (
    fair_value,
    hotness_multiplier,
    hotness_score,
    initial_price,
    injury_adjusted_price,
    injury_multiplier,
    performance_score,
    reprice,
    volume_ratio,
)

__all__ = [
    "initial_price",
    "performance_score",
    "injury_multiplier",
    "hotness_multiplier",
    "hotness_score",
    "volume_ratio",
    "reprice",
    "fair_value",
    "injury_adjusted_price",
]
