"""
Market-wide services: listing, repricing and overview statistics.
"""

from .listing import list_instrument
from .market_stats import MarketOverview, MarketStats, TopGainer
from .repricing import RepricingReport, RepricingService

__all__ = [
    "list_instrument",
    "RepricingService",
    "RepricingReport",
    "MarketStats",
    "MarketOverview",
    "TopGainer",
]
