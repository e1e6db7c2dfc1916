"""
Trade execution and portfolio reads.
"""

from .ledger import Ledger
from .ledger_helpers import CostBasisCalculator, FeeCalculator, OrderValidator, TradeQuote
from .locks import KeyedLockManager
from .portfolio_queries import PortfolioQueries

__all__ = [
    "Ledger",
    "PortfolioQueries",
    "KeyedLockManager",
    "TradeQuote",
    "FeeCalculator",
    "OrderValidator",
    "CostBasisCalculator",
]
