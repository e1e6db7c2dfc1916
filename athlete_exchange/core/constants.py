"""
Core constants and limits.

Defines exchange-wide constants: fee policy, price floors, pricing model
coefficients and default read limits.
"""

from decimal import Decimal

# Fee Constants
TRADING_FEE_RATE = Decimal("0.015")  # 1.5% of subtotal, charged on buys and sells

# Account Defaults
DEFAULT_STARTING_CASH = Decimal("10000.00")

# Price Floors
MIN_PRICE = Decimal("1.00")  # Repricing never goes below this
MIN_IPO_PRICE = Decimal("10.00")  # Floor for stat-derived listing prices
IPO_SCORE_DIVISOR = 10.0

# Repricing Coefficients
VOLUME_IMPACT = 0.05  # Weight of ln(volume ratio)
SENTIMENT_IMPACT = 0.03  # Weight of sentiment in [-1, 1]
MIN_VOLUME_RATIO = 0.5  # Floor of the volume ratio before ln(), the cold-tier boundary

# Hotness
HOTNESS_MIN = -100
HOTNESS_MAX = 100

# Trading Limits
MAX_SHARES_PER_TRADE = 1_000_000

# Read Limits
DEFAULT_TRADE_HISTORY_LIMIT = 20
DEFAULT_RECENT_TRADES_LIMIT = 50
DEFAULT_LEADERBOARD_LIMIT = 10
DEFAULT_TRENDING_LIMIT = 10

# Market Stats
DAILY_WINDOW_HOURS = 24
