"""
Core enumerations for the exchange.

This module provides centralized enumerations for domain concepts
like trade directions, injury states and player positions.
"""

from .injury_status import InjuryStatus
from .player_positions import PlayerPosition
from .trade_types import TradeDirection

__all__ = ["TradeDirection", "InjuryStatus", "PlayerPosition"]
