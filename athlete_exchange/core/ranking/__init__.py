"""
Leaderboard ranking.
"""

from .ranking_service import LeaderboardEntry, RankingService

__all__ = ["RankingService", "LeaderboardEntry"]
