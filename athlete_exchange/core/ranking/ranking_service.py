"""
Leaderboard derived from net worth.

Net worth is ``cash + sum(shares * current_price)`` computed from live
prices at read time. Ties are broken by ascending user id, so repeated calls
on unchanged state return the same order.
"""

from dataclasses import dataclass
from decimal import Decimal

from athlete_exchange.core.constants import DEFAULT_LEADERBOARD_LIMIT
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.models.user import User
from athlete_exchange.core.types.money import ZERO_MONEY, round_money
from athlete_exchange.core.utils.validation import validate_limit


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked row of the leaderboard."""

    rank: int
    user_id: int
    username: str
    net_worth: Decimal
    cash: Decimal
    portfolio_value: Decimal

    def to_dict(self) -> dict:
        """Convert entry to dictionary."""
        return {
            "rank": self.rank,
            "user_id": self.user_id,
            "username": self.username,
            "net_worth": str(self.net_worth),
            "cash": str(self.cash),
            "portfolio_value": str(self.portfolio_value),
        }


class RankingService:
    """Read-only ranking of users by net worth."""

    def __init__(self, repository: IExchangeRepository) -> None:
        self.repository = repository

    def portfolio_value(self, user_id: int, prices: dict[int, Decimal]) -> Decimal:
        """Value of a user's holdings at the given instrument prices."""
        total = ZERO_MONEY
        for holding in self.repository.list_holdings(user_id):
            total += holding.market_value(prices[holding.instrument_id])
        return round_money(total)

    def _valuations(self) -> list[tuple[User, Decimal]]:
        # Held under the repository lock so no commit lands mid-scan
        with self.repository.atomic():
            prices = {i.id: i.current_price for i in self.repository.list_instruments()}
            return [
                (user, self.portfolio_value(user.id, prices))
                for user in self.repository.list_users()
            ]

    def _ranked(self, limit: int) -> list[tuple[User, Decimal]]:
        validate_limit(limit)
        valuations = self._valuations()
        valuations.sort(key=lambda row: (-(row[0].cash + row[1]), row[0].id))
        return valuations[:limit]

    def top_traders(self, n: int = DEFAULT_LEADERBOARD_LIMIT) -> list[User]:
        """The `n` users with the highest net worth, best first."""
        return [user for user, _ in self._ranked(n)]

    def get_leaderboard(self, limit: int = DEFAULT_LEADERBOARD_LIMIT) -> list[LeaderboardEntry]:
        """Ranked leaderboard rows, rank starting at 1."""
        return [
            LeaderboardEntry(
                rank=index + 1,
                user_id=user.id,
                username=user.username,
                net_worth=round_money(user.cash + value),
                cash=user.cash,
                portfolio_value=value,
            )
            for index, (user, value) in enumerate(self._ranked(limit))
        ]
