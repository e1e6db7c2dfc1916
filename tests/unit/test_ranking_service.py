"""
Unit tests for RankingService.
"""

from decimal import Decimal

import pytest

from athlete_exchange.core.enums import PlayerPosition
from athlete_exchange.core.exceptions import ValidationError
from athlete_exchange.core.ranking import RankingService
from athlete_exchange.infrastructure.storage import InMemoryRepository


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


def give_holding(repository: InMemoryRepository, user_id: int, instrument_id: int, shares: int) -> None:
    repository.create_holding(user_id, instrument_id, shares, Decimal("10.00"), Decimal("0"))


class TestRankingService:
    """Test leaderboard ordering."""

    def test_should_rank_by_live_net_worth(self, repository: InMemoryRepository) -> None:
        """Test that rankings use current prices, not cached valuations."""
        # Arrange
        alice = repository.create_user("alice", Decimal("1000.00"))
        bob = repository.create_user("bob", Decimal("898.50"))
        carol = repository.create_user("carol", Decimal("500.00"))
        instrument = repository.create_instrument("A", PlayerPosition.CENTER, "X", Decimal("10.00"))
        give_holding(repository, bob.id, instrument.id, 10)
        repository.update_instrument_price(instrument.id, Decimal("20.00"))

        # Act
        board = RankingService(repository).get_leaderboard(10)

        # Assert
        assert [e.username for e in board] == ["bob", "alice", "carol"]
        assert [e.rank for e in board] == [1, 2, 3]
        assert board[0].net_worth == Decimal("1098.50")
        assert board[0].portfolio_value == Decimal("200.00")
        assert board[0].cash == Decimal("898.50")
        assert board[1].user_id == alice.id
        assert board[2].user_id == carol.id

    def test_should_break_ties_by_user_id(self, repository: InMemoryRepository) -> None:
        """Test deterministic ordering of equal net worth."""
        for name in ["zed", "amy", "kim"]:
            repository.create_user(name, Decimal("100.00"))

        board = RankingService(repository).get_leaderboard()

        assert [e.username for e in board] == ["zed", "amy", "kim"]

    def test_should_return_same_order_on_repeated_calls(self, repository: InMemoryRepository) -> None:
        """Test stability on unchanged state."""
        for i in range(5):
            repository.create_user(f"user_{i}", Decimal(100 + (i % 2)))
        service = RankingService(repository)

        assert service.get_leaderboard() == service.get_leaderboard()

    def test_should_apply_limit(self, repository: InMemoryRepository) -> None:
        """Test top-n truncation."""
        for i in range(5):
            repository.create_user(f"user_{i}", Decimal(i + 1))

        top = RankingService(repository).top_traders(2)

        assert [u.username for u in top] == ["user_4", "user_3"]

    def test_should_handle_empty_exchange(self, repository: InMemoryRepository) -> None:
        """Test ranking with no users."""
        assert RankingService(repository).get_leaderboard() == []

    @pytest.mark.parametrize("limit", [0, -1])
    def test_should_reject_invalid_limit(self, repository: InMemoryRepository, limit: int) -> None:
        """Test limit validation."""
        with pytest.raises(ValidationError):
            RankingService(repository).get_leaderboard(limit)

    def test_should_serialize_entry(self, repository: InMemoryRepository) -> None:
        """Test LeaderboardEntry.to_dict."""
        repository.create_user("alice", Decimal("10"))
        entry = RankingService(repository).get_leaderboard()[0]
        assert entry.to_dict() == {
            "rank": 1,
            "user_id": 1,
            "username": "alice",
            "net_worth": "10.00",
            "cash": "10.00",
            "portfolio_value": "0.00",
        }
