"""
Unit tests for market statistics, listing and the demo catalog.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pydantic
import pytest

from athlete_exchange.core.enums import InjuryStatus, PlayerPosition, TradeDirection
from athlete_exchange.core.market import MarketStats, TopGainer, list_instrument
from athlete_exchange.infrastructure.catalog import DEMO_USERNAME, seed_demo_catalog
from athlete_exchange.infrastructure.storage import InMemoryRepository

NOW = datetime(2025, 1, 15, 20, 0, tzinfo=UTC)


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository(clock=lambda: NOW)


def record_trade(repository: InMemoryRepository, user_id: int, subtotal: str, at: datetime) -> None:
    repository.append_trade(
        user_id=user_id,
        instrument_id=1,
        direction=TradeDirection.BUY,
        shares=1,
        price_per_share=Decimal(subtotal),
        subtotal=Decimal(subtotal),
        fee=Decimal("0"),
        total_amount=Decimal(subtotal),
        timestamp=at,
    )


class TestMarketStats:
    """Test overview aggregates over the demo catalog."""

    def test_should_sum_market_cap(self, repository: InMemoryRepository) -> None:
        """Test market cap as the sum of current prices."""
        seed_demo_catalog(repository)
        assert MarketStats(repository).market_cap() == Decimal("420.85")

    def test_should_find_top_gainer(self, repository: InMemoryRepository) -> None:
        """Test the best percentage move."""
        seed_demo_catalog(repository)

        gainer = MarketStats(repository).top_gainer()

        assert gainer.name == "Luka Dončić"
        assert gainer.change_percent == Decimal("6.77")
        assert gainer.short_name == "L. Dončić"

    def test_should_skip_instruments_without_history(self, repository: InMemoryRepository) -> None:
        """Test top gainer before any repricing."""
        repository.create_instrument("A", PlayerPosition.CENTER, "X", Decimal("10"))
        assert MarketStats(repository).top_gainer() is None

    def test_should_rank_trending_by_volume(self, repository: InMemoryRepository) -> None:
        """Test trending instruments."""
        seed_demo_catalog(repository)

        trending = MarketStats(repository).trending_instruments(3)

        assert [i.name for i in trending] == ["Giannis Antetokounmpo", "Luka Dončić", "LeBron James"]

    def test_should_aggregate_last_day_of_trades(self, repository: InMemoryRepository) -> None:
        """Test daily volume and active traders."""
        # Arrange
        seed_demo_catalog(repository)
        record_trade(repository, 1, "100.00", NOW - timedelta(hours=1))
        record_trade(repository, 1, "50.00", NOW - timedelta(hours=23))
        record_trade(repository, 2, "25.00", NOW - timedelta(minutes=5))
        record_trade(repository, 3, "999.00", NOW - timedelta(hours=25))

        # Act
        overview = MarketStats(repository, clock=lambda: NOW).market_overview()

        # Assert
        assert overview.daily_volume == Decimal("175.00")
        assert overview.active_traders == 2
        assert overview.market_cap == Decimal("420.85")
        assert overview.to_dict()["top_gainer"] == {"name": "L. Dončić", "change": "6.77"}

    def test_should_treat_naive_now_as_utc(self, repository: InMemoryRepository) -> None:
        """Test a window end without tzinfo against timezone-aware trades."""
        # Arrange
        record_trade(repository, 1, "40.00", NOW - timedelta(hours=2))
        record_trade(repository, 2, "60.00", NOW - timedelta(hours=30))

        # Act
        overview = MarketStats(repository).market_overview(NOW.replace(tzinfo=None))

        # Assert
        assert overview.daily_volume == Decimal("40.00")
        assert overview.active_traders == 1

    def test_should_shorten_single_names(self) -> None:
        """Test short names for one-word names."""
        assert TopGainer(1, "Nene", Decimal("1")).short_name == "Nene"
        assert TopGainer(1, "Karl Anthony Towns", Decimal("1")).short_name == "K.A. Towns"


class TestListInstrument:
    """Test instrument listing."""

    def test_should_price_from_stats_when_no_price_given(self, repository: InMemoryRepository) -> None:
        """Test stat-derived listing with an injury discount."""
        stats = {"ppg": 29.1, "rpg": 6.2, "apg": 6.8, "stl": 1.3, "blk": 0.4, "threes": 4.8}

        instrument = list_instrument(
            repository, "Stephen Curry", "PG", "Warriors", stats, injury_status="minor"
        )

        assert instrument.current_price == Decimal("14.39")
        assert instrument.injury_status == InjuryStatus.MINOR
        assert instrument.position == PlayerPosition.POINT_GUARD

    def test_should_use_explicit_price(self, repository: InMemoryRepository) -> None:
        """Test listing at a given price."""
        instrument = list_instrument(repository, "A", "C", "X", price="55.5")
        assert instrument.current_price == Decimal("55.50")

    def test_should_default_unknown_position_and_injury(self, repository: InMemoryRepository) -> None:
        """Test fallbacks for feed values."""
        instrument = list_instrument(
            repository, "A", "G-F", "X", price=10, injury_status="questionable"
        )
        assert instrument.position == PlayerPosition.SMALL_FORWARD
        assert instrument.injury_status == InjuryStatus.HEALTHY

    def test_should_reject_negative_stats(self, repository: InMemoryRepository) -> None:
        """Test stat validation on listing."""
        with pytest.raises(pydantic.ValidationError):
            list_instrument(repository, "A", "C", "X", {"ppg": -3})
        assert repository.list_instruments() == []


class TestDemoCatalog:
    """Test demo seeding."""

    def test_should_seed_user_and_athletes(self, repository: InMemoryRepository) -> None:
        """Test demo catalog contents."""
        user, instruments = seed_demo_catalog(repository)

        assert user.username == DEMO_USERNAME
        assert user.cash == Decimal("10000.00")
        assert len(instruments) == 5
        giannis = instruments[2]
        assert giannis.injury_status == InjuryStatus.MINOR
        assert giannis.hotness == -45
        assert giannis.previous_price == Decimal("84.92")

    def test_should_be_idempotent(self, repository: InMemoryRepository) -> None:
        """Test that reseeding does not duplicate rows."""
        seed_demo_catalog(repository)
        seed_demo_catalog(repository)

        assert len(repository.list_users()) == 1
        assert len(repository.list_instruments()) == 5
