"""
Unit tests for domain models and result types.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pydantic
import pytest

from athlete_exchange.core.enums import InjuryStatus, PlayerPosition, TradeDirection
from athlete_exchange.core.exceptions import InsufficientSharesError, ValidationError
from athlete_exchange.core.models.holding import Holding
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.results import PortfolioSummary, TradeResult
from athlete_exchange.core.models.stats import PerformanceStats, StatsSnapshot
from athlete_exchange.core.models.trade import Trade
from athlete_exchange.core.models.user import User

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


def make_instrument(**overrides: object) -> Instrument:
    fields: dict = {
        "id": 1,
        "name": "LeBron James",
        "position": PlayerPosition.SMALL_FORWARD,
        "team": "Lakers",
        "current_price": Decimal("84.50"),
        "created_at": NOW,
    }
    fields.update(overrides)
    return Instrument(**fields)


def make_trade(direction: TradeDirection) -> Trade:
    return Trade(
        id=1,
        user_id=1,
        instrument_id=1,
        direction=direction,
        shares=10,
        price_per_share=Decimal("84.50"),
        subtotal=Decimal("845.00"),
        fee=Decimal("12.68"),
        total_amount=Decimal("857.68") if direction.is_buy else Decimal("832.32"),
        timestamp=NOW,
    )


class TestUser:
    """Test User model validation."""

    def test_should_round_cash_to_cents(self) -> None:
        """Test cash normalization."""
        user = User(1, "alice", Decimal("100.005"), Decimal("0"), NOW)
        assert user.cash == Decimal("100.01")

    def test_should_reject_negative_cash(self) -> None:
        """Test that cash can never be negative."""
        with pytest.raises(ValidationError, match="Cash must be non-negative"):
            User(1, "alice", Decimal("-0.01"), Decimal("0"), NOW)

    def test_should_reject_blank_username(self) -> None:
        """Test username validation."""
        with pytest.raises(ValidationError, match="Username"):
            User(1, "  ", Decimal("10"), Decimal("0"), NOW)


class TestInstrument:
    """Test Instrument model validation."""

    def test_should_reject_non_positive_price(self) -> None:
        """Test price validation."""
        with pytest.raises(ValidationError, match="Current price must be positive"):
            make_instrument(current_price=Decimal("0"))

    @pytest.mark.parametrize("hotness", [-101, 101])
    def test_should_reject_hotness_out_of_range(self, hotness: int) -> None:
        """Test hotness bounds."""
        with pytest.raises(ValidationError, match="Hotness"):
            make_instrument(hotness=hotness)

    def test_should_reject_baseline_above_volume(self) -> None:
        """Test the repricing volume baseline invariant."""
        with pytest.raises(ValidationError, match="baseline"):
            make_instrument(trading_volume=10, last_reprice_volume=11)

    def test_should_expose_read_only_stats(self) -> None:
        """Test that the stat blob cannot be mutated in place."""
        instrument = make_instrument(stats={"ppg": 27.4})
        with pytest.raises(TypeError):
            instrument.stats["ppg"] = 99.0  # type: ignore[index]
        assert dict(instrument.stats) == {"ppg": 27.4}

    def test_should_report_price_change(self) -> None:
        """Test percentage change from the previous price."""
        assert make_instrument().price_change_percent() is None
        instrument = make_instrument(previous_price=Decimal("81.26"))
        assert instrument.price_change_percent() == Decimal("3.99")

    def test_should_report_volume_since_reprice(self) -> None:
        """Test volume window."""
        instrument = make_instrument(trading_volume=150, last_reprice_volume=100)
        assert instrument.volume_since_reprice == 50


class TestHolding:
    """Test Holding model."""

    def test_should_reject_non_positive_shares(self) -> None:
        """Test that empty holdings are not representable."""
        with pytest.raises(ValidationError, match="Shares must be positive"):
            Holding(1, 1, 1, 0, Decimal("84.5"), Decimal("0"), NOW, NOW)

    def test_should_value_against_live_price(self) -> None:
        """Test market value, cost basis and unrealized gain."""
        holding = Holding(1, 1, 1, 10, Decimal("84.50"), Decimal("845.00"), NOW, NOW)
        assert holding.market_value(Decimal("90.00")) == Decimal("900.00")
        assert holding.cost_basis() == Decimal("845.00")
        assert holding.unrealized_gain(Decimal("90.00")) == Decimal("55.00")


class TestTrade:
    """Test Trade model."""

    def test_should_sign_cash_delta_by_direction(self) -> None:
        """Test that buys debit and sells credit."""
        assert make_trade(TradeDirection.BUY).cash_delta == Decimal("-857.68")
        assert make_trade(TradeDirection.SELL).cash_delta == Decimal("832.32")

    def test_should_serialize_to_dict(self) -> None:
        """Test to_dict output."""
        data = make_trade(TradeDirection.BUY).to_dict()
        assert data["type"] == "buy"
        assert data["fee"] == "12.68"
        assert data["timestamp"] == NOW.isoformat()


class TestResults:
    """Test result types."""

    def test_should_require_exactly_one_outcome(self) -> None:
        """Test TradeResult construction."""
        with pytest.raises(ValueError):
            TradeResult()

    def test_should_unwrap_rejection(self) -> None:
        """Test that unwrap re-raises the rejection."""
        error = InsufficientSharesError(requested=5, held=0, instrument_id=1)
        result = TradeResult(error=error)
        assert not result.ok
        with pytest.raises(InsufficientSharesError):
            result.unwrap()

    def test_should_compute_summary_gain(self) -> None:
        """Test PortfolioSummary derived fields."""
        summary = PortfolioSummary(
            user_id=1,
            cash=Decimal("9142.32"),
            total_value=Decimal("874.30"),
            total_cost=Decimal("845.00"),
        )
        assert summary.total_gain == Decimal("29.30")
        assert summary.total_gain_percent == Decimal("3.47")
        assert summary.net_worth == Decimal("10016.62")

    def test_should_report_zero_gain_percent_without_cost(self) -> None:
        """Test empty portfolio summary."""
        summary = PortfolioSummary(1, Decimal("100"), Decimal("0"), Decimal("0"))
        assert summary.total_gain_percent == Decimal("0.00")


class TestStatsModels:
    """Test pydantic stats models."""

    def test_should_reject_negative_stats(self) -> None:
        """Test stat validation."""
        with pytest.raises(pydantic.ValidationError):
            PerformanceStats(ppg=-1)

    def test_should_keep_extra_stats_in_blob(self) -> None:
        """Test that unknown stats round-trip but defaults are omitted."""
        stats = PerformanceStats.model_validate({"ppg": 27.4, "fouls": 2.1})
        assert stats.as_blob() == {"ppg": 27.4, "fouls": 2.1}

    def test_should_normalize_injury_status(self) -> None:
        """Test case-insensitive injury parsing."""
        snapshot = StatsSnapshot.model_validate({"injury_status": "MAJOR"})
        assert snapshot.injury_status == InjuryStatus.MAJOR

    @pytest.mark.parametrize("sentiment", [-1.5, 1.5])
    def test_should_reject_sentiment_out_of_range(self, sentiment: float) -> None:
        """Test sentiment bounds."""
        with pytest.raises(pydantic.ValidationError):
            StatsSnapshot(sentiment=sentiment)
