"""
Market overview calculations.

Read-only aggregates over instruments and the trade log: market cap, daily
traded value, active traders, top gainer and trending instruments.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from athlete_exchange.core.constants import DAILY_WINDOW_HOURS, DEFAULT_TRENDING_LIMIT
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.types.money import ZERO_MONEY, round_money
from athlete_exchange.core.utils.validation import validate_limit


@dataclass(frozen=True)
class TopGainer:
    """Instrument with the best move since its previous price."""

    instrument_id: int
    name: str
    change_percent: Decimal

    @property
    def short_name(self) -> str:
        """Initials plus surname, e.g. ``"L. James"``."""
        parts = self.name.split()
        if len(parts) < 2:
            return self.name
        initials = ".".join(part[0] for part in parts[:-1])
        return f"{initials}. {parts[-1]}"


@dataclass(frozen=True)
class MarketOverview:
    """Snapshot of market-wide statistics."""

    market_cap: Decimal
    daily_volume: Decimal
    active_traders: int
    top_gainer: TopGainer | None

    def to_dict(self) -> dict:
        """Convert overview to dictionary."""
        return {
            "market_cap": str(self.market_cap),
            "daily_volume": str(self.daily_volume),
            "active_traders": self.active_traders,
            "top_gainer": (
                {"name": self.top_gainer.short_name, "change": str(self.top_gainer.change_percent)}
                if self.top_gainer
                else None
            ),
        }


class MarketStats:
    """Computes market aggregates from repository state."""

    def __init__(
        self,
        repository: IExchangeRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.repository = repository
        self._clock = clock or (lambda: datetime.now(UTC))

    def market_cap(self) -> Decimal:
        """Sum of current prices across all instruments."""
        return round_money(
            sum((i.current_price for i in self.repository.list_instruments()), ZERO_MONEY)
        )

    def top_gainer(self) -> TopGainer | None:
        """Instrument with the largest percentage change from its previous price.

        Instruments never repriced are skipped; ties go to the lower id.
        """
        best: TopGainer | None = None
        for instrument in self.repository.list_instruments():
            change = instrument.price_change_percent()
            if change is None:
                continue
            if best is None or change > best.change_percent:
                best = TopGainer(instrument.id, instrument.name, change)
        return best

    def market_overview(self, now: datetime | None = None) -> MarketOverview:
        """Market cap, traded value and distinct traders over the last day.

        A naive `now` is taken as UTC.
        """
        now = now or self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        cutoff = now - timedelta(hours=DAILY_WINDOW_HOURS)

        daily_volume = ZERO_MONEY
        traders: set[int] = set()
        for trade in self.repository.iter_trades():
            if cutoff < trade.timestamp <= now:
                daily_volume += trade.subtotal
                traders.add(trade.user_id)

        return MarketOverview(
            market_cap=self.market_cap(),
            daily_volume=round_money(daily_volume),
            active_traders=len(traders),
            top_gainer=self.top_gainer(),
        )

    def trending_instruments(self, limit: int = DEFAULT_TRENDING_LIMIT) -> list[Instrument]:
        """Instruments by cumulative trading volume, highest first."""
        validate_limit(limit)
        instruments = self.repository.list_instruments()
        instruments.sort(key=lambda i: (-i.trading_volume, i.id))
        return instruments[:limit]
