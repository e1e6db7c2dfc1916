"""
Instrument (athlete) domain model.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType

from athlete_exchange.core.constants import HOTNESS_MAX, HOTNESS_MIN
from athlete_exchange.core.enums import InjuryStatus, PlayerPosition
from athlete_exchange.core.exceptions.exchange import ValidationError
from athlete_exchange.core.types.money import ZERO, calculate_percent_change, round_money


@dataclass(frozen=True)
class Instrument:
    """A tradable athlete with a dynamically computed price."""

    id: int
    name: str
    position: PlayerPosition
    team: str
    current_price: Decimal
    created_at: datetime
    sport: str = "NBA"
    previous_price: Decimal | None = None
    stats: Mapping[str, float] = field(default_factory=dict)
    injury_status: InjuryStatus = InjuryStatus.HEALTHY
    hotness: int = 0
    trading_volume: int = 0
    last_reprice_volume: int = 0

    def __post_init__(self) -> None:
        """Normalize and validate instrument data after initialization."""
        object.__setattr__(self, "current_price", round_money(self.current_price))
        if self.previous_price is not None:
            object.__setattr__(self, "previous_price", round_money(self.previous_price))
        object.__setattr__(self, "stats", MappingProxyType(dict(self.stats)))

        if not self.name:
            raise ValidationError("Instrument name must be non-empty")
        if self.current_price <= ZERO:
            raise ValidationError(f"Current price must be positive, got {self.current_price}")
        if self.previous_price is not None and self.previous_price <= ZERO:
            raise ValidationError(f"Previous price must be positive, got {self.previous_price}")
        if not HOTNESS_MIN <= self.hotness <= HOTNESS_MAX:
            raise ValidationError(
                f"Hotness must be between {HOTNESS_MIN} and {HOTNESS_MAX}, got {self.hotness}"
            )
        if self.trading_volume < 0:
            raise ValidationError(f"Trading volume must be non-negative, got {self.trading_volume}")
        if not 0 <= self.last_reprice_volume <= self.trading_volume:
            raise ValidationError(
                f"Reprice volume baseline {self.last_reprice_volume} outside "
                f"0..{self.trading_volume}"
            )

    @property
    def volume_since_reprice(self) -> int:
        """Shares traded since the last repricing."""
        return self.trading_volume - self.last_reprice_volume

    def price_change_percent(self) -> Decimal | None:
        """Percentage change from the previous price, or None before the first repricing."""
        if self.previous_price is None:
            return None
        return calculate_percent_change(self.previous_price, self.current_price)
