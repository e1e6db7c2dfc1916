"""
Demo catalog.

Seeds a repository with a demo trader and a handful of NBA athletes so a
fresh exchange has something to trade. Seeding is idempotent by name: an
athlete or user already present is left untouched.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from loguru import logger

from athlete_exchange.core.config import ExchangeSettings, get_settings
from athlete_exchange.core.enums import InjuryStatus, PlayerPosition
from athlete_exchange.core.exchange import Exchange
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.market import list_instrument
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.user import User
from athlete_exchange.infrastructure.storage import InMemoryRepository

DEMO_USERNAME = "demo_user"


@dataclass(frozen=True)
class AthleteListing:
    """Static listing data for one catalog athlete."""

    name: str
    position: PlayerPosition
    team: str
    current_price: Decimal
    previous_price: Decimal
    stats: dict[str, Any] = field(default_factory=dict)
    injury_status: InjuryStatus = InjuryStatus.HEALTHY
    hotness: int = 0
    trading_volume: int = 0


DEMO_ATHLETES: tuple[AthleteListing, ...] = (
    AthleteListing(
        name="LeBron James",
        position=PlayerPosition.SMALL_FORWARD,
        team="Lakers",
        current_price=Decimal("84.50"),
        previous_price=Decimal("81.26"),
        stats={"ppg": 27.4, "rpg": 8.2, "apg": 7.1},
        hotness=85,
        trading_volume=1250,
    ),
    AthleteListing(
        name="Stephen Curry",
        position=PlayerPosition.POINT_GUARD,
        team="Warriors",
        current_price=Decimal("91.20"),
        previous_price=Decimal("93.05"),
        stats={"ppg": 29.1, "rpg": 6.2, "apg": 6.8},
        hotness=42,
        trading_volume=980,
    ),
    AthleteListing(
        name="Giannis Antetokounmpo",
        position=PlayerPosition.POWER_FORWARD,
        team="Bucks",
        current_price=Decimal("76.80"),
        previous_price=Decimal("84.92"),
        stats={"ppg": 31.2, "rpg": 12.1, "apg": 5.7},
        injury_status=InjuryStatus.MINOR,
        hotness=-45,
        trading_volume=1800,
    ),
    AthleteListing(
        name="Luka Dončić",
        position=PlayerPosition.POINT_GUARD,
        team="Mavericks",
        current_price=Decimal("89.45"),
        previous_price=Decimal("83.78"),
        stats={"ppg": 32.8, "rpg": 8.9, "apg": 9.1},
        hotness=72,
        trading_volume=1450,
    ),
    AthleteListing(
        name="Jayson Tatum",
        position=PlayerPosition.SMALL_FORWARD,
        team="Celtics",
        current_price=Decimal("78.90"),
        previous_price=Decimal("77.20"),
        stats={"ppg": 26.9, "rpg": 8.1, "apg": 4.9},
        hotness=28,
        trading_volume=750,
    ),
)


def seed_demo_catalog(
    repository: IExchangeRepository,
    starting_cash: Decimal | None = None,
    athletes: tuple[AthleteListing, ...] = DEMO_ATHLETES,
) -> tuple[User, list[Instrument]]:
    """Create the demo user and list the demo athletes.

    Returns:
        The demo user and the catalog instruments in listing order
    """
    cash = get_settings().starting_cash if starting_cash is None else starting_cash

    user = repository.get_user_by_username(DEMO_USERNAME)
    if user is None:
        user = repository.create_user(DEMO_USERNAME, cash)

    existing = {instrument.name: instrument for instrument in repository.list_instruments()}
    instruments = []
    for athlete in athletes:
        if athlete.name in existing:
            instruments.append(existing[athlete.name])
            continue
        instruments.append(
            list_instrument(
                repository,
                name=athlete.name,
                position=athlete.position,
                team=athlete.team,
                stats=athlete.stats,
                price=athlete.current_price,
                previous_price=athlete.previous_price,
                injury_status=athlete.injury_status,
                hotness=athlete.hotness,
                trading_volume=athlete.trading_volume,
            )
        )

    logger.info(f"Seeded demo catalog: {len(instruments)} athletes, user {user.username}")
    return user, instruments


def build_in_memory_exchange(
    seed_demo: bool = False,
    settings: ExchangeSettings | None = None,
    clock: Callable[[], datetime] | None = None,
) -> Exchange:
    """Wire an Exchange to a fresh in-memory repository."""
    clock = clock or (lambda: datetime.now(UTC))
    settings = settings or get_settings()
    repository = InMemoryRepository(clock=clock)
    if seed_demo:
        seed_demo_catalog(repository, starting_cash=settings.starting_cash)
    return Exchange(repository, settings=settings, clock=clock)
