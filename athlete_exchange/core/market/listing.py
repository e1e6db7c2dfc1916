"""
Instrument listing (IPO).

A new instrument is priced either explicitly or from its stat line via the
injury-adjusted fair value.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from loguru import logger

from athlete_exchange.core.enums import InjuryStatus, PlayerPosition
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.stats import PerformanceStats
from athlete_exchange.core.pricing.price_model import fair_value
from athlete_exchange.core.types.money import to_decimal


def list_instrument(
    repository: IExchangeRepository,
    name: str,
    position: PlayerPosition | str,
    team: str,
    stats: Mapping[str, Any] | None = None,
    price: Decimal | str | float | None = None,
    sport: str = "NBA",
    previous_price: Decimal | str | float | None = None,
    injury_status: InjuryStatus | str | None = InjuryStatus.HEALTHY,
    hotness: int = 0,
    trading_volume: int = 0,
) -> Instrument:
    """List a new instrument.

    Args:
        repository: Target repository
        name: Athlete name
        position: Position code; unknown codes are stored as the default bucket
        team: Team name
        stats: Per-game stat blob, validated as PerformanceStats
        price: Listing price; derived with `fair_value` when omitted

    Returns:
        The stored instrument

    Raises:
        pydantic.ValidationError: If the stat blob is malformed
    """
    validated = PerformanceStats.model_validate(dict(stats or {}))
    parsed_position = PlayerPosition.parse(position)
    parsed_injury = InjuryStatus.parse(injury_status)
    if parsed_injury is None:
        logger.warning(f"Unknown injury status {injury_status!r} for {name}; listing as healthy")
        parsed_injury = InjuryStatus.HEALTHY

    if price is None:
        listing_price = fair_value(validated.model_dump(), parsed_position, parsed_injury)
    else:
        listing_price = to_decimal(price)

    return repository.create_instrument(
        name=name,
        position=parsed_position,
        team=team,
        current_price=listing_price,
        sport=sport,
        previous_price=None if previous_price is None else to_decimal(previous_price),
        stats=validated.as_blob(),
        injury_status=parsed_injury,
        hotness=hotness,
        trading_volume=trading_volume,
    )
