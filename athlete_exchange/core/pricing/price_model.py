"""
Price formation model.

Pure functions computing an instrument's price from performance stats,
injury state and trading-volume/sentiment signals. Nothing here touches the
repository; the ledger, the catalog and the repricing job call in.

`reprice` is the only place floating-point transcendental maths is used;
its result is converted back to a cent-rounded Decimal.
"""

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from athlete_exchange.core.constants import (
    HOTNESS_MAX,
    HOTNESS_MIN,
    IPO_SCORE_DIVISOR,
    MIN_IPO_PRICE,
    MIN_PRICE,
    MIN_VOLUME_RATIO,
    SENTIMENT_IMPACT,
    VOLUME_IMPACT,
)
from athlete_exchange.core.enums import InjuryStatus, PlayerPosition
from athlete_exchange.core.exceptions.exchange import CalculationError
from athlete_exchange.core.types.money import round_money, to_decimal

# Points-per-stat weights by position bucket.
POSITION_MULTIPLIERS: dict[PlayerPosition, dict[str, float]] = {
    PlayerPosition.POINT_GUARD: {
        "ppg": 1.26, "rpg": 3.08, "apg": 2.73, "stl": 10.0, "blk": 25.0, "threes": 15.0,
    },
    PlayerPosition.SHOOTING_GUARD: {
        "ppg": 0.901, "rpg": 3.448, "apg": 4.0, "stl": 11.111, "blk": 33.333, "threes": 11.111,
    },
    PlayerPosition.SMALL_FORWARD: {
        "ppg": 0.917, "rpg": 2.326, "apg": 5.263, "stl": 12.5, "blk": 25.0, "threes": 14.286,
    },
    PlayerPosition.POWER_FORWARD: {
        "ppg": 1.0204, "rpg": 1.6949, "apg": 6.667, "stl": 14.286, "blk": 16.667, "threes": 25.0,
    },
    PlayerPosition.CENTER: {
        "ppg": 1.0989, "rpg": 1.5625, "apg": 7.692, "stl": 20.0, "blk": 10.0, "threes": 8.33,
    },
}

INJURY_MULTIPLIERS: dict[InjuryStatus, float] = {
    InjuryStatus.HEALTHY: 1.0,
    InjuryStatus.MINOR: 0.85,
    InjuryStatus.MODERATE: 0.65,
    InjuryStatus.MAJOR: 0.25,
    InjuryStatus.OUT: 0.1,
}

# (ratio strictly above, multiplier), checked in order; below all tiers is COLD.
HOTNESS_TIERS: tuple[tuple[float, float], ...] = (
    (2.0, 1.15),  # very hot
    (1.5, 1.08),  # hot
    (0.8, 1.0),  # normal
    (0.5, 0.95),  # cool
)
COLD_MULTIPLIER = 0.9
VERY_HOT_MULTIPLIER = HOTNESS_TIERS[0][1]


def _stat_value(stats: Mapping[str, Any], key: str) -> float:
    raw = stats.get(key)
    if raw is None:
        return 0.0
    value = float(raw)
    if not math.isfinite(value):
        raise CalculationError(f"Stat {key} must be finite, got {raw!r}")
    return value


def performance_score(stats: Mapping[str, Any], position: PlayerPosition | str | None) -> float:
    """Position-weighted score of a stat line.

    Unknown positions use the default (SF) bucket. Stats absent from the
    blob count as zero; stats without a weight are ignored.
    """
    multipliers = POSITION_MULTIPLIERS[PlayerPosition.parse(position)]
    return sum(_stat_value(stats, key) * weight for key, weight in multipliers.items())


def initial_price(stats: Mapping[str, Any], position: PlayerPosition | str | None) -> Decimal:
    """Listing price for an instrument: ``max(score / 10, 10)``.

    Args:
        stats: Per-game stat blob (``ppg``, ``rpg``, ``apg``, ...)
        position: Position code; unrecognized codes fall back to SF

    Returns:
        Price rounded to cents, never below MIN_IPO_PRICE
    """
    score = performance_score(stats, position)
    return max(round_money(score / IPO_SCORE_DIVISOR), MIN_IPO_PRICE)


def injury_multiplier(status: InjuryStatus | str | None) -> float:
    """Valuation factor for an injury state.

    Unknown statuses return 1.0: an unrecognized feed value is treated as
    healthy rather than rejected.
    """
    parsed = InjuryStatus.parse(status)
    if parsed is None:
        return 1.0
    return INJURY_MULTIPLIERS[parsed]


def volume_ratio(volume: float, avg_volume: float) -> float:
    """Volume relative to its average; 1.0 when there is no average."""
    if avg_volume <= 0:
        return 1.0
    return volume / avg_volume


def hotness_multiplier(volume: float, avg_volume: float) -> float:
    """Step function of the volume ratio.

    Thresholds are strict: a ratio of exactly 2.0 is "hot" (1.08), not
    "very hot".
    """
    ratio = volume_ratio(volume, avg_volume)
    for threshold, multiplier in HOTNESS_TIERS:
        if ratio > threshold:
            return multiplier
    return COLD_MULTIPLIER


def hotness_score(volume: float, avg_volume: float) -> int:
    """Map the hotness tier onto the advisory -100..100 scale."""
    multiplier = hotness_multiplier(volume, avg_volume)
    score = round((multiplier - 1.0) / (VERY_HOT_MULTIPLIER - 1.0) * 100)
    return max(HOTNESS_MIN, min(HOTNESS_MAX, score))


def reprice(
    current_price: Decimal,
    volume: float,
    avg_volume: float,
    sentiment: float = 0.0,
    *,
    volume_impact: float = VOLUME_IMPACT,
    sentiment_impact: float = SENTIMENT_IMPACT,
    min_price: Decimal = MIN_PRICE,
) -> Decimal:
    """Move a price by volume and sentiment.

    ``current * (1 + ln(volume / avg_volume) * 0.05 + sentiment * 0.03)``,
    floored at `min_price`. The volume ratio is floored at MIN_VOLUME_RATIO
    (the cold-tier boundary), so a window without trades costs about 3.5%.

    Args:
        current_price: Price before the move
        volume: Shares traded in the window (>= 0)
        avg_volume: Reference volume, must be > 0
        sentiment: Market sentiment, conventionally in [-1, 1]

    Returns:
        New price rounded to cents

    Raises:
        CalculationError: If avg_volume <= 0, volume < 0, or inputs are not finite
    """
    if not (math.isfinite(volume) and math.isfinite(avg_volume) and math.isfinite(sentiment)):
        raise CalculationError("Repricing inputs must be finite")
    if avg_volume <= 0:
        raise CalculationError(f"Average volume must be positive, got {avg_volume}")
    if volume < 0:
        raise CalculationError(f"Volume must be non-negative, got {volume}")

    ratio = max(volume / avg_volume, MIN_VOLUME_RATIO)
    factor = 1.0 + math.log(ratio) * volume_impact + sentiment * sentiment_impact
    moved = float(current_price) * factor
    return max(round_money(to_decimal(moved)), min_price)


def fair_value(
    stats: Mapping[str, Any],
    position: PlayerPosition | str | None,
    injury_status: InjuryStatus | str | None = InjuryStatus.HEALTHY,
) -> Decimal:
    """Injury-adjusted listing valuation, floored at MIN_PRICE."""
    valuation = float(initial_price(stats, position)) * injury_multiplier(injury_status)
    return max(round_money(to_decimal(valuation)), MIN_PRICE)


def injury_adjusted_price(
    current_price: Decimal,
    old_status: InjuryStatus | str | None,
    new_status: InjuryStatus | str | None,
) -> Decimal:
    """Rescale a market price when an athlete's injury state changes.

    The price is divided by the old state's factor and multiplied by the new
    one, so an unchanged state leaves the price untouched.
    """
    old_factor = injury_multiplier(old_status)
    new_factor = injury_multiplier(new_status)
    if old_factor == new_factor:
        return current_price
    return round_money(to_decimal(float(current_price) * new_factor / old_factor))
