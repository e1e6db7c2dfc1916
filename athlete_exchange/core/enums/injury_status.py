"""
Injury status enumerations.

Injury severity scales an instrument's valuation; see
`athlete_exchange.core.pricing.price_model.injury_multiplier`.
"""

from enum import StrEnum


class InjuryStatus(StrEnum):
    """Allowed injury states, ordered from healthy to out."""

    HEALTHY = "healthy"
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"
    OUT = "out"

    @classmethod
    def parse(cls, value: "str | InjuryStatus | None") -> "InjuryStatus | None":
        """
        Parse a raw status, returning None for unknown values.

        Unknown statuses are not an error: the pricing model treats them as
        healthy.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None
