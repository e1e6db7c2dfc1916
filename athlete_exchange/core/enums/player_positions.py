"""
Player position enumerations.

Positions select the stat multiplier bucket used for listing prices.
"""

from enum import StrEnum


class PlayerPosition(StrEnum):
    """Basketball positions with a dedicated pricing bucket."""

    POINT_GUARD = "PG"
    SHOOTING_GUARD = "SG"
    SMALL_FORWARD = "SF"
    POWER_FORWARD = "PF"
    CENTER = "C"

    @classmethod
    def default(cls) -> "PlayerPosition":
        """Bucket used for unrecognized positions."""
        return cls.SMALL_FORWARD

    @classmethod
    def parse(cls, value: "str | PlayerPosition | None") -> "PlayerPosition":
        """
        Parse a raw position code, falling back to the default bucket.

        Args:
            value: Position code such as ``"PG"`` (case-insensitive)

        Returns:
            Matching PlayerPosition, or `default()` if unrecognized
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.default()
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return cls.default()
