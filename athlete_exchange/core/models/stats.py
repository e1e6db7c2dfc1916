"""
Pydantic models for performance stats and repricing snapshots.

These validate data coming from the external stats feed; a snapshot that
fails validation only fails the repricing of its own instrument.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PerformanceStats(BaseModel):
    """Per-game stat line for an athlete.

    Unlisted stats are kept (``extra="allow"``) so the stored blob round-trips,
    but only the fields declared here feed the pricing model.
    """

    model_config = ConfigDict(extra="allow")

    ppg: float = Field(default=0.0, ge=0, description="Points per game")
    rpg: float = Field(default=0.0, ge=0, description="Rebounds per game")
    apg: float = Field(default=0.0, ge=0, description="Assists per game")
    stl: float = Field(default=0.0, ge=0, description="Steals per game")
    blk: float = Field(default=0.0, ge=0, description="Blocks per game")
    threes: float = Field(default=0.0, ge=0, description="Three-pointers made per game")

    def as_blob(self) -> dict[str, Any]:
        """Stats as stored on the instrument, omitting zero defaults."""
        return self.model_dump(exclude_defaults=True)


class StatsSnapshot(BaseModel):
    """Input to a single instrument repricing."""

    stats: PerformanceStats | None = Field(
        default=None, description="New stat line; keeps the stored stats when omitted"
    )
    injury_status: str | None = Field(
        default=None,
        description="New injury state; keeps the stored state when omitted or unrecognized",
    )
    sentiment: float = Field(default=0.0, ge=-1.0, le=1.0, description="Market sentiment")
    volume: int | None = Field(
        default=None, ge=0, description="Volume for this window; defaults to volume since last repricing"
    )
    average_volume: float | None = Field(
        default=None, ge=0, description="Reference volume; defaults to the market average"
    )

    @field_validator("injury_status", mode="before")
    @classmethod
    def normalize_injury_status(cls, v: Any) -> Any:
        """Accept injury states in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v
