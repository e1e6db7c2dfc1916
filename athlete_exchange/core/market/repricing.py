"""
Periodic repricing of instruments.

Invoked by an external scheduler, never from the trade path. Each
instrument is repriced inside its own `repository.atomic()` unit, the same
serialization the ledger uses for commits. A bad snapshot or unknown
instrument fails only its own repricing within a batch.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from athlete_exchange.core.config import ExchangeSettings, get_settings
from athlete_exchange.core.enums import InjuryStatus
from athlete_exchange.core.exceptions.exchange import (
    ExchangeException,
    NotFoundError,
    RepricingError,
)
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.stats import StatsSnapshot
from athlete_exchange.core.pricing.price_model import (
    hotness_score,
    injury_adjusted_price,
    reprice,
)

SnapshotInput = StatsSnapshot | Mapping[str, Any] | None


@dataclass
class RepricingReport:
    """Outcome of a repricing batch."""

    repriced: list[Instrument] = field(default_factory=list)
    failures: dict[int, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> int:
        return len(self.repriced)

    @property
    def failed(self) -> int:
        return len(self.failures)


class RepricingService:
    """Applies the price model to stored instruments."""

    def __init__(
        self, repository: IExchangeRepository, settings: ExchangeSettings | None = None
    ) -> None:
        self.repository = repository
        self.settings = settings or get_settings()

    def market_average_volume(self) -> float:
        """Mean volume traded since the last repricing across all instruments."""
        instruments = self.repository.list_instruments()
        if not instruments:
            return 0.0
        return sum(i.volume_since_reprice for i in instruments) / len(instruments)

    def reprice_instrument(
        self,
        instrument_id: int,
        snapshot: SnapshotInput = None,
        *,
        market_average: float | None = None,
    ) -> Instrument:
        """Reprice one instrument from a stats snapshot.

        Args:
            instrument_id: Instrument to reprice
            snapshot: New stats, injury state, sentiment and optional volume
                overrides; a plain mapping is validated into a StatsSnapshot
            market_average: Reference volume when the snapshot has none;
                defaults to `market_average_volume()`

        Returns:
            The repriced instrument

        Raises:
            RepricingError: If the snapshot is malformed or the maths fails
            NotFoundError: If the instrument does not exist
        """
        parsed = self._parse_snapshot(instrument_id, snapshot)

        with self.repository.atomic():
            instrument = self.repository.get_instrument(instrument_id)
            if instrument is None:
                raise NotFoundError("instrument", instrument_id)

            volume = parsed.volume if parsed.volume is not None else instrument.volume_since_reprice
            if parsed.average_volume is not None:
                average = parsed.average_volume
            elif market_average is not None:
                average = market_average
            else:
                average = self.market_average_volume()

            new_status = self._resolve_injury_status(instrument, parsed.injury_status)
            anchored = injury_adjusted_price(
                instrument.current_price, instrument.injury_status, new_status
            )
            try:
                new_price = reprice(
                    anchored,
                    float(volume) if average > 0 else 1.0,
                    float(average) if average > 0 else 1.0,
                    parsed.sentiment,
                    volume_impact=self.settings.volume_impact,
                    sentiment_impact=self.settings.sentiment_impact,
                    min_price=self.settings.min_price,
                )
            except ExchangeException as e:
                raise RepricingError(instrument_id, str(e)) from e

            self.repository.update_instrument_profile(
                instrument_id,
                stats=parsed.stats.as_blob() if parsed.stats is not None else None,
                injury_status=new_status,
            )
            self.repository.update_instrument_price(instrument_id, new_price)
            self.repository.update_instrument_hotness(instrument_id, hotness_score(volume, average))
            updated = self.repository.mark_instrument_repriced(instrument_id)

        logger.info(
            f"Repriced {updated.name}: {updated.previous_price} -> {updated.current_price} "
            f"(volume={volume}, avg={average:.2f}, hotness={updated.hotness})"
        )
        return updated

    def reprice_all(self, snapshots: Mapping[int, SnapshotInput]) -> RepricingReport:
        """Reprice a batch of instruments, isolating failures per instrument.

        The market average volume is measured once, before any instrument's
        volume baseline is reset.
        """
        report = RepricingReport()
        market_average = self.market_average_volume()

        for instrument_id, snapshot in snapshots.items():
            try:
                report.repriced.append(
                    self.reprice_instrument(instrument_id, snapshot, market_average=market_average)
                )
            except ExchangeException as e:
                report.failures[instrument_id] = str(e)
                logger.warning(f"Skipping instrument {instrument_id}: {e}")

        if report.failures:
            logger.warning(
                f"Repricing finished with {report.failed} failures, {report.succeeded} repriced"
            )
        else:
            logger.success(f"Repriced {report.succeeded} instruments")
        return report

    @staticmethod
    def _resolve_injury_status(instrument: Instrument, raw: str | None) -> InjuryStatus:
        if raw is None:
            return instrument.injury_status
        status = InjuryStatus.parse(raw)
        if status is None:
            logger.warning(
                f"Unknown injury status {raw!r} for {instrument.name}; "
                f"keeping {instrument.injury_status.value}"
            )
            return instrument.injury_status
        return status

    @staticmethod
    def _parse_snapshot(instrument_id: int, snapshot: SnapshotInput) -> StatsSnapshot:
        if snapshot is None:
            return StatsSnapshot()
        if isinstance(snapshot, StatsSnapshot):
            return snapshot
        try:
            return StatsSnapshot.model_validate(snapshot)
        except PydanticValidationError as e:
            raise RepricingError(instrument_id, f"invalid snapshot: {e.error_count()} errors") from e
