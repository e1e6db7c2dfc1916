"""
Repository interface for durable exchange state.

The repository exclusively owns the canonical Users, Instruments, Holdings
and Trades. Entities are immutable records: updates replace a stored record
with a new one, so nothing handed out by a repository can be mutated behind
its back.

Atomicity contract:
    Mutations issued inside ``with repository.atomic():`` form one unit.
    Readers never observe part of a unit, and an exception raised inside the
    block undoes every mutation made in it. Implementations must uphold this
    whatever their backing technology.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Any

from athlete_exchange.core.enums import InjuryStatus, PlayerPosition, TradeDirection
from athlete_exchange.core.models.holding import Holding
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.trade import Trade
from athlete_exchange.core.models.user import User


class IExchangeRepository(ABC):
    """Abstract interface for exchange state storage."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group mutations into a single all-or-nothing unit."""

    # User operations
    @abstractmethod
    def create_user(self, username: str, cash: Decimal) -> User:
        """Insert a new user. Raises DuplicateUsernameError for taken usernames."""

    @abstractmethod
    def get_user(self, user_id: int) -> User | None:
        """Get a user by id."""

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None:
        """Get a user by username."""

    @abstractmethod
    def list_users(self) -> list[User]:
        """Get all users in id order."""

    @abstractmethod
    def update_user_cash(self, user_id: int, cash: Decimal) -> User:
        """Set a user's cash balance."""

    @abstractmethod
    def update_user_portfolio_value(self, user_id: int, portfolio_value: Decimal) -> User:
        """Set a user's cached portfolio value."""

    # Instrument operations
    @abstractmethod
    def create_instrument(
        self,
        name: str,
        position: PlayerPosition,
        team: str,
        current_price: Decimal,
        sport: str = "NBA",
        previous_price: Decimal | None = None,
        stats: Mapping[str, Any] | None = None,
        injury_status: InjuryStatus = InjuryStatus.HEALTHY,
        hotness: int = 0,
        trading_volume: int = 0,
    ) -> Instrument:
        """Insert a new instrument."""

    @abstractmethod
    def get_instrument(self, instrument_id: int) -> Instrument | None:
        """Get an instrument by id."""

    @abstractmethod
    def list_instruments(self) -> list[Instrument]:
        """Get all instruments in id order."""

    @abstractmethod
    def update_instrument_price(self, instrument_id: int, price: Decimal) -> Instrument:
        """Set the current price, moving the old one to `previous_price`."""

    @abstractmethod
    def update_instrument_hotness(self, instrument_id: int, hotness: int) -> Instrument:
        """Set the advisory hotness score."""

    @abstractmethod
    def update_instrument_profile(
        self,
        instrument_id: int,
        stats: Mapping[str, Any] | None = None,
        injury_status: InjuryStatus | None = None,
    ) -> Instrument:
        """Replace stats and/or injury status; None leaves a field unchanged."""

    @abstractmethod
    def increment_instrument_volume(self, instrument_id: int, shares: int) -> Instrument:
        """Atomically add `shares` to the cumulative trading volume."""

    @abstractmethod
    def mark_instrument_repriced(self, instrument_id: int) -> Instrument:
        """Reset the volume-since-repricing baseline to the current volume."""

    # Holding operations
    @abstractmethod
    def get_holding(self, user_id: int, instrument_id: int) -> Holding | None:
        """Get the holding for a (user, instrument) pair."""

    @abstractmethod
    def list_holdings(self, user_id: int) -> list[Holding]:
        """Get a user's holdings in id order."""

    @abstractmethod
    def create_holding(
        self,
        user_id: int,
        instrument_id: int,
        shares: int,
        average_cost: Decimal,
        total_value: Decimal,
    ) -> Holding:
        """Insert a holding. At most one may exist per (user, instrument)."""

    @abstractmethod
    def update_holding(
        self, holding_id: int, shares: int, average_cost: Decimal, total_value: Decimal
    ) -> Holding:
        """Replace a holding's share count, cost basis and valuation."""

    @abstractmethod
    def delete_holding(self, holding_id: int) -> None:
        """Delete a holding."""

    # Trade operations
    @abstractmethod
    def append_trade(
        self,
        user_id: int,
        instrument_id: int,
        direction: TradeDirection,
        shares: int,
        price_per_share: Decimal,
        subtotal: Decimal,
        fee: Decimal,
        total_amount: Decimal,
        timestamp: datetime,
    ) -> Trade:
        """Append an immutable trade record."""

    @abstractmethod
    def list_trades(self, user_id: int, limit: int | None = None) -> list[Trade]:
        """Get a user's trades, newest first."""

    @abstractmethod
    def list_recent_trades(self, limit: int | None = None) -> list[Trade]:
        """Get trades across all users, newest first."""

    @abstractmethod
    def iter_trades(self) -> Iterator[Trade]:
        """Iterate over the full trade log in insertion order."""
