"""
In-memory repository.

Each entity type lives in its own arena table keyed by a monotonically
assigned integer id. Secondary indexes cover usernames and
(user, instrument) holdings.

Thread Safety:
    A single RLock guards every read and write. `atomic()` holds the lock for
    the whole unit of work, so readers on other threads wait until a unit is
    complete and never observe a partial commit. Mutations made inside
    `atomic()` are journaled; an exception rolls them back in reverse order.
"""

import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from loguru import logger

from athlete_exchange.core.enums import InjuryStatus, PlayerPosition, TradeDirection
from athlete_exchange.core.exceptions.exchange import (
    DuplicateUsernameError,
    NotFoundError,
    RepositoryError,
)
from athlete_exchange.core.interfaces.repository import IExchangeRepository
from athlete_exchange.core.models.holding import Holding
from athlete_exchange.core.models.instrument import Instrument
from athlete_exchange.core.models.trade import Trade
from athlete_exchange.core.models.user import User
from athlete_exchange.core.types.money import ZERO_MONEY


class _Table[T]:
    """Arena table: rows keyed by ids that are never reused."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.rows: dict[int, T] = {}
        self._next_id = 1

    def allocate_id(self) -> int:
        entity_id = self._next_id
        self._next_id += 1
        return entity_id

    def require(self, entity_id: int) -> T:
        try:
            return self.rows[entity_id]
        except KeyError:
            raise NotFoundError(self.name, entity_id) from None


class InMemoryRepository(IExchangeRepository):
    """Dictionary-backed repository with journaled atomic units."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))
        self._lock = threading.RLock()

        self._users: _Table[User] = _Table("user")
        self._instruments: _Table[Instrument] = _Table("instrument")
        self._holdings: _Table[Holding] = _Table("holding")
        self._trades: _Table[Trade] = _Table("trade")

        self._user_ids_by_username: dict[str, int] = {}
        self._holding_ids_by_pair: dict[tuple[int, int], int] = {}

        self._journal: list[Callable[[], None]] | None = None
        self._depth = 0

    # Unit of work
    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Apply the mutations made inside the block as a single unit."""
        with self._lock:
            if self._depth == 0:
                self._journal = []
            self._depth += 1
            try:
                yield
            except BaseException:
                if self._depth == 1:
                    self._rollback()
                raise
            finally:
                self._depth -= 1
                if self._depth == 0:
                    self._journal = None

    def _rollback(self) -> None:
        journal = self._journal or []
        logger.debug(f"Rolling back {len(journal)} repository mutations")
        for undo in reversed(journal):
            undo()
        journal.clear()

    def _record(self, undo: Callable[[], None]) -> None:
        if self._journal is not None:
            self._journal.append(undo)

    def _put[T](self, table: _Table[T], entity_id: int, row: T) -> None:
        previous = table.rows.get(entity_id)

        def undo() -> None:
            if previous is None:
                table.rows.pop(entity_id, None)
            else:
                table.rows[entity_id] = previous

        table.rows[entity_id] = row
        self._record(undo)

    def _index_put[K](self, index: dict[K, int], key: K, entity_id: int) -> None:
        self._record(lambda: index.pop(key, None))
        index[key] = entity_id

    # User operations
    def create_user(self, username: str, cash: Decimal) -> User:
        with self._lock:
            if username in self._user_ids_by_username:
                raise DuplicateUsernameError(username)
            user = User(
                id=self._users.allocate_id(),
                username=username,
                cash=cash,
                portfolio_value=ZERO_MONEY,
                created_at=self._clock(),
            )
            self._put(self._users, user.id, user)
            self._index_put(self._user_ids_by_username, username, user.id)
            logger.debug(f"Created user {user.id} ({username})")
            return user

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.rows.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            user_id = self._user_ids_by_username.get(username)
            return None if user_id is None else self._users.rows.get(user_id)

    def list_users(self) -> list[User]:
        with self._lock:
            return [self._users.rows[k] for k in sorted(self._users.rows)]

    def update_user_cash(self, user_id: int, cash: Decimal) -> User:
        with self._lock:
            user = replace(self._users.require(user_id), cash=cash)
            self._put(self._users, user_id, user)
            return user

    def update_user_portfolio_value(self, user_id: int, portfolio_value: Decimal) -> User:
        with self._lock:
            user = replace(self._users.require(user_id), portfolio_value=portfolio_value)
            self._put(self._users, user_id, user)
            return user

    # Instrument operations
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
        with self._lock:
            instrument = Instrument(
                id=self._instruments.allocate_id(),
                name=name,
                position=position,
                team=team,
                sport=sport,
                current_price=current_price,
                previous_price=previous_price,
                stats=dict(stats or {}),
                injury_status=injury_status,
                hotness=hotness,
                trading_volume=trading_volume,
                last_reprice_volume=trading_volume,
                created_at=self._clock(),
            )
            self._put(self._instruments, instrument.id, instrument)
            logger.debug(f"Listed instrument {instrument.id} ({name}) at {instrument.current_price}")
            return instrument

    def get_instrument(self, instrument_id: int) -> Instrument | None:
        with self._lock:
            return self._instruments.rows.get(instrument_id)

    def list_instruments(self) -> list[Instrument]:
        with self._lock:
            return [self._instruments.rows[k] for k in sorted(self._instruments.rows)]

    def update_instrument_price(self, instrument_id: int, price: Decimal) -> Instrument:
        with self._lock:
            current = self._instruments.require(instrument_id)
            instrument = replace(
                current, previous_price=current.current_price, current_price=price
            )
            self._put(self._instruments, instrument_id, instrument)
            return instrument

    def update_instrument_hotness(self, instrument_id: int, hotness: int) -> Instrument:
        with self._lock:
            instrument = replace(self._instruments.require(instrument_id), hotness=hotness)
            self._put(self._instruments, instrument_id, instrument)
            return instrument

    def update_instrument_profile(
        self,
        instrument_id: int,
        stats: Mapping[str, Any] | None = None,
        injury_status: InjuryStatus | None = None,
    ) -> Instrument:
        with self._lock:
            instrument = self._instruments.require(instrument_id)
            if stats is not None:
                instrument = replace(instrument, stats=dict(stats))
            if injury_status is not None:
                instrument = replace(instrument, injury_status=injury_status)
            self._put(self._instruments, instrument_id, instrument)
            return instrument

    def increment_instrument_volume(self, instrument_id: int, shares: int) -> Instrument:
        if shares < 0:
            raise RepositoryError(f"Trading volume is monotonic, cannot add {shares}")
        with self._lock:
            current = self._instruments.require(instrument_id)
            instrument = replace(current, trading_volume=current.trading_volume + shares)
            self._put(self._instruments, instrument_id, instrument)
            return instrument

    def mark_instrument_repriced(self, instrument_id: int) -> Instrument:
        with self._lock:
            current = self._instruments.require(instrument_id)
            instrument = replace(current, last_reprice_volume=current.trading_volume)
            self._put(self._instruments, instrument_id, instrument)
            return instrument

    # Holding operations
    def get_holding(self, user_id: int, instrument_id: int) -> Holding | None:
        with self._lock:
            holding_id = self._holding_ids_by_pair.get((user_id, instrument_id))
            return None if holding_id is None else self._holdings.rows.get(holding_id)

    def list_holdings(self, user_id: int) -> list[Holding]:
        with self._lock:
            return [
                self._holdings.rows[k]
                for k in sorted(self._holdings.rows)
                if self._holdings.rows[k].user_id == user_id
            ]

    def create_holding(
        self,
        user_id: int,
        instrument_id: int,
        shares: int,
        average_cost: Decimal,
        total_value: Decimal,
    ) -> Holding:
        with self._lock:
            pair = (user_id, instrument_id)
            if pair in self._holding_ids_by_pair:
                raise RepositoryError(
                    f"Holding already exists for user {user_id}, instrument {instrument_id}"
                )
            self._users.require(user_id)
            self._instruments.require(instrument_id)

            now = self._clock()
            holding = Holding(
                id=self._holdings.allocate_id(),
                user_id=user_id,
                instrument_id=instrument_id,
                shares=shares,
                average_cost=average_cost,
                total_value=total_value,
                created_at=now,
                updated_at=now,
            )
            self._put(self._holdings, holding.id, holding)
            self._index_put(self._holding_ids_by_pair, pair, holding.id)
            return holding

    def update_holding(
        self, holding_id: int, shares: int, average_cost: Decimal, total_value: Decimal
    ) -> Holding:
        with self._lock:
            holding = replace(
                self._holdings.require(holding_id),
                shares=shares,
                average_cost=average_cost,
                total_value=total_value,
                updated_at=self._clock(),
            )
            self._put(self._holdings, holding_id, holding)
            return holding

    def delete_holding(self, holding_id: int) -> None:
        with self._lock:
            holding = self._holdings.require(holding_id)
            pair = (holding.user_id, holding.instrument_id)

            def undo() -> None:
                self._holdings.rows[holding_id] = holding
                self._holding_ids_by_pair[pair] = holding_id

            del self._holdings.rows[holding_id]
            self._holding_ids_by_pair.pop(pair, None)
            self._record(undo)

    # Trade operations
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
        with self._lock:
            trade = Trade(
                id=self._trades.allocate_id(),
                user_id=user_id,
                instrument_id=instrument_id,
                direction=direction,
                shares=shares,
                price_per_share=price_per_share,
                subtotal=subtotal,
                fee=fee,
                total_amount=total_amount,
                timestamp=timestamp,
            )
            self._put(self._trades, trade.id, trade)
            return trade

    def list_trades(self, user_id: int, limit: int | None = None) -> list[Trade]:
        with self._lock:
            trades = [t for t in self._trades.rows.values() if t.user_id == user_id]
        return _newest_first(trades, limit)

    def list_recent_trades(self, limit: int | None = None) -> list[Trade]:
        with self._lock:
            trades = list(self._trades.rows.values())
        return _newest_first(trades, limit)

    def iter_trades(self) -> Iterator[Trade]:
        with self._lock:
            trades = [self._trades.rows[k] for k in sorted(self._trades.rows)]
        return iter(trades)


def _newest_first(trades: list[Trade], limit: int | None) -> list[Trade]:
    """Sort by timestamp then id, descending, and apply the limit."""
    trades.sort(key=lambda t: (t.timestamp, t.id), reverse=True)
    return trades if limit is None else trades[:limit]
