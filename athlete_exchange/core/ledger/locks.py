"""
Keyed locks for serializing trades.

Trades of the same user must not interleave: the balance check and the debit,
and the share-count and average-cost updates, form one critical section.
Different users trade in parallel.
"""

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

_GLOBAL_KEY = "__all__"


@dataclass
class _LockEntry:
    lock: threading.RLock = field(default_factory=threading.RLock)
    refs: int = 0


class KeyedLockManager:
    """Hands out one re-entrant lock per key, dropping it when unused.

    With ``serialize_all=True`` every key maps to one lock, giving a single
    global critical section.
    """

    def __init__(self, serialize_all: bool = False) -> None:
        self._serialize_all = serialize_all
        self._guard = threading.Lock()
        self._entries: dict[Hashable, _LockEntry] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Hold the lock for `key` for the duration of the block."""
        key = _GLOBAL_KEY if self._serialize_all else key

        with self._guard:
            entry = self._entries.setdefault(key, _LockEntry())
            entry.refs += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.refs -= 1
                if entry.refs == 0:
                    self._entries.pop(key, None)
