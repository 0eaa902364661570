"""Per-order lock registry.

Serializes every mutation of the same order inside one process while
leaving different orders free to proceed in parallel.  An order's lock
only exists while someone holds or waits for it.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class OrderLocks:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # order_id -> (lock, number of holders and waiters)
        self._locks: dict[int, tuple[threading.Lock, int]] = {}

    @contextmanager
    def hold(self, order_id: int) -> Iterator[None]:
        lock = self._acquire_entry(order_id)
        try:
            with lock:
                yield
        finally:
            self._release_entry(order_id)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _acquire_entry(self, order_id: int) -> threading.Lock:
        with self._guard:
            lock, users = self._locks.get(order_id, (threading.Lock(), 0))
            self._locks[order_id] = (lock, users + 1)
            return lock

    def _release_entry(self, order_id: int) -> None:
        with self._guard:
            lock, users = self._locks[order_id]
            if users == 1:
                del self._locks[order_id]
            else:
                self._locks[order_id] = (lock, users - 1)
