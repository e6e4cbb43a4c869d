"""Per-product locks spanning a whole check-then-decrement sequence.

One process-wide registry is shared by every workflow that reads stock
and writes it back. Locks are always taken in sorted product-id order so
two requests touching overlapping products cannot deadlock.

An entry exists only while some thread holds or waits for it, so ids
that are never seen again do not pile up.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from greenmarket.domain.exceptions import ConcurrencyError


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class ProductLocks:

    def __init__(self, timeout: float = 5.0) -> None:
        self._timeout = timeout
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        """Number of product ids currently held or waited on."""
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, product_ids: Iterable[str]) -> Iterator[None]:
        """Hold the locks of every product in ``product_ids``.

        Raises ConcurrencyError if a lock is not acquired within the
        configured timeout.
        """
        acquired: list[tuple[str, _Entry]] = []
        try:
            for product_id in sorted(set(product_ids)):
                entry = self._checkout(product_id)
                if not entry.lock.acquire(timeout=self._timeout):
                    self._checkin(product_id, entry)
                    raise ConcurrencyError(
                        f"Product '{product_id}' is busy, please retry"
                    )
                acquired.append((product_id, entry))
            yield
        finally:
            for product_id, entry in reversed(acquired):
                entry.lock.release()
                self._checkin(product_id, entry)

    def _checkout(self, product_id: str) -> _Entry:
        with self._guard:
            entry = self._entries.get(product_id)
            if entry is None:
                entry = self._entries[product_id] = _Entry()
            entry.users += 1
            return entry

    def _checkin(self, product_id: str, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[product_id]
