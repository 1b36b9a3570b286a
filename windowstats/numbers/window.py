"""windowstats – bounded, deduplicated window of recently seen numbers.

The average calculator keeps one window per process. Each batch fetched
from the provider is folded into it:

- values already present are skipped (exact equality);
- new values are appended in the order received;
- whenever an append takes the window past its capacity the single
  oldest value is evicted, so the length never exceeds the capacity.

Thread safety: :meth:`BoundedUniqueWindow.update` holds a lock for the
whole read-modify-write, so the before/after snapshots it returns are
consistent even when requests arrive concurrently.
"""

from __future__ import annotations

from collections import deque
from threading import Lock
from typing import Deque, Iterable, Set

from windowstats.core.logging import get_logger
from windowstats.core.types import Number, WindowSnapshot
from windowstats.numbers.types import WindowUpdate

logger = get_logger(__name__)

DEFAULT_WINDOW_SIZE = 8


class BoundedUniqueWindow:
    """Fixed-capacity, insertion-ordered set of numbers.

    Only the atomic :meth:`update` operation is exposed; callers never
    get a mutable view of the contents.

    Parameters
    ----------
    capacity:
        Maximum number of values retained. Must be at least 1.
    """

    def __init__(self, capacity: int = DEFAULT_WINDOW_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"Window capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._values: Deque[Number] = deque()
        self._members: Set[Number] = set()
        self._lock = Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __repr__(self) -> str:
        with self._lock:
            contents = list(self._values)
        return f"BoundedUniqueWindow(capacity={self._capacity}, values={contents})"

    def _snapshot(self) -> WindowSnapshot:
        return tuple(self._values)

    def _insert(self, value: Number) -> None:
        self._values.append(value)
        self._members.add(value)
        if len(self._values) > self._capacity:
            evicted = self._values.popleft()
            self._members.discard(evicted)

    def update(self, incoming: Iterable[Number]) -> WindowUpdate:
        """Fold a batch of numbers into the window.

        Args:
            incoming: Numbers in the order received. May repeat each
                other or values already in the window.

        Returns:
            A :class:`WindowUpdate` with the snapshots before and after
            the batch. An empty batch returns identical snapshots.
        """

        batch = list(incoming)
        with self._lock:
            previous = self._snapshot()
            for value in batch:
                if value not in self._members:
                    self._insert(value)
            current = self._snapshot()

        if previous != current:
            logger.debug(
                "Window updated: %d incoming, size %d -> %d",
                len(batch),
                len(previous),
                len(current),
            )
        return WindowUpdate(previous=previous, current=current)
