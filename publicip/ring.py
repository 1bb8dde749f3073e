"""
publicip/ring.py

Responsibility: Holds an ordered, fixed pool of interchangeable items and hands
them out round-robin to any number of concurrent callers.
Does NOT: know what the items are or perform any I/O.
"""

from __future__ import annotations

import itertools
import sys
import threading
from typing import Generic, Iterable, Iterator, TypeVar

from exceptions import NoSourcesError

T = TypeVar("T")

# False only on free-threaded builds running with the GIL disabled
GIL_ENABLED: bool = getattr(sys, "_is_gil_enabled", lambda: True)()


class Ring(Generic[T]):
    """
    Immutable round-robin pool.

    Selection is ``next(counter) % len(items)`` with the counter starting at
    1, so the first call returns the second member and rotation wraps from
    there. With the GIL, ``next()`` on an itertools.count is a single C-level
    step, so concurrent threads and tasks each get a distinct counter value
    without a lock. On free-threaded builds with the GIL disabled the
    increment is guarded by a lock held only for that one step. Python
    integers do not overflow, so the index is always in range.
    """

    def __init__(self, items: Iterable[T], name: str = "ring") -> None:
        """
        Args:
            items: The pool members, in rotation order.
            name: Label used in error messages.

        Raises:
            NoSourcesError: If ``items`` is empty.
        """
        self._items: tuple[T, ...] = tuple(items)
        if not self._items:
            raise NoSourcesError(f"{name} has no members")
        self._name = name
        self._counter = itertools.count(1)
        self._lock = None if GIL_ENABLED else threading.Lock()

    def next(self) -> T:
        """Returns the next member in rotation order."""
        if self._lock is None:
            count = next(self._counter)
        else:
            with self._lock:
                count = next(self._counter)
        return self._items[count % len(self._items)]

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Ring({self._name!r}, size={len(self._items)})"
