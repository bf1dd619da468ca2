"""Compute-once memoized cell."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

_UNSET = object()


class OnceCell(Generic[T]):
    """A value that is computed at most once and is read-only afterwards.

    Uses double-checked locking: the fast path reads the value without taking the
    lock, the slow path computes it under the lock so concurrent callers observe
    a single computation.
    """

    __slots__ = ("_lock", "_value")

    def __init__(self) -> None:
        """Create an empty cell."""
        self._lock = threading.Lock()
        self._value: object = _UNSET

    def get_or_compute(self, factory: Callable[[], T]) -> T:
        """Return the cached value, computing it with ``factory`` on first use.

        Args:
            factory: Called at most once for the lifetime of the cell

        Returns:
            The cached value

        """
        value = self._value
        if value is _UNSET:
            with self._lock:
                value = self._value
                if value is _UNSET:
                    value = factory()
                    self._value = value
        return value  # type: ignore[return-value]
