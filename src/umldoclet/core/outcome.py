"""Tagged outcomes for fallible operations.

Every fallible operation in the link resolver and the page replace path returns
one of three variants:

- ``Success(value)``: the operation completed.
- ``Recoverable(default, warning)``: the operation failed, the caller continues with ``default``.
- ``Fatal(cause)``: the run must stop.

``unwrap()`` turns an outcome back into a value, raising for ``Fatal``. This keeps a
fatal condition from being handled as if it were recoverable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from umldoclet.core.exceptions import UmlDocletError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Completed operation."""

    value: T

    def unwrap(self) -> T:
        """Return the value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Recoverable(Generic[T]):
    """Failed operation that degrades to a safe default."""

    default: T
    warning: str

    def unwrap(self) -> T:
        """Return the safe default."""
        return self.default


@dataclass(frozen=True, slots=True)
class Fatal:
    """Failed operation that must abort the run."""

    cause: UmlDocletError

    def unwrap(self) -> NoReturn:
        """Raise the fatal cause."""
        raise self.cause


Outcome = Success[T] | Recoverable[T] | Fatal
