"""Success/failure result type for Spotify calls.

Fetch and write calls return ``Ok`` or ``Err`` instead of raising, so each
caller decides whether a failure aborts the sync or is logged and skipped.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful call carrying its value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed call carrying the error that describes it."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Ok[T] | Err[E]
