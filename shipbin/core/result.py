"""Result type for explicit error handling.

Every release step returns either ``Ok(value)`` or ``Err(error)`` so that the
driver can stop at the first failure without exceptions crossing step
boundaries.

Usage:
    def stage(name: str) -> Result[Path, ReleaseError]:
        if not output.exists():
            return Err(ReleaseError(kind="output_missing", message=...))
        return Ok(dest)

    result = stage("updater")
    if isinstance(result, Err):
        console.error(result.error.message)

Lower-level errors are lifted into the caller's error type with
``map_err``:

    self._syncer.sync(...).map_err(_publish_error)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result carrying ``value``."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        """Return self unchanged (no error to map)."""
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying ``error``."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Apply ``f`` to the contained error."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
