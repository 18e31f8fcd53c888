"""
Result envelope for lookups whose failure is not fatal to the caller.

Secondary lookups (attachment URLs for a Note) must not abort the enclosing
normalization, yet callers still need the error to decide on logging. They
return ``Ok(value)`` or ``Err(error)`` instead of raising.

Examples:
    >>> from shotgun_api.core.result import Ok, Err
    >>> Ok("https://cdn/file.mov").unwrap_or("")
    'https://cdn/file.mov'
    >>> Err(ValueError("gone")).unwrap_or("")
    ''

    Pattern matching:

    >>> match Ok(3):
    ...     case Ok(value):
    ...         print(value)
    ...     case Err(error):
    ...         print(error)
    3
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result containing the error."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the contained error."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


__all__ = ["Ok", "Err", "Result"]
