"""
Deadline scopes for cancelling outstanding network calls.

A caller wraps a fetch in ``deadline(seconds)``. Every gateway request
checks the scope before sending and bounds its HTTP timeout by the time
remaining, so a slow remote aborts the fetch with ``DeadlineExceededError``
instead of hanging. Nested scopes never extend an outer one.

The active scope lives in a ``ContextVar``; work submitted to a thread pool
through ``contextvars.copy_context().run`` sees the submitting caller's
deadline.

Examples:
    >>> with deadline(5.0, operation="activity_stream") as ctx:
    ...     page = client.fetch_activity("Shot", 1234)
    ...     print(f"{ctx.remaining():.1f}s to spare")
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Iterator

from shotgun_api.core.errors import DeadlineExceededError


@dataclass
class DeadlineContext:
    """Tracks one deadline scope.

    Attributes:
        deadline: Absolute deadline timestamp (monotonic clock)
        timeout_seconds: Original timeout value in seconds
        operation: Name/description of the operation
        start_time: When the scope started
    """

    deadline: float
    timeout_seconds: float
    operation: str = "operation"
    start_time: float = field(default_factory=time.monotonic)

    def remaining(self) -> float:
        """Remaining seconds; negative once expired."""
        return self.deadline - time.monotonic()

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start_time

    def is_expired(self) -> bool:
        return time.monotonic() >= self.deadline

    def check(self, op_name: str | None = None) -> None:
        """Raise DeadlineExceededError if the deadline has passed."""
        if self.is_expired():
            raise DeadlineExceededError(
                timeout=self.timeout_seconds,
                elapsed=self.elapsed,
                operation=op_name or self.operation,
            )


_current_deadline: ContextVar[DeadlineContext | None] = ContextVar(
    "shotgun_api_deadline", default=None
)


def get_current_deadline() -> DeadlineContext | None:
    """Get the innermost active deadline, if any."""
    return _current_deadline.get()


def get_effective_timeout(requested: float) -> float:
    """Bound a requested timeout by the remaining time on the active deadline."""
    current = get_current_deadline()
    if current is None:
        return requested
    return max(0.0, min(requested, current.remaining()))


def check_deadline(op_name: str | None = None) -> None:
    """Raise if the active deadline has expired; no-op outside a scope."""
    current = get_current_deadline()
    if current is not None:
        current.check(op_name)


@contextmanager
def deadline(seconds: float, operation: str | None = None) -> Iterator[DeadlineContext]:
    """Open a deadline scope of ``seconds``.

    Raises:
        ValueError: If seconds is negative
    """
    if seconds < 0:
        raise ValueError(f"Deadline must be non-negative, got {seconds}")

    effective = get_effective_timeout(seconds)
    now = time.monotonic()
    ctx = DeadlineContext(
        deadline=now + effective,
        timeout_seconds=effective,
        operation=operation or "operation",
        start_time=now,
    )

    token = _current_deadline.set(ctx)
    try:
        yield ctx
    finally:
        _current_deadline.reset(token)


__all__ = [
    "DeadlineContext",
    "deadline",
    "check_deadline",
    "get_current_deadline",
    "get_effective_timeout",
]
