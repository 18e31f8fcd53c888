"""
Structured error types for the Shotgun API client.

Every failure that can abort a call surfaces as a subclass of
``ShotgunError``. Each error carries a category for routing, a structured
``ErrorContext`` (URL, HTTP status, entity) for logging, and the original
exception chained as ``cause``.

Manifesto:
    - **Typed Error Hierarchy:** Transport, remote, decode, auth and config
      failures are distinct types callers can catch separately
    - **Rich Context:** Errors carry the URL and status that produced them
    - **Error Chaining:** The underlying httpx / json exception is never lost
    - **Soft filters are not errors:** Rejected feed entries and failed
      attachment lookups never raise; they only omit output

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      ShotgunError                            │
        │            (category, context, cause)                        │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  TransportError       RemoteError          DecodeError       │
        │  (NETWORK)            (SOURCE, errors[])   (PARSE)           │
        │       │                                                      │
        │  RequestTimeoutError  DeadlineExceededError                  │
        │                                                              │
        │  AuthenticationError  ConfigError                            │
        │  (AUTH)               (CONFIG)                               │
        │                            │                                 │
        │                       MissingConfigError                     │
        └─────────────────────────────────────────────────────────────┘

Examples:
    Folding a remote error body into one message:

    >>> err = RemoteError.from_payload(
    ...     422, {"errors": [{"status": 422, "code": 103,
    ...                       "title": "Invalid", "detail": "bad filter"}]}
    ... )
    >>> str(err)
    'Invalid: bad filter'

    Adding context fluently:

    >>> TransportError("connect failed").with_context(url="https://x").context.url
    'https://x'

Guardrails:
    ❌ DON'T: Raise for a feed entry that fails validation
    ✅ DO: Return None from the normalizer and log at debug

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    NETWORK = "NETWORK"           # Connection, timeout, deadline
    SOURCE = "SOURCE"             # Remote API returned an error status
    PARSE = "PARSE"               # Malformed JSON envelope or record
    AUTH = "AUTH"                 # Token acquisition
    CONFIG = "CONFIG"             # Missing or invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only non-None fields are emitted by ``to_dict()`` so the result can be
    passed straight into a structlog call.

    Attributes:
        url: URL that was being accessed
        http_status: HTTP status code if applicable
        entity_type: Remote entity type involved (e.g. "Version")
        entity_id: Remote entity id involved
        metadata: Additional key-value pairs
    """

    url: str | None = None
    http_status: int | None = None
    entity_type: str | None = None
    entity_id: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["url", "http_status", "entity_type", "entity_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ShotgunError(Exception):
    """
    Base exception for all Shotgun API client errors.

    Subclasses set ``default_category``; callers may override it per
    instance. ``cause`` is also installed as ``__cause__`` so tracebacks show
    the chain.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ShotgunError:
        """
        Add context to this error (fluent API).

        Usage:
            raise TransportError("Failed").with_context(
                url="https://studio.shotgunstudio.com/api/v1/entity/Note",
                entity_type="Note",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSPORT ERRORS
# =============================================================================


class TransportError(ShotgunError):
    """Request construction or network I/O failed."""

    default_category = ErrorCategory.NETWORK


class RequestTimeoutError(TransportError):
    """The HTTP request did not complete within its timeout."""


class DeadlineExceededError(TransportError):
    """
    The caller's deadline expired before or during a network call.

    Raised by ``shotgun_api.core.deadline`` scopes. Unlike other transport
    failures this is never converted into a soft filter: a fetch that runs out
    of time aborts without a partial page.
    """

    def __init__(
        self,
        timeout: float,
        elapsed: float | None = None,
        operation: str = "operation",
        **kwargs: Any,
    ):
        self.timeout = timeout
        self.elapsed = elapsed
        self.operation = operation

        msg = f"Operation '{operation}' exceeded its deadline of {timeout}s"
        if elapsed is not None:
            msg += f" (ran for {elapsed:.2f}s)"
        super().__init__(msg, **kwargs)


# =============================================================================
# REMOTE ERRORS
# =============================================================================


@dataclass(frozen=True)
class RemoteErrorDetail:
    """One entry of the remote ``{"errors": [...]}`` body."""

    status: int | None = None
    code: int | None = None
    title: str = ""
    detail: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteErrorDetail:
        return cls(
            status=data.get("status"),
            code=data.get("code"),
            title=str(data.get("title") or ""),
            detail=str(data.get("detail") or ""),
        )

    def format(self) -> str:
        return f"{self.title}: {self.detail}"


class RemoteError(ShotgunError):
    """
    The remote service answered with HTTP status >= 400.

    The structured error list is kept on ``errors``; the exception message
    folds every entry into ``"{title}: {detail}"`` lines.
    """

    default_category = ErrorCategory.SOURCE

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        errors: list[RemoteErrorDetail] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.errors = errors or []
        self.context.http_status = status_code

    @classmethod
    def from_payload(cls, status_code: int, payload: Any, **kwargs: Any) -> RemoteError:
        """Build from a decoded error body; tolerates bodies with no error list."""
        errors: list[RemoteErrorDetail] = []
        if isinstance(payload, dict):
            for raw in payload.get("errors") or []:
                if isinstance(raw, dict):
                    errors.append(RemoteErrorDetail.from_dict(raw))

        if errors:
            message = "\n".join(e.format() for e in errors)
        else:
            message = f"HTTP {status_code}"
        return cls(message, status_code=status_code, errors=errors, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        if self.errors:
            result["errors"] = [
                {"status": e.status, "code": e.code, "title": e.title, "detail": e.detail}
                for e in self.errors
            ]
        return result


class DecodeError(ShotgunError):
    """A response body could not be decoded into the expected shape."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# AUTHENTICATION ERRORS
# =============================================================================


class AuthenticationError(ShotgunError):
    """Failed to obtain an access token."""

    default_category = ErrorCategory.AUTH

    def __init__(
        self,
        message: str,
        *,
        errors: list[RemoteErrorDetail] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.errors = errors or []


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(ShotgunError):
    """
    Configuration error.

    Raised once at startup; configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ShotgunError",
    "TransportError",
    "RequestTimeoutError",
    "DeadlineExceededError",
    "RemoteErrorDetail",
    "RemoteError",
    "DecodeError",
    "AuthenticationError",
    "ConfigError",
    "MissingConfigError",
]
