"""
Core primitives shared by the gateway and the activity pipeline.

- errors: typed exception hierarchy
- result: Ok/Err envelope for non-fatal lookups
- logging: structlog configuration
- settings: pydantic-settings configuration
- deadline: cancellation scopes for network calls
"""

from shotgun_api.core.errors import (
    AuthenticationError,
    ConfigError,
    DeadlineExceededError,
    DecodeError,
    ErrorCategory,
    ErrorContext,
    MissingConfigError,
    RemoteError,
    RemoteErrorDetail,
    RequestTimeoutError,
    ShotgunError,
    TransportError,
)
from shotgun_api.core.result import Err, Ok, Result

__all__ = [
    "AuthenticationError",
    "ConfigError",
    "DeadlineExceededError",
    "DecodeError",
    "ErrorCategory",
    "ErrorContext",
    "MissingConfigError",
    "RemoteError",
    "RemoteErrorDetail",
    "RequestTimeoutError",
    "ShotgunError",
    "TransportError",
    "Err",
    "Ok",
    "Result",
]
