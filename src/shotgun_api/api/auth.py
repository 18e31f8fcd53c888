"""
OAuth2 token acquisition.

Two grants are supported against ``{url}/auth/access_token``:

- client credentials (script name + key from settings), used by the gateway
- password (a human user's login), via ``Authenticator.for_user``

Tokens are cached on the authenticator until shortly before ``expires_in``
elapses, so a feed fetch that resolves many attachments authenticates once.
"""

from __future__ import annotations

import threading
import time

import httpx
from pydantic import BaseModel, ValidationError

from shotgun_api.api.responses import decode_json
from shotgun_api.core.deadline import check_deadline, get_current_deadline, get_effective_timeout
from shotgun_api.core.errors import (
    AuthenticationError,
    DeadlineExceededError,
    DecodeError,
    RemoteError,
    TransportError,
)
from shotgun_api.core.logging import get_logger
from shotgun_api.core.settings import ShotgunSettings

logger = get_logger(__name__)

# Tokens are refreshed this many seconds before the remote expiry.
EXPIRY_SKEW_SECONDS = 30


class AuthToken(BaseModel):
    """Decoded ``/auth/access_token`` response."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 0
    refresh_token: str | None = None

    @property
    def header_value(self) -> str:
        return f"{self.token_type} {self.access_token}"


class Authenticator:
    """
    Obtains and caches access tokens.

    Args:
        settings: Validated client settings (url, client_id, secret)
        http_client: Shared transport; owned by the caller
        grant: Form fields sent to the token endpoint; defaults to the
            client-credentials grant built from settings
    """

    def __init__(
        self,
        settings: ShotgunSettings,
        http_client: httpx.Client,
        *,
        grant: dict[str, str] | None = None,
    ):
        self._settings = settings
        self._http = http_client
        self._grant = grant or {
            "client_id": settings.client_id,
            "client_secret": settings.secret.get_secret_value(),
            "grant_type": "client_credentials",
        }
        self._token: AuthToken | None = None
        self._expires_at = 0.0
        self._lock = threading.Lock()

    @classmethod
    def for_user(
        cls,
        settings: ShotgunSettings,
        http_client: httpx.Client,
        username: str,
        password: str,
    ) -> Authenticator:
        """Authenticator using the password grant for a human user."""
        return cls(
            settings,
            http_client,
            grant={"username": username, "password": password, "grant_type": "password"},
        )

    @property
    def token_url(self) -> str:
        return f"{self._settings.url}/auth/access_token"

    def authenticate(self) -> AuthToken:
        """Return a valid token, requesting a new one when the cache is stale."""
        with self._lock:
            if self._token is not None and time.monotonic() < self._expires_at:
                return self._token

            token = self._request_token()
            self._token = token
            # A token without expires_in is used for this call only.
            self._expires_at = time.monotonic() + max(0, token.expires_in - EXPIRY_SKEW_SECONDS)
            return token

    def invalidate(self) -> None:
        """Drop the cached token."""
        with self._lock:
            self._token = None
            self._expires_at = 0.0

    def _request_token(self) -> AuthToken:
        check_deadline("authenticate")
        grant_type = self._grant.get("grant_type")
        try:
            response = self._http.post(
                self.token_url,
                data=self._grant,
                headers={"Accept": "application/json"},
                timeout=get_effective_timeout(self._settings.timeout),
            )
        except httpx.TimeoutException as e:
            current = get_current_deadline()
            if current is None or not current.is_expired():
                raise self._transport_failure(grant_type, e)
            logger.error("auth.deadline_exceeded", url=self.token_url, operation=current.operation)
            raise DeadlineExceededError(
                timeout=current.timeout_seconds,
                elapsed=current.elapsed,
                operation=current.operation,
                cause=e,
            ).with_context(url=self.token_url)
        except httpx.HTTPError as e:
            raise self._transport_failure(grant_type, e)

        if response.status_code >= 400:
            logger.error("auth.rejected", url=self.token_url, grant_type=grant_type, status=response.status_code)
            try:
                payload = response.json()
            except ValueError:
                payload = None
            remote = RemoteError.from_payload(response.status_code, payload)
            raise AuthenticationError(
                str(remote), errors=remote.errors, cause=remote
            ).with_context(url=self.token_url, http_status=response.status_code)

        try:
            return AuthToken.model_validate(decode_json(response))
        except (DecodeError, ValidationError) as e:
            logger.error("auth.decode_failed", url=self.token_url)
            raise AuthenticationError(
                "Malformed token response", cause=e
            ).with_context(url=self.token_url, http_status=response.status_code)

    def _transport_failure(self, grant_type: str | None, error: httpx.HTTPError) -> AuthenticationError:
        logger.error("auth.request_failed", url=self.token_url, grant_type=grant_type, error=str(error))
        return AuthenticationError(
            f"Token request to {self.token_url} failed: {error}",
            cause=TransportError(str(error), cause=error),
        ).with_context(url=self.token_url)


__all__ = ["AuthToken", "Authenticator", "EXPIRY_SKEW_SECONDS"]
