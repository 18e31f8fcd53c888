"""
ShotgunClient - one object wiring settings, transport, auth and the feed.

::

    ShotgunSettings ──> httpx.Client ──> Authenticator ──> QueryGateway
                                                               │
                                     AttachmentResolver <──────┤
                                              │                │
                                              └──> ActivityFeedFetcher

Usage:
    with ShotgunClient() as client:          # settings from SHOTGUN_* env
        page = client.fetch_activity("Shot", 1234, page_size=50)

    # Sharing a transport (closed by the caller, not the client)
    with httpx.Client() as http:
        client = ShotgunClient(settings, http_client=http)
"""

from __future__ import annotations

from typing import Any

import httpx

from shotgun_api.activity.attachments import AttachmentResolver
from shotgun_api.activity.fetcher import DEFAULT_PAGE_SIZE, ActivityFeedFetcher
from shotgun_api.activity.models import ActivityFeedPage
from shotgun_api.api.auth import Authenticator
from shotgun_api.api.gateway import QueryGateway
from shotgun_api.core.deadline import deadline
from shotgun_api.core.logging import get_logger
from shotgun_api.core.settings import ShotgunSettings, get_settings

logger = get_logger(__name__)


class ShotgunClient:
    """
    Facade over the gateway and the activity feed.

    Args:
        settings: Client settings; read from the environment when omitted
        http_client: Transport to share; a private one is created (and
            closed by ``close()``) when omitted

    Raises:
        ConfigError: an environment value is malformed
        MissingConfigError: url, client_id or secret is empty
    """

    def __init__(
        self,
        settings: ShotgunSettings | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.settings = settings if settings is not None else get_settings()
        self.settings.validate_required()

        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=self.settings.timeout)

        self.authenticator = Authenticator(self.settings, self._http)
        self.gateway = QueryGateway(self.settings, self._http, self.authenticator)
        self.resolver = AttachmentResolver(self.gateway, max_workers=self.settings.attachment_workers)
        self.fetcher = ActivityFeedFetcher(self.gateway, self.resolver)

        logger.debug("client.created", url=self.settings.url, owns_transport=self._owns_http)

    def fetch_activity(
        self,
        entity_type: str,
        entity_id: int,
        page_size: int = DEFAULT_PAGE_SIZE,
        since_id: int = 0,
        *,
        timeout: float | None = None,
    ) -> ActivityFeedPage:
        """
        Fetch one normalized page of ``entity_type``/``entity_id`` activity.

        ``timeout`` bounds the whole fetch, attachment lookups included.
        """
        if timeout is None:
            return self.fetcher.fetch(entity_type, entity_id, page_size, since_id)
        with deadline(timeout, operation="fetch_activity"):
            return self.fetcher.fetch(entity_type, entity_id, page_size, since_id)

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> ShotgunClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


__all__ = ["ShotgunClient"]
