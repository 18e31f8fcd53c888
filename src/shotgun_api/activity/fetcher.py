"""
Feed Fetcher - one page of an entity's activity stream.

Issues a single authenticated ``GET /entity/{type}/{id}/activity_stream``,
decodes the envelope, and hands the updates to the dispatcher.

Guarantees:
    - Exactly one feed request per call (plus attachment lookups for Notes)
    - Authentication, transport, remote-status and envelope-decode failures
      raise; no partial page is ever returned alongside an error
    - A single mis-shaped update is skipped and counted, not fatal
    - Items keep the remote order (most recent first)

Cursor:
    ``since_id > 0`` asks only for updates newer than that id (``min_id``);
    ``since_id <= 0`` returns the most recent page. Persisting the cursor
    between runs is the caller's job: ``page.latest_update_id`` is the value
    to pass next time.

Usage:
    fetcher = ActivityFeedFetcher(gateway, AttachmentResolver(gateway))
    page = fetcher.fetch("Shot", 1234, page_size=50)
    for item in page:
        print(item.title)
    newer = fetcher.fetch("Shot", 1234, page_size=50, since_id=page.latest_update_id or 0)
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from shotgun_api.activity.attachments import AttachmentResolver
from shotgun_api.activity.dispatch import dispatch_updates
from shotgun_api.activity.models import ActivityFeedPage, FeedEnvelope
from shotgun_api.activity.normalizers import ENTITY_FIELDS
from shotgun_api.api.gateway import QueryGateway
from shotgun_api.core.errors import DecodeError
from shotgun_api.core.logging import LogContext, get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 25


def build_activity_params(page_size: int, since_id: int) -> dict[str, Any]:
    """Query parameters for one activity-stream request."""
    params: dict[str, Any] = {"limit": page_size}
    if since_id > 0:
        params["min_id"] = since_id
    for entity_type, fields in ENTITY_FIELDS.items():
        params[f"entity_fields[{entity_type}]"] = ",".join(fields)
    return params


class ActivityFeedFetcher:
    """Fetches and normalizes activity pages for any entity."""

    def __init__(self, gateway: QueryGateway, resolver: AttachmentResolver | None = None):
        self._gateway = gateway
        self._resolver = resolver if resolver is not None else AttachmentResolver(gateway)

    def fetch(
        self,
        entity_type: str,
        entity_id: int,
        page_size: int = DEFAULT_PAGE_SIZE,
        since_id: int = 0,
    ) -> ActivityFeedPage:
        """
        Fetch one page of normalized activity for ``entity_type``/``entity_id``.

        Raises:
            ValueError: page_size is not positive
            AuthenticationError: token could not be obtained
            TransportError: network failure (incl. timeout / deadline)
            RemoteError: the service answered with status >= 400
            DecodeError: the envelope (not an individual update) was not valid
                JSON of the expected shape
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")

        path = f"/entity/{entity_type}/{entity_id}/activity_stream"
        with LogContext(entity_type=entity_type, entity_id=entity_id):
            logger.debug("activity.fetch_started", page_size=page_size, since_id=since_id)
            payload = self._gateway.get(path, params=build_activity_params(page_size, since_id))

            try:
                envelope = FeedEnvelope.model_validate(payload)
            except ValidationError as e:
                logger.error("activity.envelope_invalid", errors=e.error_count())
                raise DecodeError(
                    f"Malformed activity stream for {entity_type} {entity_id}", cause=e
                ).with_context(entity_type=entity_type, entity_id=entity_id)

            data = envelope.data
            result = dispatch_updates(data.updates, self._resolver)

            logger.debug(
                "activity.fetch_completed",
                updates=len(data.updates),
                items=len(result.items),
                skipped=result.skipped,
            )

        return ActivityFeedPage(
            items=result.items,
            entity_type=data.entity_type or entity_type,
            entity_id=data.entity_id or entity_id,
            latest_update_id=data.latest_update_id,
            earliest_update_id=data.earliest_update_id,
            skipped=result.skipped,
        )


def fetch_activity(
    gateway: QueryGateway,
    entity_type: str,
    entity_id: int,
    page_size: int = DEFAULT_PAGE_SIZE,
    since_id: int = 0,
) -> ActivityFeedPage:
    """Functional shortcut for ``ActivityFeedFetcher(gateway).fetch(...)``."""
    return ActivityFeedFetcher(gateway).fetch(entity_type, entity_id, page_size, since_id)


__all__ = ["ActivityFeedFetcher", "fetch_activity", "build_activity_params", "DEFAULT_PAGE_SIZE"]
