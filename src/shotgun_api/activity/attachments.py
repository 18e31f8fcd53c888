"""
Secondary Resolver - attachment id to downloadable URL.

Used only by the Note normalizer. A failed lookup is returned as ``Err`` so
the caller can log it and omit that one link; the only failure that still
raises is an expired deadline, which aborts the whole fetch.

Lookups for one Note may run on a small thread pool
(``max_workers > 1``). Results are always returned in the order of the
requested ids.
"""

from __future__ import annotations

import contextvars
from concurrent.futures import ThreadPoolExecutor

from shotgun_api.api.gateway import QueryGateway
from shotgun_api.core.errors import DeadlineExceededError, DecodeError, ShotgunError
from shotgun_api.core.result import Err, Ok, Result
from shotgun_api.entities.attachments import get_attachment


class AttachmentResolver:
    """Resolves Attachment ids through the Query Gateway."""

    def __init__(self, gateway: QueryGateway, max_workers: int = 1):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._gateway = gateway
        self._max_workers = max_workers

    def resolve_url(self, attachment_id: int) -> Result[str]:
        """Look up one Attachment's file URL."""
        try:
            attachment = get_attachment(self._gateway, attachment_id)
        except DeadlineExceededError:
            raise
        except ShotgunError as e:
            return Err(e)

        if not attachment.file_url:
            return Err(
                DecodeError(f"Attachment {attachment_id} has no file URL").with_context(
                    entity_type="Attachment", entity_id=attachment_id
                )
            )
        return Ok(attachment.file_url)

    def resolve_urls(self, attachment_ids: list[int]) -> list[Result[str]]:
        """Resolve many ids; one Result per id, in input order."""
        if self._max_workers == 1 or len(attachment_ids) <= 1:
            return [self.resolve_url(attachment_id) for attachment_id in attachment_ids]

        workers = min(self._max_workers, len(attachment_ids))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="attachment") as pool:
            futures = [
                pool.submit(contextvars.copy_context().run, self.resolve_url, attachment_id)
                for attachment_id in attachment_ids
            ]
            return [future.result() for future in futures]


__all__ = ["AttachmentResolver"]
