"""
Update Dispatcher and Result Assembler.

Routes each raw update to the normalizer registered for its
``meta.entity_type`` and collects the non-``None`` results in feed order.
Updates for unregistered entity types are skipped silently; they are
expected, since the feed carries every entity type but only Notes and
Versions are rendered. Entries that do not decode at all are skipped the
same way and never cost the rest of the page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import ValidationError

from shotgun_api.activity.attachments import AttachmentResolver
from shotgun_api.activity.models import ActivityItem, RawUpdateEntry
from shotgun_api.activity.normalizers import get_normalizer
from shotgun_api.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class DispatchResult:
    """Items in feed order plus how many updates produced nothing."""

    items: list[ActivityItem] = field(default_factory=list)
    skipped: int = 0


def normalize_update(
    entry: RawUpdateEntry,
    resolver: AttachmentResolver | None = None,
) -> ActivityItem | None:
    """Route one update to its normalizer; ``None`` if unsupported or rejected."""
    normalizer = get_normalizer(entry.meta.entity_type)
    if normalizer is None:
        logger.debug(
            "activity.update_skipped",
            update_id=entry.id,
            entity_type=entry.meta.entity_type,
            reason="unsupported_entity_type",
        )
        return None
    return normalizer(entry, resolver)


def decode_update(raw: Any) -> RawUpdateEntry | None:
    """Validate one raw feed entry; ``None`` if it is mis-shaped."""
    if isinstance(raw, RawUpdateEntry):
        return raw
    try:
        return RawUpdateEntry.model_validate(raw)
    except ValidationError as e:
        update_id = raw.get("id") if isinstance(raw, dict) else None
        logger.debug(
            "activity.update_undecodable",
            update_id=update_id,
            errors=e.error_count(),
            reason="invalid_entry",
        )
        return None


def dispatch_updates(
    updates: Iterable[Any],
    resolver: AttachmentResolver | None = None,
) -> DispatchResult:
    """
    Decode and normalize every update, preserving the relative order of
    accepted ones.

    ``updates`` may hold raw JSON objects or already-decoded entries.
    """
    result = DispatchResult()
    for raw in updates:
        entry = decode_update(raw)
        if entry is None:
            result.skipped += 1
            continue
        item = normalize_update(entry, resolver)
        if item is None:
            result.skipped += 1
            continue
        result.items.append(item)
        logger.debug("activity.update_added", update_id=entry.id, entity_type=item.entity_type)
    return result


__all__ = ["DispatchResult", "decode_update", "normalize_update", "dispatch_updates"]
