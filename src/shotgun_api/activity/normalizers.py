"""
Entity normalizers - turn one raw feed update into an ActivityItem.

Each normalizer is registered under the ``meta.entity_type`` it handles and
returns ``ActivityItem`` or ``None``. ``None`` is the soft-filter outcome: the
payload did not decode, carried the wrong type tag, or had no name. Nothing
here raises for bad data.

Manifesto:
    - **Tag before shape:** The payload is decoded into its typed model only
      once the dispatcher has matched the entity type; the decoded type tag
      is then checked again against the expected literal
    - **Invalid vs sparse:** A missing name rejects; a record with no media
      or no text is only logged as uninteresting and still emitted
    - **Partial failure tolerance:** One unresolvable attachment omits one
      link, never the whole Note

Validity gates:
    ::

        primary_entity ──decode──> payload ──type tag ok?──> name non-empty? ──> item
              │                        │                          │
              └── ValidationError      └── mismatch               └── empty
                      ▼                          ▼                        ▼
                    None                       None                     None
"""

from __future__ import annotations

from typing import Callable

from pydantic import ValidationError

from shotgun_api.activity.attachments import AttachmentResolver
from shotgun_api.activity.models import (
    ActivityItem,
    ActivityType,
    LinkField,
    NotePayload,
    RawUpdateEntry,
    VersionPayload,
)
from shotgun_api.core.logging import get_logger

logger = get_logger(__name__)

Normalizer = Callable[[RawUpdateEntry, AttachmentResolver], "ActivityItem | None"]

# Entity types the feed fetcher requests nested fields for, mapped to the
# projection it asks for.
ENTITY_FIELDS: dict[str, list[str]] = {
    "Note": ["subject", "content", "attachments", "note_links", "user.HumanUser.groups"],
    "Version": [
        "sg_version_number", "description", "sg_download_uri", "sg_uploaded_movie",
        "entity", "sg_task", "user.HumanUser.groups",
    ],
}

NORMALIZERS: dict[str, Normalizer] = {}


def register_normalizer(entity_type: str):
    """Decorator registering a normalizer for a feed entity type."""
    def decorator(func: Normalizer) -> Normalizer:
        NORMALIZERS[entity_type] = func
        return func
    return decorator


def get_normalizer(entity_type: str) -> Normalizer | None:
    return NORMALIZERS.get(entity_type)


def _new_item(
    entry: RawUpdateEntry,
    entity_type: str,
    entity_id: int,
    user_groups: list[LinkField],
) -> ActivityItem:
    item = ActivityItem(
        id=entry.id,
        type=entry.update_type,
        entity_type=entity_type,
        entity_id=entity_id,
        created_at=entry.created_at,
        created_by=entry.created_by.model_copy(),
    )
    item.add_user_groups(user_groups)
    return item


# =============================================================================
# Version
# =============================================================================

VERSION_TITLES = {
    ActivityType.CREATE.value: "New Version: {name}",
    ActivityType.UPDATE.value: "Updated Version: {name}",
    ActivityType.DELETE.value: "Removed Version: {name}",
}


def version_title(update_type: str, name: str, actor_name: str) -> str:
    template = VERSION_TITLES.get(update_type)
    if template is None:
        return f"Version from {actor_name}"
    return template.format(name=name)


def version_description(payload: VersionPayload, actor_name: str) -> str:
    """
    ``Task: {task} \\n{parent type}: {parent name}``, then the payload's own
    description on a further line.

    A missing task or parent omits its line. With neither present the
    description falls back to an actor-attributed default.
    """
    lines = []
    if payload.task is not None:
        lines.append(f"Task: {payload.task.name} ")
    if payload.entity is not None:
        lines.append(f"{payload.entity.type}: {payload.entity.name}")

    description = "\n".join(lines)
    if not description:
        return f"Version update from {actor_name}"
    if payload.description:
        description += f"\n {payload.description}"
    return description


@register_normalizer("Version")
def normalize_version(
    entry: RawUpdateEntry,
    resolver: AttachmentResolver | None = None,
) -> ActivityItem | None:
    """Normalize a Version update; ``None`` when the payload is rejected."""
    try:
        payload = VersionPayload.model_validate(entry.primary_entity)
    except ValidationError as e:
        logger.debug("activity.version_undecodable", update_id=entry.id, errors=e.error_count())
        return None

    if payload.type != "Version":
        logger.debug("activity.version_wrong_type", update_id=entry.id, payload_type=payload.type)
        return None

    if not payload.name:
        logger.debug("activity.version_unnamed", update_id=entry.id, version_id=payload.id)
        return None

    if not payload.download_url and not payload.media_url:
        logger.debug(
            "activity.version_uninteresting",
            update_id=entry.id,
            version_id=payload.id,
            fields=sorted(entry.primary_entity),
        )

    actor_name = entry.created_by.name
    item = _new_item(entry, payload.type, payload.id, payload.user_groups)
    item.title = version_title(entry.update_type, payload.name, actor_name)
    item.description = version_description(payload, actor_name)

    if payload.download_url:
        item.links.append(payload.download_url)
    if payload.media_url:
        item.media.append(payload.media_url)

    return item


# =============================================================================
# Note
# =============================================================================


def note_title(payload: NotePayload, actor_name: str) -> str:
    """Subject, else ``Note(s): A, B, `` from linked targets, else the actor."""
    if payload.subject:
        return payload.subject

    title = "Note(s): "
    for link in payload.links:
        title += f"{link.name}, "
    if not payload.links:
        title += f"from {actor_name}"
    return title


@register_normalizer("Note")
def normalize_note(
    entry: RawUpdateEntry,
    resolver: AttachmentResolver | None = None,
) -> ActivityItem | None:
    """
    Normalize a Note update; ``None`` when the payload is rejected.

    Attachment ids are resolved to download URLs through ``resolver``; ids
    that fail to resolve are logged and skipped. Without a resolver no links
    are produced.
    """
    try:
        payload = NotePayload.model_validate(entry.primary_entity)
    except ValidationError as e:
        logger.debug("activity.note_undecodable", update_id=entry.id, errors=e.error_count())
        return None

    if payload.type != "Note":
        logger.debug("activity.note_wrong_type", update_id=entry.id, payload_type=payload.type)
        return None

    if not payload.name:
        logger.debug("activity.note_unnamed", update_id=entry.id, note_id=payload.id)
        return None

    if not payload.subject and not payload.body:
        logger.debug(
            "activity.note_uninteresting",
            update_id=entry.id,
            note_id=payload.id,
            fields=sorted(entry.primary_entity),
        )

    item = _new_item(entry, payload.type, payload.id, payload.user_groups)
    item.title = note_title(payload, entry.created_by.name)
    item.description = payload.body or payload.name

    if resolver is not None and payload.attachments:
        attachment_ids = [attachment.id for attachment in payload.attachments]
        for attachment_id, result in zip(attachment_ids, resolver.resolve_urls(attachment_ids)):
            if result.is_ok():
                item.links.append(result.unwrap())
            else:
                logger.error(
                    "activity.attachment_unresolved",
                    update_id=entry.id,
                    note_id=payload.id,
                    attachment_id=attachment_id,
                    error=str(result.error),
                )

    return item


__all__ = [
    "ENTITY_FIELDS",
    "NORMALIZERS",
    "Normalizer",
    "get_normalizer",
    "register_normalizer",
    "normalize_version",
    "normalize_note",
    "version_title",
    "version_description",
    "note_title",
]
