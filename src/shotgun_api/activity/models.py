"""
Activity feed data model.

Wire shapes (decoded from the remote JSON) are pydantic models; the
normalized output (``ActivityItem``, ``ActivityFeedPage``) is plain
dataclasses created per call.

::

    FeedEnvelope.data.updates[]  ──>  RawUpdateEntry
                                          │ primary_entity (untyped dict)
                                          │
                       meta.entity_type == "Version" ──> VersionPayload
                       meta.entity_type == "Note"    ──> NotePayload
                                          │
                                          ▼
                                     ActivityItem  ──>  ActivityFeedPage

Remote fields are frequently ``null``; scalar fields coerce ``null`` to their
empty value and nested records to their defaults so that only genuinely
mis-shaped payloads fail decoding. A mis-shaped update entry costs only that
entry, never the page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Iterator

from pydantic import BeforeValidator, Field

from shotgun_api.api.fields import (
    LinkField,
    NullableBool,
    NullableInt,
    NullableStr,
    WireModel,
    none_to_empty_dict,
    none_to_empty_list,
)


class ActivityType(str, Enum):
    """Known update kinds; the remote may send others."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Actor(WireModel):
    """Who made the change."""

    id: NullableInt = 0
    name: NullableStr = ""
    type: NullableStr = ""


# =============================================================================
# Feed envelope
# =============================================================================


class UpdateMeta(WireModel):
    type: NullableStr = ""
    entity_type: NullableStr = ""
    entity_id: NullableInt = 0


class RawUpdateEntry(WireModel):
    """One element of a fetched feed page."""

    id: NullableInt
    update_type: NullableStr = ""
    meta: Annotated[UpdateMeta, BeforeValidator(none_to_empty_dict)] = Field(default_factory=UpdateMeta)
    created_at: NullableStr = ""
    created_by: Annotated[Actor, BeforeValidator(none_to_empty_dict)] = Field(default_factory=Actor)
    read: NullableBool = False
    primary_entity: Annotated[dict[str, Any], BeforeValidator(none_to_empty_dict)] = Field(
        default_factory=dict
    )


class FeedData(WireModel):
    """Page header; ``updates`` stay raw and are decoded one at a time."""

    entity_type: NullableStr = ""
    entity_id: NullableInt = 0
    latest_update_id: int | None = None
    earliest_update_id: int | None = None
    updates: Annotated[list[Any], BeforeValidator(none_to_empty_list)] = Field(
        default_factory=list
    )


class FeedEnvelope(WireModel):
    """``GET /entity/{type}/{id}/activity_stream`` response body."""

    data: FeedData


# =============================================================================
# Primary entity payloads
# =============================================================================


class MovieField(WireModel):
    url: NullableStr = ""


class AttachmentRef(WireModel):
    id: int


class VersionPayload(WireModel):
    """Typed projection of a Version ``primary_entity``."""

    id: NullableInt = 0
    type: NullableStr = ""
    name: NullableStr = ""
    version_number: int | None = Field(default=None, alias="sg_version_number")
    description: NullableStr = ""
    download_url: NullableStr = Field(default="", alias="sg_download_uri")
    movie: MovieField | None = Field(default=None, alias="sg_uploaded_movie")
    entity: LinkField | None = None
    task: LinkField | None = Field(default=None, alias="sg_task")
    user_groups: Annotated[list[LinkField], BeforeValidator(none_to_empty_list)] = Field(
        default_factory=list, alias="user.HumanUser.groups"
    )

    @property
    def media_url(self) -> str:
        return self.movie.url if self.movie is not None else ""


class NotePayload(WireModel):
    """Typed projection of a Note ``primary_entity``."""

    id: NullableInt = 0
    type: NullableStr = ""
    name: NullableStr = ""
    subject: NullableStr = ""
    body: NullableStr = Field(default="", alias="content")
    attachments: Annotated[list[AttachmentRef], BeforeValidator(none_to_empty_list)] = Field(
        default_factory=list
    )
    links: Annotated[list[LinkField], BeforeValidator(none_to_empty_list)] = Field(
        default_factory=list, alias="note_links"
    )
    user_groups: Annotated[list[LinkField], BeforeValidator(none_to_empty_list)] = Field(
        default_factory=list, alias="user.HumanUser.groups"
    )


# =============================================================================
# Normalized output
# =============================================================================


@dataclass
class ActivityItem:
    """
    Uniform, display-ready activity entry.

    Only normalizers that accepted their payload create these. ``title`` is
    never empty; ``links`` and ``media`` are appended in discovery order.
    """

    id: int
    type: str
    entity_type: str
    entity_id: int
    created_at: str
    created_by: Actor
    title: str = ""
    description: str = ""
    links: list[str] = field(default_factory=list)
    media: list[str] = field(default_factory=list)
    user_groups: list[int] = field(default_factory=list)

    def add_user_groups(self, groups: list[LinkField]) -> None:
        for group in groups:
            if group.id not in self.user_groups:
                self.user_groups.append(group.id)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the remote field names."""
        return {
            "id": self.id,
            "type": self.type,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "created_at": self.created_at,
            "created_by": self.created_by.model_dump(),
            "title": self.title,
            "description": self.description,
            "attachments": list(self.links),
            "media": list(self.media),
            "user_groups": list(self.user_groups),
        }


@dataclass
class ActivityFeedPage:
    """
    Result of one feed fetch.

    ``items`` keep the remote ordering (most recent first). The cursor fields
    are copied from the envelope so callers can persist them and pass
    ``latest_update_id`` as ``since_id`` on the next fetch.
    """

    items: list[ActivityItem] = field(default_factory=list)
    entity_type: str = ""
    entity_id: int = 0
    latest_update_id: int | None = None
    earliest_update_id: int | None = None
    skipped: int = 0

    def __iter__(self) -> Iterator[ActivityItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> ActivityItem:
        return self.items[index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "latest_update_id": self.latest_update_id,
            "earliest_update_id": self.earliest_update_id,
            "skipped": self.skipped,
            "items": [item.to_dict() for item in self.items],
        }


__all__ = [
    "ActivityType",
    "Actor",
    "LinkField",
    "UpdateMeta",
    "RawUpdateEntry",
    "FeedData",
    "FeedEnvelope",
    "MovieField",
    "AttachmentRef",
    "VersionPayload",
    "NotePayload",
    "ActivityItem",
    "ActivityFeedPage",
]
