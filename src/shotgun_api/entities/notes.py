"""Note lookups."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from shotgun_api.api.fields import NullableStr
from shotgun_api.api.gateway import QueryGateway
from shotgun_api.api.query import Filters, SortParam
from shotgun_api.entities.records import LinkRelationship, RecordModel, decode_record

NOTE_FIELDS = ["id", "user", "subject", "content", "created_at"]


class NoteAttributes(RecordModel):
    subject: NullableStr = ""
    body: NullableStr = Field(default="", alias="content")
    created_at: NullableStr = ""


class NoteRelationships(RecordModel):
    author: LinkRelationship = Field(default_factory=LinkRelationship, alias="user")


class NoteRecord(RecordModel):
    id: int
    attributes: NoteAttributes = Field(default_factory=NoteAttributes)
    relationships: NoteRelationships = Field(default_factory=NoteRelationships)


@dataclass(frozen=True)
class NoteData:
    id: int
    author: str
    subject: str
    body: str
    created_at: str


def _to_note(data: dict) -> NoteData:
    record = decode_record(NoteRecord, data, "Note")
    author = record.relationships.author.data
    return NoteData(
        id=record.id,
        author=author.name if author is not None else "",
        subject=record.attributes.subject,
        body=record.attributes.body,
        created_at=record.attributes.created_at,
    )


def get_notes_for_task(gateway: QueryGateway, task_id: int) -> list[NoteData]:
    """All Notes linked to a Task, oldest first."""
    records = gateway.search(
        "Note",
        Filters().add("tasks.Task.id", "is", task_id),
        NOTE_FIELDS,
        sort=[SortParam("created_at")],
    )
    return [_to_note(record) for record in records]
