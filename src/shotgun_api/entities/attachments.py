"""Attachment (uploaded file) lookups."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from shotgun_api.api.fields import NullableStr
from shotgun_api.api.gateway import QueryGateway
from shotgun_api.entities.records import FileField, RecordModel, decode_record

ATTACHMENT_FIELDS = ["id", "this_file", "name"]


class AttachmentAttributes(RecordModel):
    file: FileField | None = Field(default=None, alias="this_file")
    name: NullableStr = ""


class AttachmentRecord(RecordModel):
    id: int
    attributes: AttachmentAttributes = Field(default_factory=AttachmentAttributes)


@dataclass(frozen=True)
class AttachmentData:
    id: int
    name: str
    file_url: str


def get_attachment(gateway: QueryGateway, attachment_id: int) -> AttachmentData:
    """Fetch one Attachment projected to its id, name and file URL."""
    data = gateway.find("Attachment", attachment_id, ATTACHMENT_FIELDS)
    record = decode_record(AttachmentRecord, data, "Attachment")
    file = record.attributes.file
    return AttachmentData(
        id=record.id,
        name=record.attributes.name,
        file_url=file.url if file is not None else "",
    )
