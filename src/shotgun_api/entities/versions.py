"""
Version lookups and field updates.

Usage:
    version = get_version(gateway, 6001)
    latest = find_one_version(
        gateway,
        Filters().add("sg_task.Task.id", "is", 42),
        [SortParam("sg_version_number", SortDirection.DESCENDING)],
    )
    set_version_field(gateway, 6001, "sg_status_list", "rev")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import Field

from shotgun_api.api.fields import LinkField, NullableStr
from shotgun_api.api.gateway import QueryGateway
from shotgun_api.api.query import Filters, PageParam, SortDirection, SortParam
from shotgun_api.core.logging import get_logger
from shotgun_api.entities.records import LinkRelationship, RecordModel, decode_record

logger = get_logger(__name__)

VERSION_FIELDS = [
    "id", "code", "open_notes",
    "created_at", "sg_review_status", "sg_status_list",
    "sg_version_number", "project", "sg_task", "entity",
    "sg_download_uri", "description",
]


class VersionAttributes(RecordModel):
    code: NullableStr = ""
    created_at: NullableStr = ""
    review_status: NullableStr = Field(default="", alias="sg_review_status")
    status: NullableStr = Field(default="", alias="sg_status_list")
    version_number: int | None = Field(default=None, alias="sg_version_number")
    download_uri: NullableStr = Field(default="", alias="sg_download_uri")
    description: NullableStr = ""


class LinkListRelationship(RecordModel):
    data: list[LinkField] | None = None


class VersionRelationships(RecordModel):
    open_notes: LinkListRelationship = Field(default_factory=LinkListRelationship)
    task: LinkRelationship = Field(default_factory=LinkRelationship, alias="sg_task")
    entity: LinkRelationship = Field(default_factory=LinkRelationship)
    project: LinkRelationship = Field(default_factory=LinkRelationship)


class VersionRecord(RecordModel):
    id: int
    attributes: VersionAttributes = Field(default_factory=VersionAttributes)
    relationships: VersionRelationships = Field(default_factory=VersionRelationships)


@dataclass(frozen=True)
class VersionData:
    id: int
    name: str
    description: str = ""
    submitted_at: str = ""
    review_status: str = ""
    status: str = ""
    number: int | None = None
    download_url: str = ""
    task: LinkField | None = None
    entity: LinkField | None = None
    project: LinkField | None = None
    notes: list[LinkField] = field(default_factory=list)


def _to_version(data: dict[str, Any]) -> VersionData:
    record = decode_record(VersionRecord, data, "Version")
    attrs = record.attributes
    rels = record.relationships
    return VersionData(
        id=record.id,
        name=attrs.code,
        description=attrs.description,
        submitted_at=attrs.created_at,
        review_status=attrs.review_status,
        status=attrs.status,
        number=attrs.version_number,
        download_url=attrs.download_uri,
        task=rels.task.data,
        entity=rels.entity.data,
        project=rels.project.data,
        notes=list(rels.open_notes.data or []),
    )


def get_version(gateway: QueryGateway, version_id: int) -> VersionData:
    return _to_version(gateway.find("Version", version_id, VERSION_FIELDS))


def get_versions_for_task(gateway: QueryGateway, task_id: int) -> list[VersionData]:
    """Versions of a Task, highest version number first."""
    records = gateway.search(
        "Version",
        Filters().add("sg_task.Task.id", "is", task_id),
        VERSION_FIELDS,
        sort=[
            SortParam("sg_version_number", SortDirection.DESCENDING),
            SortParam("created_at", SortDirection.DESCENDING),
        ],
    )
    return [_to_version(record) for record in records]


def find_one_version(
    gateway: QueryGateway,
    filters: Filters,
    sort: list[SortParam] | None = None,
) -> VersionData | None:
    """First Version matching ``filters``, or None when nothing matches."""
    records = gateway.search("Version", filters, VERSION_FIELDS, page=PageParam(size=1), sort=sort)
    if not records:
        logger.info("versions.none_found", filters=filters.serialize())
        return None
    return _to_version(records[0])


def set_version_field(
    gateway: QueryGateway,
    version_id: int,
    field_name: str,
    field_value: Any,
) -> None:
    """Set a single field on a Version."""
    gateway.update("Version", version_id, {field_name: field_value})
