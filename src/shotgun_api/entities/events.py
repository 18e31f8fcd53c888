"""EventLogEntry creation and polling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import Field

from shotgun_api.api.fields import LinkField, NullableStr
from shotgun_api.api.gateway import QueryGateway
from shotgun_api.api.query import Filters, PageParam, SortDirection, SortParam
from shotgun_api.entities.records import LinkRelationship, RecordModel, decode_record

EVENT_FIELDS = ["id", "event_type", "project", "entity", "description", "meta"]

# Page size when polling for events newer than a known id.
EVENT_POLL_PAGE_SIZE = 25


class EventAttributes(RecordModel):
    event_type: NullableStr = ""
    description: NullableStr = ""
    meta: dict[str, Any] | None = None


class EventRelationships(RecordModel):
    entity: LinkRelationship = Field(default_factory=LinkRelationship)
    project: LinkRelationship = Field(default_factory=LinkRelationship)


class EventRecord(RecordModel):
    id: int
    attributes: EventAttributes = Field(default_factory=EventAttributes)
    relationships: EventRelationships = Field(default_factory=EventRelationships)


@dataclass
class EventData:
    event_type: str
    description: str = ""
    entity: LinkField | None = None
    project: LinkField | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    id: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Body for ``POST /entity/EventLogEntry``."""
        payload: dict[str, Any] = {
            "event_type": self.event_type,
            "description": self.description,
        }
        if self.metadata:
            payload["meta"] = self.metadata
        if self.entity is not None:
            payload["entity"] = self.entity.model_dump()
        if self.project is not None:
            payload["project"] = self.project.model_dump()
        return payload


def new_event(gateway: QueryGateway, event: EventData) -> int:
    """Create an EventLogEntry; stores and returns the new id."""
    created = gateway.create("EventLogEntry", event.to_payload())
    record = decode_record(EventRecord, created, "EventLogEntry")
    event.id = record.id
    return record.id


def get_new_events(gateway: QueryGateway, last_event_id: int) -> list[EventData]:
    """
    Events newer than ``last_event_id`` in ascending id order.

    With ``last_event_id <= 0`` only the single most recent event is returned,
    giving a starting cursor.
    """
    filters = Filters()
    if last_event_id > 0:
        filters.add("id", "greater_than", last_event_id)
        sort = [SortParam("id", SortDirection.ASCENDING)]
        page = PageParam(size=EVENT_POLL_PAGE_SIZE)
    else:
        sort = [SortParam("id", SortDirection.DESCENDING)]
        page = PageParam(size=1)

    records = gateway.search("EventLogEntry", filters, EVENT_FIELDS, page=page, sort=sort)
    events = []
    for data in records:
        record = decode_record(EventRecord, data, "EventLogEntry")
        events.append(
            EventData(
                id=record.id,
                event_type=record.attributes.event_type,
                description=record.attributes.description,
                entity=record.relationships.entity.data,
                project=record.relationships.project.data,
                metadata=record.attributes.meta or {},
            )
        )
    return events
