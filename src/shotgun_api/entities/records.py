"""
Shared decoding for ``{"id", "attributes", "relationships"}`` records.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from shotgun_api.api.fields import LinkField, NullableStr, WireModel
from shotgun_api.core.errors import DecodeError

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordModel(WireModel):
    """Record envelope part; nested attributes and relationships share the wire config."""


class LinkRelationship(RecordModel):
    """``relationships.<name>`` wrapper: ``{"data": {"id", "type", "name"}}``."""

    data: LinkField | None = None


class FileField(RecordModel):
    url: NullableStr = ""
    name: NullableStr = ""


def decode_record(model: type[RecordT], data: Any, entity_type: str) -> RecordT:
    """Validate one record, raising DecodeError with the entity type on failure."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Malformed {entity_type} record", cause=e).with_context(
            entity_type=entity_type
        )
