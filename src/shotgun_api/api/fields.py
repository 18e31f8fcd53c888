"""
Field types shared by every decoded remote record.

Remote fields are frequently ``null``. ``NullableStr`` coerces ``null`` to
``""`` (``NullableInt``/``NullableBool`` to ``0``/``False``) and the
list/dict helpers coerce it to an empty container, so only
genuinely mis-shaped values fail validation.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def none_to_empty_str(value: Any) -> Any:
    return "" if value is None else value


def none_to_empty_list(value: Any) -> Any:
    return [] if value is None else value


def none_to_empty_dict(value: Any) -> Any:
    return {} if value is None else value


def none_to_zero(value: Any) -> Any:
    return 0 if value is None else value


def none_to_false(value: Any) -> Any:
    return False if value is None else value


NullableStr = Annotated[str, BeforeValidator(none_to_empty_str)]
NullableInt = Annotated[int, BeforeValidator(none_to_zero)]
NullableBool = Annotated[bool, BeforeValidator(none_to_false)]


class WireModel(BaseModel):
    """Base for decoded remote JSON: aliases accepted, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LinkField(WireModel):
    """Reference to another entity (``{"id", "type", "name"}``)."""

    id: NullableInt = 0
    type: NullableStr = ""
    name: NullableStr = ""


__all__ = [
    "NullableStr",
    "NullableInt",
    "NullableBool",
    "WireModel",
    "LinkField",
    "none_to_empty_str",
    "none_to_empty_list",
    "none_to_empty_dict",
    "none_to_zero",
    "none_to_false",
]
