"""
Query building blocks for entity searches.

Filters serialize to the api3 array form ``[[field, relation, value], ...]``
and sort parameters to a comma-joined string with a leading ``-`` for
descending fields.

Examples:
    >>> filters = Filters([FilterExpression("project.Project.id", "is", 85)])
    >>> filters.serialize()
    [['project.Project.id', 'is', 85]]
    >>> serialize_sort([SortParam("code"), SortParam("created_at", SortDirection.DESCENDING)])
    'code,-created_at'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class FilterExpression:
    """One ``(field, relation, value)`` filter triple."""

    field: str
    relation: str
    value: Any

    def serialize(self) -> list[Any]:
        return [self.field, self.relation, self.value]


@dataclass
class Filters:
    """Ordered list of filter expressions, implicitly AND-ed by the remote."""

    expressions: list[FilterExpression] = field(default_factory=list)

    def add(self, field_name: str, relation: str, value: Any) -> Filters:
        self.expressions.append(FilterExpression(field_name, relation, value))
        return self

    def serialize(self) -> list[list[Any]]:
        return [expression.serialize() for expression in self.expressions]


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class SortParam:
    field_name: str
    direction: SortDirection = SortDirection.ASCENDING


def serialize_sort(params: list[SortParam] | None) -> str:
    """Serialize sort parameters (``-`` prefix for descending)."""
    serialized = []
    for param in params or []:
        if param.direction == SortDirection.DESCENDING:
            serialized.append(f"-{param.field_name}")
        else:
            serialized.append(param.field_name)
    return ",".join(serialized)


@dataclass(frozen=True)
class PageParam:
    """Page size/number; zero values are omitted from the request."""

    size: int = 0
    number: int = 0

    def serialize(self) -> dict[str, int]:
        result = {}
        if self.size:
            result["size"] = self.size
        if self.number:
            result["number"] = self.number
        return result


__all__ = [
    "FilterExpression",
    "Filters",
    "SortDirection",
    "SortParam",
    "PageParam",
    "serialize_sort",
]
