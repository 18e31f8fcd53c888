"""
Remote API access: authentication, query helpers and the Query Gateway.
"""

from shotgun_api.api.auth import Authenticator, AuthToken
from shotgun_api.api.gateway import QueryGateway
from shotgun_api.api.query import (
    FilterExpression,
    Filters,
    PageParam,
    SortDirection,
    SortParam,
    serialize_sort,
)

__all__ = [
    "Authenticator",
    "AuthToken",
    "QueryGateway",
    "FilterExpression",
    "Filters",
    "PageParam",
    "SortDirection",
    "SortParam",
    "serialize_sort",
]
