"""
Query Gateway - authenticated request plumbing for the entity REST API.

Every call:

1. checks the active deadline and bounds its timeout by what remains,
2. obtains a bearer token from the ``Authenticator``,
3. sends the request over the shared ``httpx.Client``,
4. folds HTTP status >= 400 into ``RemoteError``,
5. decodes the JSON body (``DecodeError`` on malformed content).

Transport failures raise ``TransportError`` (``RequestTimeoutError`` for
timeouts, ``DeadlineExceededError`` when the caller's deadline ran out).

Usage:
    gateway = QueryGateway(settings, http_client, Authenticator(settings, http_client))

    version = gateway.find("Version", 6001, ["code", "sg_task"])
    notes = gateway.search(
        "Note",
        Filters().add("tasks.Task.id", "is", 42),
        ["subject", "content"],
        sort=[SortParam("created_at")],
    )
"""

from __future__ import annotations

from typing import Any

import httpx

from shotgun_api.api.auth import Authenticator
from shotgun_api.api.query import Filters, PageParam, SortParam, serialize_sort
from shotgun_api.api.responses import decode_json, remote_error_from, require_mapping
from shotgun_api.core.deadline import (
    check_deadline,
    get_current_deadline,
    get_effective_timeout,
)
from shotgun_api.core.errors import (
    DeadlineExceededError,
    DecodeError,
    RequestTimeoutError,
    TransportError,
)
from shotgun_api.core.logging import get_logger
from shotgun_api.core.settings import ShotgunSettings

logger = get_logger(__name__)

SEARCH_CONTENT_TYPE = "application/vnd+shotgun.api3_array+json"


class QueryGateway:
    """Generic find/search/create/update access to remote entities."""

    def __init__(
        self,
        settings: ShotgunSettings,
        http_client: httpx.Client,
        authenticator: Authenticator,
    ):
        self._settings = settings
        self._http = http_client
        self._auth = authenticator

    @property
    def base_url(self) -> str:
        return self._settings.url

    # ------------------------------------------------------------------ #
    # Entity operations
    # ------------------------------------------------------------------ #

    def find(self, entity_type: str, entity_id: int, fields: list[str]) -> dict[str, Any]:
        """Point lookup; returns the record under ``data``."""
        payload = self.request(
            "GET",
            f"/entity/{entity_type}/{entity_id}",
            params={"fields": ",".join(fields)},
        )
        return require_mapping(payload, f"{entity_type} find")["data"]

    def search(
        self,
        entity_type: str,
        filters: Filters,
        fields: list[str],
        page: PageParam | None = None,
        sort: list[SortParam] | None = None,
    ) -> list[dict[str, Any]]:
        """Filtered, sorted, optionally paginated query."""
        body: dict[str, Any] = {
            "filters": filters.serialize(),
            "fields": fields,
        }
        if page is not None and page.serialize():
            body["page"] = page.serialize()
        sort_value = serialize_sort(sort)
        if sort_value:
            body["sort"] = sort_value

        payload = self.request(
            "POST",
            f"/entity/{entity_type}/_search",
            json=body,
            headers={"Content-Type": SEARCH_CONTENT_TYPE},
        )
        records = require_mapping(payload, f"{entity_type} search")["data"]
        if not isinstance(records, list):
            raise DecodeError(f"Unexpected {entity_type} search response: 'data' is not a list")
        return records

    def create(self, entity_type: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create one entity; returns the created record."""
        payload = self.request("POST", f"/entity/{entity_type}", json=data)
        return require_mapping(payload, f"{entity_type} create")["data"]

    def update(
        self,
        entity_type: str,
        entity_id: int,
        data: dict[str, Any],
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        """Update fields of one entity; returns the updated record."""
        payload = self.request(
            "PUT",
            f"/entity/{entity_type}/{entity_id}",
            params={"fields": ",".join(fields)} if fields else None,
            json=data,
        )
        return require_mapping(payload, f"{entity_type} update")["data"]

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Authenticated GET returning the decoded body."""
        return self.request("GET", path, params=params)

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send one authenticated request and decode its JSON body."""
        url = f"{self.base_url}{path}"
        check_deadline(f"{method} {path}")

        token = self._auth.authenticate()
        request_headers = {
            "Accept": "application/json",
            "Authorization": token.header_value,
        }
        if headers:
            request_headers.update(headers)

        try:
            response = self._http.request(
                method,
                url,
                params=params,
                json=json,
                headers=request_headers,
                timeout=get_effective_timeout(self._settings.timeout),
            )
        except httpx.TimeoutException as e:
            current = get_current_deadline()
            if current is not None and current.is_expired():
                raise DeadlineExceededError(
                    timeout=current.timeout_seconds,
                    elapsed=current.elapsed,
                    operation=current.operation,
                    cause=e,
                ).with_context(url=url)
            logger.error("gateway.request_timeout", method=method, url=url)
            raise RequestTimeoutError(f"{method} {url} timed out", cause=e).with_context(url=url)
        except httpx.HTTPError as e:
            logger.error("gateway.request_failed", method=method, url=url, error=str(e))
            raise TransportError(f"{method} {url} failed: {e}", cause=e).with_context(url=url)

        if response.status_code >= 400:
            raise remote_error_from(response)

        return decode_json(response)


__all__ = ["QueryGateway", "SEARCH_CONTENT_TYPE"]
