"""
Response decoding shared by the gateway and the authenticator.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from shotgun_api.core.errors import DecodeError, RemoteError
from shotgun_api.core.logging import get_logger

logger = get_logger(__name__)


def decode_json(response: httpx.Response) -> Any:
    """Decode a JSON body, raising DecodeError on malformed content."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(
            f"Malformed JSON response from {response.request.url}", cause=e
        ).with_context(url=str(response.request.url), http_status=response.status_code)


def remote_error_from(response: httpx.Response) -> RemoteError:
    """Fold an HTTP >= 400 response into a RemoteError.

    A body that is not JSON still yields a RemoteError (``HTTP {status}``);
    the raw text is kept in the context metadata.
    """
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    error = RemoteError.from_payload(response.status_code, payload)
    error.with_context(url=str(response.request.url))
    if payload is None and response.text:
        error.with_context(body=response.text[:500])

    logger.warning(
        "gateway.remote_error",
        url=str(response.request.url),
        status=response.status_code,
        errors=len(error.errors),
    )
    return error


def require_mapping(payload: Any, what: str) -> dict[str, Any]:
    """Ensure a decoded body is a JSON object with a ``data`` member."""
    if not isinstance(payload, dict) or "data" not in payload:
        raise DecodeError(f"Unexpected {what} response: missing 'data'")
    return payload
