"""
Shared pytest fixtures for shotgun-api tests.

Every test talks to ``FakeShotgun`` through ``httpx.MockTransport``; no test
touches the network.

Usage:
    def test_something(fake_api, gateway):
        fake_api.add("GET", "/entity/Version/1", {"data": {...}})
        gateway.find("Version", 1, ["code"])
"""

from __future__ import annotations

import logging
from typing import Iterator

import httpx
import pytest
import structlog

from shotgun_api.api.auth import Authenticator
from shotgun_api.api.gateway import QueryGateway
from shotgun_api.core.logging import configure_library_defaults
from shotgun_api.core.settings import ShotgunSettings
from tests._support.fake_api import FakeShotgun

BASE_URL = "https://studio.example.com"


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep developer SHOTGUN_* variables and logging config out of tests."""
    for key in ("SHOTGUN_URL", "SHOTGUN_CLIENT_ID", "SHOTGUN_SECRET", "SHOTGUN_TIMEOUT",
                "SHOTGUN_ATTACHMENT_WORKERS", "SHOTGUN_LOG_LEVEL", "SHOTGUN_LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    configure_library_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def settings() -> ShotgunSettings:
    return ShotgunSettings(
        url=BASE_URL,
        client_id="feed_reader",
        secret="s3cret",
        _env_file=None,
    )


@pytest.fixture
def fake_api() -> FakeShotgun:
    return FakeShotgun()


@pytest.fixture
def http_client(fake_api: FakeShotgun) -> Iterator[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(fake_api))
    yield client
    client.close()


@pytest.fixture
def authenticator(settings: ShotgunSettings, http_client: httpx.Client) -> Authenticator:
    return Authenticator(settings, http_client)


@pytest.fixture
def gateway(
    settings: ShotgunSettings,
    http_client: httpx.Client,
    authenticator: Authenticator,
) -> QueryGateway:
    return QueryGateway(settings, http_client, authenticator)
