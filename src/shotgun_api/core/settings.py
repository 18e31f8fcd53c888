"""Client settings loaded from the environment.

The service base URL and script credentials are passed explicitly into the
gateway and authenticator instead of living in module globals.
``ShotgunSettings`` reads them from ``SHOTGUN_*`` environment variables (or a
``.env`` file) and ``validate_required()`` is called once when a client is
built.

Fields
──────
url                 : Site URL, e.g. https://studio.shotgunstudio.com
client_id           : Script name used for the client-credentials grant
secret              : Script key
timeout             : Per-request HTTP timeout in seconds
attachment_workers  : Threads used to resolve a Note's attachments (1 = sequential)
log_level           : structlog log level
log_format          : "console" or "json"

Examples:
    >>> settings = ShotgunSettings(
    ...     url="https://studio.shotgunstudio.com",
    ...     client_id="feed_reader",
    ...     secret="s3cret",
    ... )
    >>> settings.url
    'https://studio.shotgunstudio.com/api/v1'
    >>> settings.validate_required()
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shotgun_api.core.errors import ConfigError, MissingConfigError

API_PATH = "/api/v1"


class ShotgunSettings(BaseSettings):
    """Connection, credential and logging settings (``SHOTGUN_`` prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="SHOTGUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Connection ───────────────────────────────────────────────
    url: str = ""
    timeout: float = Field(default=30.0, gt=0)

    # ── Credentials ──────────────────────────────────────────────
    client_id: str = ""
    secret: SecretStr = SecretStr("")

    # ── Activity feed ────────────────────────────────────────────
    attachment_workers: int = Field(default=1, ge=1)

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("url")
    @classmethod
    def _normalize_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.endswith(API_PATH):
            value += API_PATH
        return value

    def validate_required(self) -> None:
        """Raise MissingConfigError for the first required field left empty."""
        if not self.url:
            raise MissingConfigError("SHOTGUN_URL")
        if not self.client_id:
            raise MissingConfigError("SHOTGUN_CLIENT_ID")
        if not self.secret.get_secret_value():
            raise MissingConfigError("SHOTGUN_SECRET")


def get_settings(**overrides: object) -> ShotgunSettings:
    """
    Build settings from the environment, applying explicit overrides.

    Raises:
        ConfigError: a value is present but malformed (e.g. SHOTGUN_TIMEOUT=abc)
    """
    try:
        return ShotgunSettings(**overrides)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {_describe(e)}", cause=e)


def _describe(error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"])
        problems.append(f"SHOTGUN_{field.upper()}: {err['msg']}")
    return "; ".join(problems)
