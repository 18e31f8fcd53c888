"""Command-line interface (``shotgun-api``)."""

from shotgun_api.cli.app import app

__all__ = ["app"]
