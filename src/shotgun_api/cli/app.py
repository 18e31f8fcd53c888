"""
Root Typer application for the shotgun-api CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from shotgun_api.cli.activity import activity

app = Typer(
    name="shotgun-api",
    help="shotgun-api: read a Shotgun entity's activity feed.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from shotgun_api import __version__

        typer.echo(f"shotgun-api {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """shotgun-api CLI: fetch and render activity feeds."""


# ── Commands ─────────────────────────────────────────────────────────────

app.command("activity")(activity)
