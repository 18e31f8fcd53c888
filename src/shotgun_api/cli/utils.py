"""
CLI utility helpers: client construction and output formatting.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from shotgun_api.activity.models import ActivityFeedPage
from shotgun_api.client import ShotgunClient
from shotgun_api.core.errors import ShotgunError
from shotgun_api.core.logging import configure_logging
from shotgun_api.core.settings import ShotgunSettings, get_settings

console = Console()
err_console = Console(stderr=True)


# ── Client helper ────────────────────────────────────────────────────────


def make_client(settings: ShotgunSettings | None = None) -> ShotgunClient:
    """Configure logging from settings and build a client, exiting on bad config."""
    try:
        settings = settings if settings is not None else get_settings()
        configure_logging(level=settings.log_level, json_format=settings.log_format == "json")
        return ShotgunClient(settings)
    except ShotgunError as e:
        fail(e)


def fail(error: ShotgunError) -> NoReturn:
    """Print a typed error and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    raise typer.Exit(code=1)


# ── Output helpers ───────────────────────────────────────────────────────


def _truncate(text: str, width: int = 60) -> str:
    text = " ".join(text.split())
    return text if len(text) <= width else text[: width - 1] + "…"


def output_page(page: ActivityFeedPage, *, as_json: bool = False) -> None:
    """Render an activity page as a rich table or JSON."""
    if as_json:
        console.print_json(json.dumps(page.to_dict(), default=str))
        return

    if not page.items:
        console.print("[dim]No activity.[/dim]")
        return

    table = Table(title=f"{page.entity_type} {page.entity_id} activity", show_lines=False)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Created", style="dim")
    table.add_column("Type")
    table.add_column("By")
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Links", justify="right")

    for item in page:
        table.add_row(
            str(item.id),
            item.created_at,
            item.entity_type,
            item.created_by.name,
            _truncate(item.title),
            _truncate(item.description),
            str(len(item.links) + len(item.media)),
        )

    console.print(table)
    _print_cursor(page)


def _print_cursor(page: ActivityFeedPage) -> None:
    footer: list[Any] = [f"{len(page)} item(s)"]
    if page.skipped:
        footer.append(f"{page.skipped} skipped")
    if page.latest_update_id is not None:
        footer.append(f"next --since {page.latest_update_id}")
    console.print(f"[dim]{' · '.join(str(part) for part in footer)}[/dim]")
