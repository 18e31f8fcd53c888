"""
CLI: ``shotgun-api activity`` - one page of an entity's activity feed.
"""

from __future__ import annotations

import typer

from shotgun_api.activity.fetcher import DEFAULT_PAGE_SIZE
from shotgun_api.cli.utils import fail, make_client, output_page
from shotgun_api.core.errors import ShotgunError


def activity(
    entity_type: str = typer.Argument(..., help="Entity type, e.g. Shot, Asset, Task"),
    entity_id: int = typer.Argument(..., help="Entity id"),
    limit: int = typer.Option(DEFAULT_PAGE_SIZE, "--limit", "-n", min=1, help="Updates to request"),
    since: int = typer.Option(0, "--since", help="Only updates newer than this update id"),
    timeout: float | None = typer.Option(None, "--timeout", min=0, help="Overall deadline in seconds"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show Note and Version activity for an entity."""
    client = make_client()
    with client:
        try:
            page = client.fetch_activity(entity_type, entity_id, page_size=limit, since_id=since, timeout=timeout)
        except ShotgunError as e:
            fail(e)
    output_page(page, as_json=json_out)
