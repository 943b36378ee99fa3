"""
Commande CLI d'import d'un export JSON du catalogue.

Format attendu : un objet JSON avec les listes "items" et "episodes".
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from watchlog.adapters.cli.helpers import console, suppress_loguru, with_container


def import_export(
    export_file: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="Fichier JSON d'export"),
    ],
) -> None:
    """Importe les items et episodes d'un export."""
    data = json.loads(export_file.read_text(encoding="utf-8"))
    asyncio.run(_import_export_async(data.get("items") or [], data.get("episodes") or []))


@with_container()
async def _import_export_async(container, items: list[dict], episodes: list[dict]) -> None:
    """Implementation async de la commande import."""
    item_service = container.item_sync_service()
    episode_service = container.episode_service()

    console.print(
        f"[bold cyan]Import[/bold cyan]: {len(items)} item(s), {len(episodes)} episode(s)\n"
    )

    with suppress_loguru():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("[cyan]Items...", total=len(items))
            for record in items:
                item = await item_service.import_item(record)
                progress.console.print(f"  [green]✓[/green] {item.title}")
                progress.advance(task)

            task = progress.add_task("[cyan]Episodes...", total=len(episodes))
            for record in episodes:
                episode_service.import_episode(record)
                progress.advance(task)

    console.print("\n[bold green]Import termine.[/bold green]")
