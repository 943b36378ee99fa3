"""
Commandes CLI des episodes : affichage par saison et suivi du visionnage.
"""

import asyncio
from typing import Annotated

import typer
from rich.table import Table

from watchlog.adapters.cli.helpers import console, with_container

episodes_app = typer.Typer(help="Suivi des episodes des series")


@episodes_app.command("list")
def list_episodes(
    tmdb_id: Annotated[int, typer.Argument(help="ID TMDB de la serie")],
) -> None:
    """Affiche les episodes d'une serie, saison par saison."""
    asyncio.run(_list_episodes_async(tmdb_id))


@with_container()
async def _list_episodes_async(container, tmdb_id: int) -> None:
    overview = container.episode_service().get_all_by_tmdb_id(tmdb_id)
    if not overview.episodes:
        console.print("[yellow]Aucun episode pour cette serie.[/yellow]")
        return

    for season_number, episodes in sorted(overview.episodes.items()):
        table = Table(title=f"Saison {season_number}")
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Ep.", justify="right")
        table.add_column("Titre")
        table.add_column("Diffusion")
        table.add_column("Vu", justify="center")
        for episode in episodes:
            # Titres masques pour les episodes non vus si la protection est active
            name = episode.name
            if overview.spoiler and not episode.seen:
                name = "[dim]***[/dim]"
            table.add_row(
                str(episode.id),
                str(episode.episode_number),
                name,
                episode.air_date.isoformat() if episode.air_date else "-",
                "[green]✓[/green]" if episode.seen else "",
            )
        console.print(table)


@episodes_app.command("seen")
def toggle_seen(
    episode_id: Annotated[int, typer.Argument(help="ID interne de l'episode")],
) -> None:
    """Inverse l'etat vu d'un episode."""
    asyncio.run(_toggle_seen_async(episode_id))


@with_container()
async def _toggle_seen_async(container, episode_id: int) -> None:
    episode = container.episode_service().toggle_seen(episode_id)
    if episode is None:
        console.print("[yellow]Episode introuvable.[/yellow]")
        return
    state = "vu" if episode.seen else "non vu"
    console.print(
        f"[green]✓[/green] S{episode.season_number:02d}E{episode.episode_number:02d} {state}"
    )


@episodes_app.command("season")
def toggle_season(
    tmdb_id: Annotated[int, typer.Argument(help="ID TMDB de la serie")],
    season: Annotated[int, typer.Argument(help="Numero de saison")],
    seen: Annotated[
        bool, typer.Option("--seen/--unseen", help="Etat a appliquer a la saison")
    ] = True,
) -> None:
    """Marque tous les episodes d'une saison comme vus (ou non vus)."""
    asyncio.run(_toggle_season_async(tmdb_id, season, seen))


@with_container()
async def _toggle_season_async(container, tmdb_id: int, season: int, seen: bool) -> None:
    count = container.episode_service().toggle_season(tmdb_id, season, seen)
    state = "vus" if seen else "non vus"
    console.print(f"[green]✓[/green] {count} episode(s) marque(s) {state}")
