"""
Commandes CLI du catalogue : ajout, rafraichissement, suppression, notes
et consultation des items.
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.progress import Progress, SpinnerColumn, TextColumn

from watchlog.adapters.cli.helpers import (
    console,
    listing_table,
    suppress_loguru,
    with_container,
)
from watchlog.core.entities.media import MediaType
from watchlog.core.exceptions import IncompleteItemError, ItemNotFoundError
from watchlog.core.value_objects import ItemDraft, OperationResult, OperationStatus

ItemIdArgument = Annotated[int, typer.Argument(help="ID interne de l'item")]


def _print_result(result: OperationResult, action: str) -> None:
    """Affiche l'issue d'une operation sur un item."""
    if result.status == OperationStatus.NOT_FOUND:
        console.print("[red]Item introuvable.[/red]")
        raise typer.Exit(code=1)
    if result.status == OperationStatus.NOT_REFRESHED:
        console.print(
            f"[yellow]{result.item.title}[/yellow] non rafraichi "
            "(TMDB n'a retourne aucun titre)."
        )
        return
    console.print(f"[green]✓[/green] {action}: [bold]{result.item.title}[/bold]")


def add(
    tmdb_id: Annotated[int, typer.Argument(help="ID TMDB du film ou de la serie")],
    media_type: Annotated[
        str, typer.Option("--type", "-t", help="Type de media (movie, tv)")
    ] = "movie",
    watchlist: Annotated[
        bool, typer.Option("--watchlist", "-w", help="Ajouter a la liste de souhaits")
    ] = False,
) -> None:
    """Ajoute un film ou une serie au catalogue depuis TMDB."""
    asyncio.run(_add_async(tmdb_id, media_type, watchlist))


@with_container()
async def _add_async(container, tmdb_id: int, media_type: str, watchlist: bool) -> None:
    """Implementation async de la commande add."""
    service = container.item_sync_service()
    draft = ItemDraft(
        tmdb_id=tmdb_id,
        media_type=MediaType.parse(media_type),
        watchlist=watchlist,
    )
    try:
        with suppress_loguru():
            item = await service.create(draft)
    except IncompleteItemError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Ajoute: [bold]{item.title}[/bold] (ID {item.id})")


def refresh(item_id: ItemIdArgument) -> None:
    """Rafraichit les metadonnees d'un item depuis TMDB et IMDb."""
    asyncio.run(_refresh_async(item_id))


@with_container()
async def _refresh_async(container, item_id: int) -> None:
    """Implementation async de la commande refresh."""
    service = container.item_sync_service()
    try:
        with suppress_loguru():
            result = await service.refresh(item_id)
    except ItemNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    _print_result(result, "Rafraichi")


def refresh_all() -> None:
    """Rafraichit tous les items, les moins recemment mis a jour d'abord."""
    asyncio.run(_refresh_all_async())


@with_container()
async def _refresh_all_async(container) -> None:
    """Implementation async de la commande refresh-all."""
    service = container.item_sync_service()
    runner = container.refresh_runner()
    runner.bind(service.refresh)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("[cyan]Rafraichissement du catalogue...", total=None)
        submitted = await service.refresh_all()
        stats = await runner.join()

    console.print(f"\n[bold]Resume:[/bold] {submitted} item(s) soumis")
    console.print(f"  [green]{stats.refreshed}[/green] rafraichi(s)")
    if stats.skipped > 0:
        console.print(f"  [yellow]{stats.skipped}[/yellow] ignore(s)")
    if stats.failed > 0:
        console.print(f"  [red]{stats.failed}[/red] echec(s) (voir les logs)")


def remove(item_id: ItemIdArgument) -> None:
    """Supprime un item avec ses episodes, titres alternatifs et images."""
    asyncio.run(_remove_async(item_id))


@with_container()
async def _remove_async(container, item_id: int) -> None:
    result = container.item_sync_service().remove(item_id)
    _print_result(result, "Supprime")


def rate(
    item_id: ItemIdArgument,
    rating: Annotated[int, typer.Argument(help="Note personnelle (0 = sans note)")],
) -> None:
    """Change la note personnelle d'un item."""
    asyncio.run(_rate_async(item_id, rating))


@with_container()
async def _rate_async(container, item_id: int, rating: int) -> None:
    result = container.item_sync_service().change_rating(item_id, rating)
    _print_result(result, f"Note {rating}")


def historic(item_id: ItemIdArgument) -> None:
    """Bascule le statut historique d'un item."""
    asyncio.run(_historic_async(item_id))


@with_container()
async def _historic_async(container, item_id: int) -> None:
    result = container.item_sync_service().toggle_historic(item_id)
    state = "historique" if result.item and result.item.is_historic else "actif"
    _print_result(result, f"Statut {state}")


def list_items(
    media_type: Annotated[
        str, typer.Option("--type", "-t", help="watchlist, movie, tv ou home")
    ] = "home",
    order_by: Annotated[
        str,
        typer.Option("--order-by", "-o", help="Tri (ex: 'title', 'last seen with history')"),
    ] = "last seen",
    direction: Annotated[str, typer.Option("--direction", "-d", help="asc ou desc")] = "desc",
    page: Annotated[int, typer.Option("--page", "-p", min=1, help="Numero de page")] = 1,
) -> None:
    """Liste le catalogue, page par page."""
    asyncio.run(_list_items_async(media_type, order_by, direction, page))


@with_container()
async def _list_items_async(
    container, media_type: str, order_by: str, direction: str, page: int
) -> None:
    result = container.item_sync_service().get_with_pagination(
        media_type, order_by, direction, page
    )
    if not result.items:
        console.print("[yellow]Aucun item.[/yellow]")
        return
    console.print(listing_table(result.items, title=f"Catalogue - page {result.page}"))
    if result.has_more:
        console.print(f"[dim]Page suivante: --page {result.page + 1}[/dim]")


def search(title: Annotated[str, typer.Argument(help="Titre (ou partie du titre)")]) -> None:
    """Recherche des items par titre, titre original ou titre alternatif."""
    asyncio.run(_search_async(title))


@with_container()
async def _search_async(container, title: str) -> None:
    listings = container.item_sync_service().search(title)
    if not listings:
        console.print(f"[yellow]Aucun resultat pour '{title}'.[/yellow]")
        return
    console.print(listing_table(listings, title=f"Recherche: {title}"))


def find(
    kind: Annotated[str, typer.Argument(help="title, title_strict, fp_name, tmdb_id ou src")],
    value: Annotated[str, typer.Argument(help="Valeur recherchee")],
    media_type: Annotated[
        Optional[str], typer.Option("--type", "-t", help="Filtre movie ou tv")
    ] = None,
) -> None:
    """Recherche un item unique."""
    asyncio.run(_find_async(kind, value, media_type))


@with_container()
async def _find_async(container, kind: str, value: str, media_type: Optional[str]) -> None:
    listing = container.item_sync_service().find_by(kind, value, media_type)
    if listing is None:
        console.print("[yellow]Aucun item trouve.[/yellow]")
        raise typer.Exit(code=1)
    console.print(listing_table([listing], title="Resultat"))


def update_genres() -> None:
    """Met a jour la liste des genres depuis TMDB."""
    asyncio.run(_update_genres_async())


@with_container()
async def _update_genres_async(container) -> None:
    with suppress_loguru():
        count = await container.genre_service().update_genre_lists()
    console.print(f"[green]✓[/green] {count} genre(s) enregistre(s)")
