"""
Utilitaires partages pour les commandes CLI de Watchlog.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- listing_table : tableau Rich d'une liste d'items
"""

from contextlib import contextmanager
from functools import wraps
from typing import Iterable

from loguru import logger as loguru_logger
from rich.console import Console
from rich.table import Table

from watchlog.container import Container
from watchlog.core.value_objects import ItemListing

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("watchlog")
    try:
        yield
    finally:
        loguru_logger.enable("watchlog")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Les clients HTTP, la session et le cache API sont fermes a la fin de la commande.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.tmdb_client().close()
                await container.imdb_client().close()
                container.session().close()
                container.api_cache().close()
        return wrapper
    return decorator


def listing_table(listings: Iterable[ItemListing], title: str = "Catalogue") -> Table:
    """Construit le tableau Rich d'une liste d'items."""
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Titre", style="bold")
    table.add_column("Type")
    table.add_column("Sortie")
    table.add_column("Note", justify="right")
    table.add_column("TMDB", justify="right")
    table.add_column("IMDb", justify="right")
    table.add_column("Dernier episode")

    for listing in listings:
        item = listing.item
        latest = listing.latest_episode
        table.add_row(
            str(item.id),
            item.title + (" [yellow](watchlist)[/yellow]" if item.watchlist else ""),
            item.media_type.value,
            item.released.strftime("%Y") if item.released else "-",
            str(item.rating) if item.rating else "-",
            f"{item.tmdb_rating:.1f}" if item.tmdb_rating is not None else "-",
            f"{item.imdb_rating:.1f}" if item.imdb_rating is not None else "-",
            f"S{latest.season_number:02d}E{latest.episode_number:02d}" if latest else "-",
        )
    return table
