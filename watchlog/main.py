"""
Point d'entrée CLI de Watchlog.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

import typer
from loguru import logger

from watchlog import __version__
from watchlog.adapters.cli.commands import (
    add,
    episodes_app,
    find,
    historic,
    import_export,
    list_items,
    rate,
    refresh,
    refresh_all,
    remove,
    search,
    update_genres,
)
from watchlog.config import Settings
from watchlog.container import Container
from watchlog.logging_config import configure_logging

app = typer.Typer(
    name="watchlog",
    help="Catalogue personnel de films et de series",
)
container = Container()

# Commandes du catalogue
app.command()(add)
app.command()(refresh)
app.command(name="refresh-all")(refresh_all)
app.command()(remove)
app.command()(rate)
app.command()(historic)
app.command(name="list")(list_items)
app.command()(search)
app.command()(find)
app.command(name="update-genres")(update_genres)
# Note: "import" est un mot reserve Python, donc on utilise name= explicitement
app.command(name="import")(import_export)

# Monter episodes_app comme sous-commande
app.add_typer(episodes_app, name="episodes")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Images : {config.assets_dir}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Langue TMDB : {config.tmdb_language}")
    typer.echo(f"Items par page : {config.loading_items}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Watchlog v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    configure_logging(container.config())
    logger.info(f"Watchlog v{__version__}")
    app()


if __name__ == "__main__":
    main()
