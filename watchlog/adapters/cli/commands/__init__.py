"""Sous-package CLI commands - re-exporte les commandes publiques."""

from watchlog.adapters.cli.commands.catalog_commands import (
    add,
    find,
    historic,
    list_items,
    rate,
    refresh,
    refresh_all,
    remove,
    search,
    update_genres,
)
from watchlog.adapters.cli.commands.episode_commands import episodes_app
from watchlog.adapters.cli.commands.import_commands import import_export

__all__ = [
    "add",
    "episodes_app",
    "find",
    "historic",
    "import_export",
    "list_items",
    "rate",
    "refresh",
    "refresh_all",
    "remove",
    "search",
    "update_genres",
]
