"""
Exceptions du domaine Watchlog.

Les resultats "non trouve" et "non rafraichi" des operations du catalogue
ne sont pas des exceptions (voir OperationResult) : seules les erreurs qui
doivent interrompre une operation sont definies ici.
"""

from typing import Optional


class WatchlogError(Exception):
    """Erreur de base de l'application."""


class ItemNotFoundError(WatchlogError):
    """
    Exception levee quand un item requis n'existe pas.

    Attributes:
        item_id: ID interne recherche
    """

    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__(f"Item introuvable: {item_id}")


class IncompleteItemError(WatchlogError):
    """
    Exception levee quand un item ne peut pas etre cree faute de titre.

    Arrive quand l'appelant ne fournit pas de titre et que TMDB
    ne retourne rien d'exploitable.
    """

    def __init__(self, tmdb_id: Optional[int]) -> None:
        self.tmdb_id = tmdb_id
        super().__init__(f"Aucun titre disponible pour tmdb_id={tmdb_id}")


class ConfigurationError(WatchlogError):
    """Exception levee quand un parametre requis n'est pas configure."""
