"""
Synchronisation des titres alternatifs d'un item.

Les titres alternatifs alimentent la recherche : un film peut etre
retrouve sous son titre de sortie dans un autre pays.
"""

from loguru import logger

from watchlog.core.entities.media import AlternativeTitle, Item
from watchlog.core.ports.api_clients import IMetadataProvider
from watchlog.core.ports.repositories import (
    IAlternativeTitleRepository,
    ITransactionManager,
)


class AlternativeTitleSyncService:
    """
    Service de synchronisation des titres alternatifs.

    fetch() (reseau) et replace() (base) sont separes pour que les appelants
    puissent recuperer les donnees avant d'ouvrir leur transaction.
    """

    def __init__(
        self,
        alternative_title_repo: IAlternativeTitleRepository,
        tmdb_client: IMetadataProvider,
        transaction: ITransactionManager,
    ) -> None:
        self._repo = alternative_title_repo
        self._tmdb_client = tmdb_client
        self._transaction = transaction

    async def fetch(self, item: Item) -> list[AlternativeTitle]:
        """Recupere les titres alternatifs TMDB d'un item (vide sans tmdb_id)."""
        if item.tmdb_id is None:
            return []
        titles = await self._tmdb_client.alternative_titles(item.tmdb_id, item.media_type)
        return [
            AlternativeTitle(tmdb_id=item.tmdb_id, title=title.title, country=title.country)
            for title in titles
        ]

    def replace(self, tmdb_id: int, titles: list[AlternativeTitle]) -> list[AlternativeTitle]:
        """Remplace les titres alternatifs stockes pour un tmdb_id."""
        with self._transaction.atomic():
            stored = self._repo.replace_all(tmdb_id, titles)
        logger.debug(f"{len(stored)} titres alternatifs enregistres pour tmdb_id={tmdb_id}")
        return stored

    async def create(self, item: Item) -> list[AlternativeTitle]:
        """Recupere puis enregistre les titres alternatifs d'un item."""
        if item.tmdb_id is None:
            return []
        titles = await self.fetch(item)
        return self.replace(item.tmdb_id, titles)

    def remove(self, tmdb_id: int) -> int:
        """Supprime les titres alternatifs d'un item."""
        with self._transaction.atomic():
            return self._repo.delete_by_tmdb_id(tmdb_id)
