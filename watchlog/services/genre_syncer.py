"""
Synchronisation des genres TMDB.

Maintient la liste locale des genres (films et series) et les liens
entre un item et ses genres.
"""

from typing import Iterable

from loguru import logger

from watchlog.core.entities.media import Item
from watchlog.core.ports.api_clients import IMetadataProvider
from watchlog.core.ports.repositories import IGenreRepository, ITransactionManager


class GenreSyncService:
    """
    Service de synchronisation des genres.

    Les IDs de genres inconnus en base sont ignores : update_genre_lists()
    doit avoir ete appele au moins une fois pour que les liens soient crees.
    """

    def __init__(
        self,
        genre_repo: IGenreRepository,
        tmdb_client: IMetadataProvider,
        transaction: ITransactionManager,
    ) -> None:
        """
        Initialise le service.

        Args:
            genre_repo: Repository des genres
            tmdb_client: Client TMDB
            transaction: Gestionnaire de transaction
        """
        self._genre_repo = genre_repo
        self._tmdb_client = tmdb_client
        self._transaction = transaction

    async def update_genre_lists(self) -> int:
        """
        Recupere les genres films et series de TMDB et les enregistre.

        Returns:
            Nombre de genres inseres ou renommes
        """
        genres = await self._tmdb_client.genre_lists()
        with self._transaction.atomic():
            count = self._genre_repo.upsert_many(genres)
        logger.info(f"Liste des genres mise a jour ({count} genres)")
        return count

    def sync(self, item: Item, genre_ids: Iterable[int]) -> list[int]:
        """
        Remplace les genres d'un item par le sous-ensemble connu des IDs donnes.

        Returns:
            IDs effectivement rattaches, tries
        """
        wanted = set(genre_ids)
        known = self._genre_repo.filter_known(wanted)
        unknown = wanted - known
        if unknown:
            logger.warning(
                f"Genres inconnus ignores pour '{item.title}': {sorted(unknown)}"
            )

        with self._transaction.atomic():
            self._genre_repo.set_item_genres(item.id, known)
        return sorted(known)
