"""
Implementation SQLModel du repository des genres.

Les genres utilisent l'ID TMDB comme cle primaire : films et series
partagent le meme espace d'IDs.
"""

from typing import Iterable

from sqlmodel import Session, select

from watchlog.core.entities.media import Genre
from watchlog.core.ports.repositories import IGenreRepository
from watchlog.infrastructure.persistence.models import GenreModel, ItemGenreLink


class SQLModelGenreRepository(IGenreRepository):
    """Repository SQLModel pour les genres et la table de liaison item_genre."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def upsert_many(self, genres: Iterable[Genre]) -> int:
        """Insere les nouveaux genres et renomme ceux qui existent deja."""
        count = 0
        for genre in genres:
            model = self._session.get(GenreModel, genre.id)
            if model is None:
                model = GenreModel(id=genre.id, name=genre.name)
            else:
                model.name = genre.name
            self._session.add(model)
            count += 1
        self._session.flush()
        return count

    def list_all(self) -> list[Genre]:
        """Liste tous les genres, tries par nom."""
        statement = select(GenreModel).order_by(GenreModel.name)
        return [Genre(id=m.id, name=m.name) for m in self._session.exec(statement).all()]

    def filter_known(self, genre_ids: Iterable[int]) -> set[int]:
        """Sous-ensemble des IDs presents en base."""
        ids = set(genre_ids)
        if not ids:
            return set()
        statement = select(GenreModel.id).where(GenreModel.id.in_(ids))
        return set(self._session.exec(statement).all())

    def set_item_genres(self, item_id: int, genre_ids: Iterable[int]) -> None:
        """Remplace les liens de genres d'un item."""
        existing = self._session.exec(
            select(ItemGenreLink).where(ItemGenreLink.item_id == item_id)
        ).all()
        for link in existing:
            self._session.delete(link)
        self._session.flush()
        for genre_id in sorted(set(genre_ids)):
            self._session.add(ItemGenreLink(item_id=item_id, genre_id=genre_id))
        self._session.flush()

    def list_for_item(self, item_id: int) -> list[Genre]:
        """Genres rattaches a un item, tries par nom."""
        statement = (
            select(GenreModel)
            .join(ItemGenreLink, ItemGenreLink.genre_id == GenreModel.id)
            .where(ItemGenreLink.item_id == item_id)
            .order_by(GenreModel.name)
        )
        return [Genre(id=m.id, name=m.name) for m in self._session.exec(statement).all()]
