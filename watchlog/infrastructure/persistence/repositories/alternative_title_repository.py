"""
Implementation SQLModel du repository des titres alternatifs.
"""

from sqlmodel import Session, select

from watchlog.core.entities.media import AlternativeTitle
from watchlog.core.ports.repositories import IAlternativeTitleRepository
from watchlog.infrastructure.persistence.models import AlternativeTitleModel


class SQLModelAlternativeTitleRepository(IAlternativeTitleRepository):
    """Repository SQLModel pour les titres alternatifs, rattaches par tmdb_id."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: AlternativeTitleModel) -> AlternativeTitle:
        return AlternativeTitle(
            id=model.id,
            tmdb_id=model.tmdb_id,
            title=model.title,
            country=model.country,
        )

    def list_by_tmdb_id(self, tmdb_id: int) -> list[AlternativeTitle]:
        """Liste les titres alternatifs d'un item, dans l'ordre d'insertion."""
        statement = (
            select(AlternativeTitleModel)
            .where(AlternativeTitleModel.tmdb_id == tmdb_id)
            .order_by(AlternativeTitleModel.id)
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def replace_all(
        self, tmdb_id: int, titles: list[AlternativeTitle]
    ) -> list[AlternativeTitle]:
        """Supprime les titres existants puis insere les nouveaux."""
        self.delete_by_tmdb_id(tmdb_id)
        models = [
            AlternativeTitleModel(tmdb_id=tmdb_id, title=title.title, country=title.country)
            for title in titles
        ]
        self._session.add_all(models)
        self._session.flush()
        return [self._to_entity(model) for model in models]

    def delete_by_tmdb_id(self, tmdb_id: int) -> int:
        """Supprime les titres alternatifs d'un item."""
        models = self._session.exec(
            select(AlternativeTitleModel).where(AlternativeTitleModel.tmdb_id == tmdb_id)
        ).all()
        for model in models:
            self._session.delete(model)
        self._session.flush()
        return len(models)
