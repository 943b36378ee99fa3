"""
Implementation SQLModel du repository Episode.

Les episodes sont rattaches a leur serie par ID TMDB. L'ensemble des
episodes d'une serie est remplace a chaque synchronisation.
"""

from typing import Optional

from sqlmodel import Session, select

from watchlog.core.entities.media import Episode
from watchlog.core.ports.repositories import IEpisodeRepository
from watchlog.infrastructure.persistence.models import EpisodeModel


def episode_to_entity(model: EpisodeModel) -> Episode:
    """Convertit un modele DB en entite Episode."""
    return Episode(
        id=model.id,
        tmdb_id=model.tmdb_id,
        season_number=model.season_number,
        episode_number=model.episode_number,
        name=model.name,
        air_date=model.air_date,
        episode_tmdb_id=model.episode_tmdb_id,
        season_tmdb_id=model.season_tmdb_id,
        seen=model.seen,
        src=model.src,
        fp_name=model.fp_name,
        subtitles=model.subtitles,
    )


class SQLModelEpisodeRepository(IEpisodeRepository):
    """
    Repository SQLModel pour les episodes.

    Implemente IEpisodeRepository avec conversion bidirectionnelle
    entre l'entite Episode (domaine) et EpisodeModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_model(self, entity: Episode) -> EpisodeModel:
        return EpisodeModel(
            tmdb_id=entity.tmdb_id,
            season_number=entity.season_number,
            episode_number=entity.episode_number,
            name=entity.name,
            air_date=entity.air_date,
            episode_tmdb_id=entity.episode_tmdb_id,
            season_tmdb_id=entity.season_tmdb_id,
            seen=entity.seen,
            src=entity.src,
            fp_name=entity.fp_name,
            subtitles=entity.subtitles,
        )

    def get_by_id(self, episode_id: int) -> Optional[Episode]:
        """Recupere un episode par son ID interne."""
        model = self._session.get(EpisodeModel, episode_id)
        if model:
            return episode_to_entity(model)
        return None

    def list_by_tmdb_id(self, tmdb_id: int) -> list[Episode]:
        """Liste les episodes d'une serie, tries par saison puis numero."""
        statement = (
            select(EpisodeModel)
            .where(EpisodeModel.tmdb_id == tmdb_id)
            .order_by(EpisodeModel.season_number, EpisodeModel.episode_number)
        )
        return [episode_to_entity(model) for model in self._session.exec(statement).all()]

    def replace_all(self, tmdb_id: int, episodes: list[Episode]) -> list[Episode]:
        """Supprime les episodes existants de la serie puis insere les nouveaux."""
        self.delete_by_tmdb_id(tmdb_id)
        models = []
        for episode in episodes:
            model = self._to_model(episode)
            model.tmdb_id = tmdb_id
            self._session.add(model)
            models.append(model)
        self._session.flush()
        return [episode_to_entity(model) for model in models]

    def add(self, episode: Episode) -> Episode:
        """Insere un episode."""
        model = self._to_model(episode)
        self._session.add(model)
        self._session.flush()
        self._session.refresh(model)
        return episode_to_entity(model)

    def update(self, episode: Episode) -> Episode:
        """Met a jour un episode existant."""
        model = self._session.get(EpisodeModel, episode.id) if episode.id else None
        if model is None:
            raise ValueError(f"Episode introuvable: {episode.id}")
        model.name = episode.name
        model.air_date = episode.air_date
        model.episode_tmdb_id = episode.episode_tmdb_id
        model.season_tmdb_id = episode.season_tmdb_id
        model.seen = episode.seen
        model.src = episode.src
        model.fp_name = episode.fp_name
        model.subtitles = episode.subtitles
        self._session.add(model)
        self._session.flush()
        return episode_to_entity(model)

    def delete_by_tmdb_id(self, tmdb_id: int) -> int:
        """Supprime les episodes d'une serie."""
        models = self._session.exec(
            select(EpisodeModel).where(EpisodeModel.tmdb_id == tmdb_id)
        ).all()
        for model in models:
            self._session.delete(model)
        self._session.flush()
        return len(models)

    def set_season_seen(self, tmdb_id: int, season_number: int, seen: bool) -> int:
        """Fixe l'etat vu de tous les episodes d'une saison."""
        models = self._session.exec(
            select(EpisodeModel)
            .where(EpisodeModel.tmdb_id == tmdb_id)
            .where(EpisodeModel.season_number == season_number)
        ).all()
        for model in models:
            model.seen = seen
            self._session.add(model)
        self._session.flush()
        return len(models)

    def find_by_src(self, src: str) -> Optional[Episode]:
        """Recupere un episode par son chemin de fichier local."""
        model = self._session.exec(
            select(EpisodeModel).where(EpisodeModel.src == src).order_by(EpisodeModel.id)
        ).first()
        if model:
            return episode_to_entity(model)
        return None

    def find_specific(
        self, season_number: int, episode_number: int, tmdb_id: Optional[int] = None
    ) -> Optional[Episode]:
        """Recupere un episode par couple saison/episode, optionnellement pour une serie."""
        statement = (
            select(EpisodeModel)
            .where(EpisodeModel.season_number == season_number)
            .where(EpisodeModel.episode_number == episode_number)
        )
        if tmdb_id is not None:
            statement = statement.where(EpisodeModel.tmdb_id == tmdb_id)
        model = self._session.exec(statement.order_by(EpisodeModel.id)).first()
        if model:
            return episode_to_entity(model)
        return None
