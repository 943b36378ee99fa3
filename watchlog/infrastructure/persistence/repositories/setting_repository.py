"""
Lecture des reglages utilisateur.
"""

from sqlmodel import Session, select

from watchlog.core.ports.repositories import AppSettings, ISettingRepository
from watchlog.infrastructure.persistence.models import SettingModel


class SQLModelSettingRepository(ISettingRepository):
    """Lit l'enregistrement unique de la table settings."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self) -> AppSettings:
        """Reglages courants, valeurs par defaut si la table est vide."""
        model = self._session.exec(select(SettingModel).order_by(SettingModel.id)).first()
        if model is None:
            return AppSettings()
        return AppSettings(
            show_watchlist_everywhere=model.show_watchlist_everywhere,
            episode_spoiler_protection=model.episode_spoiler_protection,
            show_date=model.show_date,
            show_genre=model.show_genre,
        )
