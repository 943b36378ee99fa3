"""
Configuration de la base de donnees SQLite pour Watchlog.

Ce module fournit :
- Engine SQLite partageable entre threads
- Sessions partagees par les repositories
- Fonction d'initialisation des tables

La base de donnees est configuree via WATCHLOG_DATABASE_URL (defaut: sqlite:///watchlog.db).
Le schema est cree a l'initialisation, son evolution n'est pas geree ici.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Retourne l'engine SQLite, en le creant si necessaire.

    Args:
        database_url: URL de la base, par defaut celle de la configuration
    """
    global _engine
    if _engine is None:
        if database_url is None:
            from watchlog.config import Settings

            database_url = Settings().database_url

        # Creer le repertoire parent si l'URL est un fichier SQLite
        if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
            db_path = Path(database_url.replace("sqlite:///", ""))
            db_path.parent.mkdir(exist_ok=True, parents=True)

        _engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    return _engine


def create_session() -> Session:
    """
    Cree une session partagee par les repositories d'une meme unite de travail.

    L'appelant est responsable de sa fermeture.
    """
    return Session(get_engine())


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Cree toutes les tables si elles n'existent pas deja.

    Args:
        engine: Engine cible, par defaut l'engine global
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from watchlog.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine or get_engine())
