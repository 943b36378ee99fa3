"""
Modeles SQLModel pour la base de donnees Watchlog.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- items: Films et series avec metadonnees TMDB/IMDb
- episodes: Episodes des series, rattaches par tmdb_id
- alternative_titles: Titres alternatifs, rattaches par tmdb_id
- genres: Genres TMDB (ID du fournisseur comme cle primaire)
- item_genre: Liens items <-> genres
- settings: Reglages utilisateur (enregistrement unique)
"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, Index, SQLModel


class UTCTimestamp(TypeDecorator):
    """
    Horodatage UTC : stocke sans fuseau dans SQLite, relu avec tzinfo=UTC.

    Une valeur naive est consideree comme deja exprimee en UTC.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class ItemModel(SQLModel, table=True):
    """
    Modele representant un film ou une serie du catalogue.

    tmdb_id est unique mais nullable : les items crees depuis le file-parser
    n'ont pas encore d'ID TMDB.
    """

    __tablename__ = "items"
    __table_args__ = (
        Index("ix_items_historic_last_seen", "is_historic", "last_seen_at"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    tmdb_id: Optional[int] = Field(default=None, unique=True, index=True)
    imdb_id: Optional[str] = Field(default=None, index=True)
    media_type: str = Field(default="movie", index=True)  # "movie" | "tv"
    title: str = Field(default="", index=True)
    original_title: Optional[str] = None
    slug: Optional[str] = None
    overview: Optional[str] = None
    homepage: Optional[str] = None
    youtube_key: Optional[str] = None
    poster: Optional[str] = None
    backdrop: Optional[str] = None
    released: Optional[datetime] = Field(default=None, sa_type=UTCTimestamp)
    tmdb_rating: Optional[float] = None
    imdb_rating: Optional[float] = None
    rating: int = Field(default=0)  # 0 = sans note personnelle
    watchlist: bool = Field(default=False, index=True)
    is_historic: bool = Field(default=False)
    last_seen_at: Optional[datetime] = Field(default=None, sa_type=UTCTimestamp)
    created_at: Optional[datetime] = Field(default=None, sa_type=UTCTimestamp)
    refreshed_at: Optional[datetime] = Field(default=None, index=True, sa_type=UTCTimestamp)
    src: Optional[str] = Field(default=None, index=True)
    fp_name: Optional[str] = Field(default=None, index=True)
    subtitles: Optional[str] = None


class EpisodeModel(SQLModel, table=True):
    """
    Modele representant un episode de serie.

    La serie est referencee par son ID TMDB et non par son ID interne.
    """

    __tablename__ = "episodes"
    __table_args__ = (
        Index("ix_episodes_show_season_episode", "tmdb_id", "season_number", "episode_number"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    tmdb_id: int = Field(index=True)
    season_number: int
    episode_number: int
    name: str = ""
    air_date: Optional[date] = None
    episode_tmdb_id: Optional[int] = None
    season_tmdb_id: Optional[int] = None
    seen: bool = Field(default=False)
    src: Optional[str] = Field(default=None, index=True)
    fp_name: Optional[str] = None
    subtitles: Optional[str] = None


class AlternativeTitleModel(SQLModel, table=True):
    """Titre alternatif d'un item (pays ISO 3166-1)."""

    __tablename__ = "alternative_titles"

    id: Optional[int] = Field(default=None, primary_key=True)
    tmdb_id: int = Field(index=True)
    title: str = Field(index=True)
    country: Optional[str] = None


class GenreModel(SQLModel, table=True):
    """Genre TMDB, l'ID du fournisseur sert de cle primaire."""

    __tablename__ = "genres"

    id: int = Field(primary_key=True)
    name: str


class ItemGenreLink(SQLModel, table=True):
    """Table de liaison items <-> genres."""

    __tablename__ = "item_genre"

    item_id: int = Field(foreign_key="items.id", primary_key=True)
    genre_id: int = Field(foreign_key="genres.id", primary_key=True)


class SettingModel(SQLModel, table=True):
    """Reglages utilisateur, une seule ligne attendue."""

    __tablename__ = "settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    show_watchlist_everywhere: bool = False
    episode_spoiler_protection: bool = True
    show_date: bool = True
    show_genre: bool = False
