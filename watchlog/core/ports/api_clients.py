"""
Interfaces ports pour les clients API.

Interfaces abstraites (ports) définissant les contrats pour les services de
métadonnées externes : TMDB pour les détails, saisons, titres alternatifs et
genres, IMDb pour la note externe.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from watchlog.core.entities.media import Genre, MediaType


@dataclass
class ProviderDetails:
    """
    Document de détails d'un film ou d'une série depuis TMDB.

    Attributs :
        id : ID TMDB
        title : Titre localisé (name pour les séries, title pour les films),
                None si TMDB ne retourne rien d'exploitable
        original_title : Titre original (original_name / original_title)
        overview : Résumé
        vote_average : Note moyenne TMDB
        backdrop_path : Chemin du backdrop
        poster_path : Chemin du poster
        homepage : Site officiel
        imdb_id : ID IMDb (external_ids.imdb_id pour les séries, sinon imdb_id)
        release_date : Date de sortie / première diffusion
        genre_ids : IDs des genres
        video_keys : Clés des vidéos dans la langue demandée
    """

    id: int
    title: Optional[str] = None
    original_title: Optional[str] = None
    overview: Optional[str] = None
    vote_average: Optional[float] = None
    backdrop_path: Optional[str] = None
    poster_path: Optional[str] = None
    homepage: Optional[str] = None
    imdb_id: Optional[str] = None
    release_date: Optional[datetime] = None
    genre_ids: tuple[int, ...] = ()
    video_keys: tuple[str, ...] = ()


@dataclass
class ProviderEpisode:
    """Épisode tel que listé par TMDB dans une saison."""

    season_number: int
    episode_number: int
    name: str = ""
    air_date: Optional[date] = None
    episode_tmdb_id: Optional[int] = None
    season_tmdb_id: Optional[int] = None


@dataclass
class ProviderAlternativeTitle:
    """Titre alternatif tel que retourné par TMDB."""

    title: str
    country: Optional[str] = None


class IMetadataProvider(ABC):
    """
    Interface du fournisseur de métadonnées (équivalent TMDB).

    Toutes les méthodes font des appels réseau ; les erreurs réseau et HTTP
    (hors 404) sont propagées à l'appelant.
    """

    @abstractmethod
    async def details(
        self, tmdb_id: int, media_type: MediaType
    ) -> Optional[ProviderDetails]:
        """
        Récupère les détails complets d'un film ou d'une série.

        Retourne :
            Détails du média, ou None si TMDB ne connaît pas cet ID
        """
        ...

    @abstractmethod
    async def videos(
        self, tmdb_id: int, media_type: MediaType, language: str
    ) -> tuple[str, ...]:
        """Récupère les clés des vidéos (bandes-annonces) dans une langue donnée."""
        ...

    @abstractmethod
    async def tv_episodes(self, tmdb_id: int) -> list[ProviderEpisode]:
        """Récupère tous les épisodes de toutes les saisons d'une série."""
        ...

    @abstractmethod
    async def alternative_titles(
        self, tmdb_id: int, media_type: MediaType
    ) -> list[ProviderAlternativeTitle]:
        """Récupère les titres alternatifs d'un film ou d'une série."""
        ...

    @abstractmethod
    async def genre_lists(self) -> list[Genre]:
        """Récupère la liste fusionnée des genres films et séries."""
        ...


class IRatingProvider(ABC):
    """Interface du fournisseur de notes externes (équivalent IMDb)."""

    @abstractmethod
    async def parse_rating(self, imdb_id: str) -> Optional[float]:
        """
        Récupère la note d'un titre.

        Retourne :
            La note (0-10), ou None si le titre n'a pas de note
        """
        ...
