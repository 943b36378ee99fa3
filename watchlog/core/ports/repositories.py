"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite via SQLModel).

Les repositories n'appliquent jamais de commit : les écritures sont regroupées
par ITransactionManager.atomic().
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from watchlog.core.entities.media import (
    AlternativeTitle,
    Episode,
    Genre,
    Item,
    MediaType,
)
from watchlog.core.value_objects.listing import ItemListing, ItemPage, ItemSortField


class ITransactionManager(ABC):
    """Frontière transactionnelle des écritures relationnelles."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """
        Ouvre un bloc atomique.

        Les blocs peuvent être imbriqués : seul le bloc le plus externe valide.
        Toute exception annule l'ensemble des écritures du bloc externe.
        """
        ...


class IItemRepository(ABC):
    """
    Interface de stockage des items du catalogue.
    """

    @abstractmethod
    def get_by_id(self, item_id: int) -> Optional[Item]:
        """Récupère un item par son ID interne."""
        ...

    @abstractmethod
    def add(self, item: Item) -> Item:
        """Insère un nouvel item (un ID interne neuf est toujours attribué)."""
        ...

    @abstractmethod
    def update(self, item: Item) -> Item:
        """Met à jour un item existant. Le tmdb_id n'est jamais modifié."""
        ...

    @abstractmethod
    def delete(self, item_id: int) -> bool:
        """Supprime un item et ses liens de genres. Retourne True si supprimé."""
        ...

    @abstractmethod
    def touch_last_seen(self, tmdb_id: int, seen_at: datetime) -> int:
        """Met à jour last_seen_at des items d'un tmdb_id. Retourne le nombre de lignes."""
        ...

    @abstractmethod
    def list_ids_by_staleness(self) -> list[int]:
        """Liste les IDs des items, les moins récemment rafraîchis en premier."""
        ...

    @abstractmethod
    def paginate(
        self,
        sort_field: ItemSortField,
        sort_direction: str,
        media_type: Optional[MediaType],
        watchlist: Optional[bool],
        page: int,
        per_page: int,
    ) -> ItemPage:
        """
        Retourne une page d'items filtrés et triés.

        Args :
            sort_field : Champ de tri
            sort_direction : "asc" ou "desc" (ignoré pour HISTORY)
            media_type : Filtre par type, None pour tous
            watchlist : True = liste de souhaits seule, False = exclue, None = sans filtre
            page : Numéro de page (1-indexé)
            per_page : Taille de page
        """
        ...

    @abstractmethod
    def search_by_title(self, title: str) -> list[Item]:
        """Recherche souple sur titre, titre original et titres alternatifs."""
        ...

    @abstractmethod
    def find_by_title(
        self, title: str, media_type: Optional[MediaType] = None, strict: bool = False
    ) -> Optional[Item]:
        """Premier item dont le titre correspond (exact si strict)."""
        ...

    @abstractmethod
    def find_by_fp_name(
        self, fp_name: str, media_type: Optional[MediaType] = None
    ) -> Optional[Item]:
        """Premier item correspondant au nom issu du file-parser."""
        ...

    @abstractmethod
    def find_by_tmdb_id(self, tmdb_id: int) -> Optional[Item]:
        """Récupère un item par son ID TMDB."""
        ...

    @abstractmethod
    def find_by_src(self, src: str) -> Optional[Item]:
        """Récupère un item par son chemin de fichier local."""
        ...

    @abstractmethod
    def listings(self, items: Iterable[Item]) -> list[ItemListing]:
        """Joint à chaque item son dernier épisode vu et le nombre d'épisodes lisibles."""
        ...


class IEpisodeRepository(ABC):
    """
    Interface de stockage des épisodes, rattachés aux séries par tmdb_id.
    """

    @abstractmethod
    def get_by_id(self, episode_id: int) -> Optional[Episode]:
        """Récupère un épisode par son ID interne."""
        ...

    @abstractmethod
    def list_by_tmdb_id(self, tmdb_id: int) -> list[Episode]:
        """Liste les épisodes d'une série, triés par saison puis numéro."""
        ...

    @abstractmethod
    def replace_all(self, tmdb_id: int, episodes: list[Episode]) -> list[Episode]:
        """Remplace l'ensemble des épisodes d'une série."""
        ...

    @abstractmethod
    def add(self, episode: Episode) -> Episode:
        """Insère un épisode."""
        ...

    @abstractmethod
    def update(self, episode: Episode) -> Episode:
        """Met à jour un épisode existant."""
        ...

    @abstractmethod
    def delete_by_tmdb_id(self, tmdb_id: int) -> int:
        """Supprime les épisodes d'une série. Retourne le nombre supprimé."""
        ...

    @abstractmethod
    def set_season_seen(self, tmdb_id: int, season_number: int, seen: bool) -> int:
        """Fixe l'état vu de tous les épisodes d'une saison."""
        ...

    @abstractmethod
    def find_by_src(self, src: str) -> Optional[Episode]:
        """Récupère un épisode par son chemin de fichier local."""
        ...

    @abstractmethod
    def find_specific(
        self, season_number: int, episode_number: int, tmdb_id: Optional[int] = None
    ) -> Optional[Episode]:
        """Récupère un épisode par couple saison/épisode."""
        ...


class IAlternativeTitleRepository(ABC):
    """Interface de stockage des titres alternatifs."""

    @abstractmethod
    def list_by_tmdb_id(self, tmdb_id: int) -> list[AlternativeTitle]:
        """Liste les titres alternatifs d'un item."""
        ...

    @abstractmethod
    def replace_all(
        self, tmdb_id: int, titles: list[AlternativeTitle]
    ) -> list[AlternativeTitle]:
        """Remplace l'ensemble des titres alternatifs d'un item."""
        ...

    @abstractmethod
    def delete_by_tmdb_id(self, tmdb_id: int) -> int:
        """Supprime les titres alternatifs d'un item."""
        ...


class IGenreRepository(ABC):
    """Interface de stockage des genres et de leurs liens avec les items."""

    @abstractmethod
    def upsert_many(self, genres: Iterable[Genre]) -> int:
        """Insère ou renomme les genres. Retourne le nombre traité."""
        ...

    @abstractmethod
    def list_all(self) -> list[Genre]:
        """Liste tous les genres connus, triés par nom."""
        ...

    @abstractmethod
    def filter_known(self, genre_ids: Iterable[int]) -> set[int]:
        """Retourne le sous-ensemble des IDs de genres connus."""
        ...

    @abstractmethod
    def set_item_genres(self, item_id: int, genre_ids: Iterable[int]) -> None:
        """Remplace les genres rattachés à un item."""
        ...

    @abstractmethod
    def list_for_item(self, item_id: int) -> list[Genre]:
        """Liste les genres d'un item."""
        ...


@dataclass(frozen=True)
class AppSettings:
    """
    Réglages utilisateur globaux (enregistrement unique).

    Attributs :
        show_watchlist_everywhere : Mélanger la liste de souhaits aux autres vues
        episode_spoiler_protection : Masquer les titres des épisodes non vus
        show_date : Afficher les dates de sortie
        show_genre : Afficher les genres
    """

    show_watchlist_everywhere: bool = False
    episode_spoiler_protection: bool = True
    show_date: bool = True
    show_genre: bool = False


class ISettingRepository(ABC):
    """Lecture seule des réglages globaux."""

    @abstractmethod
    def get(self) -> AppSettings:
        """Retourne les réglages courants (valeurs par défaut si absents)."""
        ...
