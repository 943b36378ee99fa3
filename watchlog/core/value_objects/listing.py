"""
Objets valeur pour les vues du catalogue (listes, pages, recherches).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from watchlog.core.entities.media import Episode, Item


class ItemSortField(Enum):
    """Champ de tri de la liste du catalogue.

    Valeurs:
        RATING: Note personnelle
        TITLE: Titre
        RELEASED: Date de sortie
        TMDB_RATING: Note TMDB
        IMDB_RATING: Note IMDb
        HISTORY: Non historiques par date de visionnage, puis historiques par titre
        LAST_SEEN: Date de dernier visionnage
    """

    RATING = "rating"
    TITLE = "title"
    RELEASED = "released"
    TMDB_RATING = "tmdb_rating"
    IMDB_RATING = "imdb_rating"
    HISTORY = "is_historic"
    LAST_SEEN = "last_seen_at"

    @classmethod
    def from_order_by(cls, order_by: Optional[str]) -> "ItemSortField":
        """Resout le libelle de tri de l'interface (defaut : date de visionnage)."""
        return _ORDER_BY_LABELS.get((order_by or "").strip().lower(), cls.LAST_SEEN)


_ORDER_BY_LABELS = {
    "own rating": ItemSortField.RATING,
    "title": ItemSortField.TITLE,
    "release": ItemSortField.RELEASED,
    "tmdb rating": ItemSortField.TMDB_RATING,
    "imdb rating": ItemSortField.IMDB_RATING,
    "last seen with history": ItemSortField.HISTORY,
    "last seen": ItemSortField.LAST_SEEN,
}


@dataclass
class ItemListing:
    """
    Item accompagne de son dernier episode vu et du nombre d'episodes lisibles.

    Attributs :
        item : L'item du catalogue
        latest_episode : Dernier episode marque comme vu (series uniquement)
        episodes_with_src_count : Nombre d'episodes ayant un fichier local
    """

    item: Item
    latest_episode: Optional[Episode] = None
    episodes_with_src_count: int = 0


@dataclass
class ItemPage:
    """Page de resultats (pagination simple, sans total)."""

    items: list[ItemListing] = field(default_factory=list)
    page: int = 1
    per_page: int = 30
    has_more: bool = False


@dataclass
class EpisodeOverview:
    """
    Episodes d'une serie groupes par saison.

    Attributs :
        episodes : Episodes par numero de saison, tries par numero d'episode
        spoiler : Protection anti-spoiler des titres d'episodes (indication d'affichage)
    """

    episodes: dict[int, list[Episode]] = field(default_factory=dict)
    spoiler: bool = False
