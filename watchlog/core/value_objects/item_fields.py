"""
Objets valeur pour les champs enrichissables d'un item.

Les champs d'un item peuvent venir de l'appelant (sous-page deja enrichie,
export) ou de TMDB. La fusion est explicite et typee : chaque champ garde la
valeur existante si elle est presente, sinon prend la valeur recuperee.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Optional

from watchlog.core.entities.media import Item, MediaType


@dataclass(frozen=True)
class ItemFields:
    """
    Champs optionnels d'un item pouvant etre completes par l'enrichissement.

    Attributs :
        title : Titre localise
        original_title : Titre en langue originale
        imdb_id : ID IMDb
        youtube_key : Cle YouTube de la bande-annonce
        overview : Resume
        tmdb_rating : Note moyenne TMDB
        imdb_rating : Note IMDb
        backdrop : Chemin du backdrop
        poster : Chemin du poster
        slug : Titre normalise pour les URLs
        homepage : Site officiel
        released : Date de sortie
    """

    title: Optional[str] = None
    original_title: Optional[str] = None
    imdb_id: Optional[str] = None
    youtube_key: Optional[str] = None
    overview: Optional[str] = None
    tmdb_rating: Optional[float] = None
    imdb_rating: Optional[float] = None
    backdrop: Optional[str] = None
    poster: Optional[str] = None
    slug: Optional[str] = None
    homepage: Optional[str] = None
    released: Optional[datetime] = None

    def apply_to(self, item: Item) -> Item:
        """Retourne une copie de l'item avec ces champs (titre vide si absent)."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["title"] = self.title or ""
        return replace(item, **values)


def merge_fields(existing: ItemFields, fetched: ItemFields) -> ItemFields:
    """
    Fusionne deux jeux de champs : la valeur existante gagne toujours.

    Args :
        existing : Champs fournis par l'appelant
        fetched : Champs recuperes depuis le fournisseur

    Retourne :
        Nouveaux champs ou chaque valeur absente de existing vient de fetched
    """
    merged = {}
    for f in fields(ItemFields):
        value = getattr(existing, f.name)
        merged[f.name] = value if value is not None else getattr(fetched, f.name)
    return ItemFields(**merged)


@dataclass(frozen=True)
class ItemDraft:
    """
    Donnees d'entree pour la creation d'un item.

    Attributs :
        tmdb_id : ID TMDB de l'item
        media_type : Film ou serie
        fields : Champs deja connus de l'appelant (prioritaires sur TMDB)
        genre_ids : IDs de genres TMDB a rattacher
        watchlist : Ajout en liste de souhaits
        rating : Note personnelle initiale (0 = sans note)
    """

    tmdb_id: int
    media_type: MediaType
    fields: ItemFields = field(default_factory=ItemFields)
    genre_ids: tuple[int, ...] = ()
    watchlist: bool = False
    rating: int = 0
