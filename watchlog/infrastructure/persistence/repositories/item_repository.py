"""
Implementation SQLModel du repository Item.

Implemente l'interface IItemRepository pour la persistance des films et
series du catalogue, ainsi que les requetes de liste (tri, filtres,
pagination simple) et de recherche.
"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import case, func, or_
from sqlmodel import Session, select

from watchlog.core.entities.media import Episode, Item, MediaType
from watchlog.core.exceptions import ItemNotFoundError
from watchlog.core.ports.repositories import IItemRepository
from watchlog.core.value_objects.listing import ItemListing, ItemPage, ItemSortField
from watchlog.infrastructure.persistence.models import (
    AlternativeTitleModel,
    EpisodeModel,
    ItemGenreLink,
    ItemModel,
)
from watchlog.infrastructure.persistence.repositories.episode_repository import (
    episode_to_entity,
)
from watchlog.utils.helpers import search_variants

# Champs recopies de l'entite vers le modele (id et tmdb_id exclus)
_MUTABLE_FIELDS = (
    "imdb_id",
    "title",
    "original_title",
    "slug",
    "overview",
    "homepage",
    "youtube_key",
    "poster",
    "backdrop",
    "released",
    "tmdb_rating",
    "imdb_rating",
    "rating",
    "watchlist",
    "is_historic",
    "last_seen_at",
    "created_at",
    "refreshed_at",
    "src",
    "fp_name",
    "subtitles",
)


class SQLModelItemRepository(IItemRepository):
    """
    Repository SQLModel pour les items du catalogue.

    Les ecritures font flush() sans commit : la validation appartient au
    gestionnaire de transaction.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: ItemModel) -> Item:
        """Convertit un modele DB en entite domaine."""
        return Item(
            id=model.id,
            tmdb_id=model.tmdb_id,
            media_type=MediaType(model.media_type),
            **{name: getattr(model, name) for name in _MUTABLE_FIELDS},
        )

    def _apply(self, model: ItemModel, entity: Item) -> None:
        """Recopie les champs modifiables de l'entite sur le modele."""
        for name in _MUTABLE_FIELDS:
            setattr(model, name, getattr(entity, name))
        model.media_type = entity.media_type.value

    def get_by_id(self, item_id: int) -> Optional[Item]:
        """Recupere un item par son ID interne."""
        model = self._session.get(ItemModel, item_id)
        if model:
            return self._to_entity(model)
        return None

    def add(self, item: Item) -> Item:
        """Insere un nouvel item, l'ID eventuel de l'entite est ignore."""
        model = ItemModel(tmdb_id=item.tmdb_id)
        self._apply(model, item)
        self._session.add(model)
        self._session.flush()
        self._session.refresh(model)
        return self._to_entity(model)

    def update(self, item: Item) -> Item:
        """Met a jour un item existant (le tmdb_id stocke est conserve)."""
        model = self._session.get(ItemModel, item.id) if item.id else None
        if model is None:
            raise ItemNotFoundError(item.id)
        self._apply(model, item)
        self._session.add(model)
        self._session.flush()
        self._session.refresh(model)
        return self._to_entity(model)

    def delete(self, item_id: int) -> bool:
        """Supprime un item et ses liens de genres."""
        model = self._session.get(ItemModel, item_id)
        if model is None:
            return False
        links = self._session.exec(
            select(ItemGenreLink).where(ItemGenreLink.item_id == item_id)
        ).all()
        for link in links:
            self._session.delete(link)
        self._session.delete(model)
        self._session.flush()
        return True

    def touch_last_seen(self, tmdb_id: int, seen_at: datetime) -> int:
        """Met a jour last_seen_at de tous les items d'un tmdb_id."""
        models = self._session.exec(
            select(ItemModel).where(ItemModel.tmdb_id == tmdb_id)
        ).all()
        for model in models:
            model.last_seen_at = seen_at
            self._session.add(model)
        self._session.flush()
        return len(models)

    def list_ids_by_staleness(self) -> list[int]:
        """IDs des items, jamais rafraichis d'abord puis du plus ancien au plus recent."""
        statement = select(ItemModel.id).order_by(
            case((ItemModel.refreshed_at.is_(None), 0), else_=1),
            ItemModel.refreshed_at.asc(),
            ItemModel.id,
        )
        return list(self._session.exec(statement).all())

    def paginate(
        self,
        sort_field: ItemSortField,
        sort_direction: str,
        media_type: Optional[MediaType],
        watchlist: Optional[bool],
        page: int,
        per_page: int,
    ) -> ItemPage:
        """Page d'items triee, une ligne supplementaire indique s'il reste des items."""
        page = max(page, 1)
        statement = select(ItemModel)
        if media_type is not None:
            statement = statement.where(ItemModel.media_type == media_type.value)
        if watchlist is not None:
            statement = statement.where(ItemModel.watchlist == watchlist)

        statement = (
            statement.order_by(*self._ordering(sort_field, sort_direction))
            .offset((page - 1) * per_page)
            .limit(per_page + 1)
        )
        models = self._session.exec(statement).all()
        items = [self._to_entity(model) for model in models[:per_page]]
        return ItemPage(
            items=self.listings(items),
            page=page,
            per_page=per_page,
            has_more=len(models) > per_page,
        )

    @staticmethod
    def _ordering(sort_field: ItemSortField, sort_direction: str) -> list:
        """Clauses ORDER BY pour un champ de tri, l'ID departage les egalites."""
        if sort_field == ItemSortField.HISTORY:
            # Non historiques par visionnage recent, puis historiques par titre
            return [
                ItemModel.is_historic.asc(),
                case(
                    (ItemModel.is_historic.is_(False), ItemModel.last_seen_at),
                    else_=None,
                ).desc(),
                case(
                    (ItemModel.is_historic.is_(True), ItemModel.title),
                    else_=None,
                ).asc(),
                ItemModel.id,
            ]

        column = getattr(ItemModel, sort_field.value)
        ordered = column.asc() if sort_direction == "asc" else column.desc()
        return [ordered, ItemModel.id]

    def search_by_title(self, title: str) -> list[Item]:
        """Recherche sur titre, titre original et titres alternatifs."""
        variants = search_variants(title)
        if not variants:
            return []

        alternative_match = select(AlternativeTitleModel.tmdb_id).where(
            or_(*[AlternativeTitleModel.title.contains(v) for v in variants])
        )
        statement = (
            select(ItemModel)
            .where(
                or_(
                    *[ItemModel.title.contains(v) for v in variants],
                    *[ItemModel.original_title.contains(v) for v in variants],
                    ItemModel.tmdb_id.in_(alternative_match),
                )
            )
            .order_by(ItemModel.title, ItemModel.id)
        )
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def find_by_title(
        self, title: str, media_type: Optional[MediaType] = None, strict: bool = False
    ) -> Optional[Item]:
        """Premier item dont le titre est egal (strict) ou contient la valeur."""
        condition = ItemModel.title == title if strict else ItemModel.title.contains(title)
        return self._first(condition, media_type)

    def find_by_fp_name(
        self, fp_name: str, media_type: Optional[MediaType] = None
    ) -> Optional[Item]:
        """Premier item correspondant au nom issu du file-parser."""
        return self._first(ItemModel.fp_name == fp_name, media_type)

    def find_by_tmdb_id(self, tmdb_id: int) -> Optional[Item]:
        """Recupere un item par son ID TMDB."""
        return self._first(ItemModel.tmdb_id == tmdb_id)

    def find_by_src(self, src: str) -> Optional[Item]:
        """Recupere un item par son chemin de fichier local."""
        return self._first(ItemModel.src == src)

    def _first(self, condition, media_type: Optional[MediaType] = None) -> Optional[Item]:
        statement = select(ItemModel).where(condition)
        if media_type is not None:
            statement = statement.where(ItemModel.media_type == media_type.value)
        model = self._session.exec(statement.order_by(ItemModel.id)).first()
        if model:
            return self._to_entity(model)
        return None

    def listings(self, items: Iterable[Item]) -> list[ItemListing]:
        """Joint a chaque item son dernier episode vu et son nombre d'episodes lisibles."""
        items = list(items)
        show_ids = {
            item.tmdb_id
            for item in items
            if item.media_type == MediaType.TV and item.tmdb_id is not None
        }
        latest = self._latest_seen_episodes(show_ids)
        counts = self._episodes_with_src_counts(show_ids)
        return [
            ItemListing(
                item=item,
                latest_episode=latest.get(item.tmdb_id),
                episodes_with_src_count=counts.get(item.tmdb_id, 0),
            )
            for item in items
        ]

    def _latest_seen_episodes(self, show_ids: set[int]) -> dict[int, Episode]:
        """Dernier episode vu (saison puis numero les plus eleves) par serie."""
        if not show_ids:
            return {}
        statement = (
            select(EpisodeModel)
            .where(EpisodeModel.tmdb_id.in_(show_ids))
            .where(EpisodeModel.seen.is_(True))
            .order_by(
                EpisodeModel.tmdb_id,
                EpisodeModel.season_number.desc(),
                EpisodeModel.episode_number.desc(),
            )
        )
        latest: dict[int, Episode] = {}
        for model in self._session.exec(statement).all():
            latest.setdefault(model.tmdb_id, episode_to_entity(model))
        return latest

    def _episodes_with_src_counts(self, show_ids: set[int]) -> dict[int, int]:
        """Nombre d'episodes ayant un fichier local, par serie."""
        if not show_ids:
            return {}
        statement = (
            select(EpisodeModel.tmdb_id, func.count(EpisodeModel.id))
            .where(EpisodeModel.tmdb_id.in_(show_ids))
            .where(EpisodeModel.src.is_not(None))
            .group_by(EpisodeModel.tmdb_id)
        )
        return {tmdb_id: count for tmdb_id, count in self._session.exec(statement).all()}
