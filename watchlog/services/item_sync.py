"""
Service de synchronisation des items du catalogue.

Orchestre la creation, le rafraichissement et la suppression des films et
series : enrichissement TMDB/IMDb, persistance de l'item et de ses
collections (episodes, genres, titres alternatifs), puis gestion des images.

Toutes les requetes reseau d'une operation sont faites avant d'ouvrir sa
transaction ; les images sont traitees apres le commit et leurs echecs
n'annulent jamais les ecritures en base.
"""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Optional

from loguru import logger

from watchlog.core.entities.media import Item, MediaType
from watchlog.core.exceptions import IncompleteItemError, ItemNotFoundError
from watchlog.core.ports.api_clients import (
    IMetadataProvider,
    IRatingProvider,
    ProviderDetails,
)
from watchlog.core.ports.assets import IAssetStore
from watchlog.core.ports.repositories import (
    IItemRepository,
    ISettingRepository,
    ITransactionManager,
)
from watchlog.core.ports.tasks import ITaskSink
from watchlog.core.value_objects import (
    ItemDraft,
    ItemFields,
    ItemListing,
    ItemPage,
    ItemSortField,
    OperationResult,
    OperationStatus,
    merge_fields,
)
from watchlog.services.alternative_title_syncer import AlternativeTitleSyncService
from watchlog.services.episode_sync import EpisodeSyncService
from watchlog.services.genre_syncer import GenreSyncService
from watchlog.utils.constants import FALLBACK_VIDEO_LANGUAGE, NEUTRAL_RATING, SORT_DIRECTIONS
from watchlog.utils.helpers import parse_flag, parse_timestamp, slugify, utcnow


def _optional_float(value: Any) -> Optional[float]:
    """Les exports stockent parfois les notes en chaines ("7.5")."""
    if value is None or value == "":
        return None
    return float(value)


class ItemSyncService:
    """
    Service principal du catalogue.

    Example:
        service = container.item_sync_service()
        item = await service.create(ItemDraft(tmdb_id=603, media_type=MediaType.MOVIE))
        result = await service.refresh(item.id)
    """

    def __init__(
        self,
        item_repo: IItemRepository,
        tmdb_client: IMetadataProvider,
        rating_client: IRatingProvider,
        asset_store: IAssetStore,
        episode_service: EpisodeSyncService,
        genre_service: GenreSyncService,
        alternative_title_service: AlternativeTitleSyncService,
        setting_repo: ISettingRepository,
        transaction: ITransactionManager,
        task_sink: ITaskSink,
        page_size: int = 30,
    ) -> None:
        """
        Initialise le service avec ses collaborateurs.

        Args:
            item_repo: Repository des items
            tmdb_client: Fournisseur de metadonnees
            rating_client: Fournisseur de notes IMDb
            asset_store: Stockage des images
            episode_service: Synchronisation des episodes
            genre_service: Synchronisation des genres
            alternative_title_service: Synchronisation des titres alternatifs
            setting_repo: Lecture des reglages utilisateur
            transaction: Gestionnaire de transaction
            task_sink: Recepteur des rafraichissements de refresh_all()
            page_size: Nombre d'items par page
        """
        self._item_repo = item_repo
        self._tmdb_client = tmdb_client
        self._rating_client = rating_client
        self._asset_store = asset_store
        self._episode_service = episode_service
        self._genre_service = genre_service
        self._alternative_title_service = alternative_title_service
        self._setting_repo = setting_repo
        self._transaction = transaction
        self._task_sink = task_sink
        self._page_size = page_size

    # ------------------------------------------------------------------
    # Enrichissement
    # ------------------------------------------------------------------

    async def make_data_complete(
        self, tmdb_id: int, media_type: MediaType, fields: ItemFields
    ) -> ItemFields:
        """
        Complete les champs absents depuis TMDB puis calcule la note IMDb.

        Les details TMDB ne sont demandes que si l'ID IMDb est absent :
        un item venant d'une sous-page est deja enrichi.
        """
        completed, _ = await self._complete(tmdb_id, media_type, fields)
        return completed

    async def _complete(
        self, tmdb_id: int, media_type: MediaType, fields: ItemFields
    ) -> tuple[ItemFields, Optional[ProviderDetails]]:
        details = None
        if fields.imdb_id is None:
            details = await self._tmdb_client.details(tmdb_id, media_type)
            if details is not None:
                fetched = await self._fields_from_details(details, media_type)
                fields = merge_fields(fields, fetched)

        if fields.slug is None and fields.title:
            fields = replace(fields, slug=slugify(fields.title))
        return replace(fields, imdb_rating=await self.parse_imdb_rating(fields)), details

    async def _fields_from_details(
        self, details: ProviderDetails, media_type: MediaType
    ) -> ItemFields:
        return ItemFields(
            title=details.title,
            original_title=details.original_title,
            imdb_id=details.imdb_id,
            youtube_key=await self.parse_youtube_key(details, media_type),
            overview=details.overview,
            tmdb_rating=details.vote_average,
            backdrop=details.backdrop_path,
            poster=details.poster_path,
            homepage=details.homepage,
            released=details.release_date,
        )

    async def parse_youtube_key(
        self, details: ProviderDetails, media_type: MediaType
    ) -> Optional[str]:
        """Cle de la premiere bande-annonce, en anglais si la langue configuree n'en a pas."""
        if details.video_keys:
            return details.video_keys[0]
        keys = await self._tmdb_client.videos(details.id, media_type, FALLBACK_VIDEO_LANGUAGE)
        return keys[0] if keys else None

    async def parse_imdb_rating(self, fields: ItemFields) -> Optional[float]:
        """Note IMDb : valeur fournie, sinon recuperee si l'ID IMDb est connu."""
        if fields.imdb_rating is not None:
            return fields.imdb_rating
        if fields.imdb_id:
            return await self._rating_client.parse_rating(fields.imdb_id)
        return None

    # ------------------------------------------------------------------
    # Images (apres commit, jamais bloquant)
    # ------------------------------------------------------------------

    async def _download_images(self, item: Item) -> None:
        try:
            await self._asset_store.download_images(item.poster, item.backdrop)
        except Exception as e:
            logger.warning(f"Images non telechargees pour '{item.title}': {e}")

    def _remove_images(self, item: Item) -> None:
        try:
            self._asset_store.remove_images(item.poster, item.backdrop)
        except Exception as e:
            logger.warning(f"Images non supprimees pour '{item.title}': {e}")

    # ------------------------------------------------------------------
    # Cycle de vie
    # ------------------------------------------------------------------

    async def create(self, draft: ItemDraft) -> Item:
        """
        Cree un item enrichi avec ses episodes, genres et titres alternatifs.

        Raises:
            IncompleteItemError: Si aucun titre n'est disponible apres enrichissement
        """
        fields, details = await self._complete(draft.tmdb_id, draft.media_type, draft.fields)
        if not fields.title:
            raise IncompleteItemError(draft.tmdb_id)

        now = utcnow()
        item = fields.apply_to(
            Item(
                tmdb_id=draft.tmdb_id,
                media_type=draft.media_type,
                rating=draft.rating,
                watchlist=draft.watchlist,
                last_seen_at=now,
                created_at=now,
                refreshed_at=now,
            )
        )
        genre_ids = draft.genre_ids or (details.genre_ids if details else ())

        episodes = await self._episode_service.fetch(item)
        titles = await self._alternative_title_service.fetch(item)

        with self._transaction.atomic():
            stored = self._item_repo.add(item)
            self._episode_service.replace(stored, episodes)
            self._genre_service.sync(stored, genre_ids)
            self._alternative_title_service.replace(stored.tmdb_id, titles)

        logger.info(f"Item cree: '{stored.title}' (tmdb_id={stored.tmdb_id})")
        await self._download_images(stored)
        return self._item_repo.get_by_id(stored.id)

    async def refresh(self, item_id: int) -> OperationResult:
        """
        Rafraichit un item depuis TMDB et IMDb.

        Si TMDB ne retourne aucun titre, l'item n'est pas modifie et le
        resultat est NOT_REFRESHED.

        Raises:
            ItemNotFoundError: Si l'item n'existe pas
        """
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)

        details = None
        if item.tmdb_id is not None:
            details = await self._tmdb_client.details(item.tmdb_id, item.media_type)
        if details is None or not details.title:
            logger.info(f"Item {item_id} non rafraichi: aucun titre TMDB")
            return OperationResult(OperationStatus.NOT_REFRESHED, item)

        logger.info(f"Rafraichissement: '{details.title}'")
        imdb_id = details.imdb_id or item.imdb_id
        fields = ItemFields(
            title=details.title,
            original_title=details.original_title,
            imdb_id=imdb_id,
            youtube_key=await self.parse_youtube_key(details, item.media_type),
            overview=details.overview,
            tmdb_rating=details.vote_average,
            imdb_rating=await self.parse_imdb_rating(ItemFields(imdb_id=imdb_id)),
            backdrop=details.backdrop_path,
            poster=details.poster_path,
            slug=slugify(details.title),
            homepage=details.homepage,
            released=details.release_date,
        )
        episodes = await self._episode_service.fetch(item)
        titles = await self._alternative_title_service.fetch(item)

        with self._transaction.atomic():
            # Relu apres les appels reseau : note, watchlist et historique
            # modifies entre-temps ne sont pas ecrases
            current = self._item_repo.get_by_id(item_id)
            if current is None:
                raise ItemNotFoundError(item_id)
            updated = fields.apply_to(current)
            updated.refreshed_at = utcnow()
            stored = self._item_repo.update(updated)
            self._episode_service.replace(stored, episodes)
            self._alternative_title_service.replace(stored.tmdb_id, titles)
            self._genre_service.sync(stored, details.genre_ids)

        self._remove_images(current)
        await self._download_images(stored)
        return OperationResult.done(stored)

    async def refresh_all(self) -> int:
        """
        Met a jour la liste des genres puis soumet un rafraichissement par item.

        Les items jamais rafraichis passent en premier, puis les plus anciens.

        Returns:
            Nombre de rafraichissements soumis
        """
        await self._genre_service.update_genre_lists()
        item_ids = self._item_repo.list_ids_by_staleness()
        for item_id in item_ids:
            self._task_sink.submit(item_id)
        logger.info(f"Rafraichissement de {len(item_ids)} items soumis")
        return len(item_ids)

    def remove(self, item_id: int) -> OperationResult:
        """Supprime un item, ses episodes, ses titres alternatifs et ses images."""
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            return OperationResult.not_found()

        with self._transaction.atomic():
            self._item_repo.delete(item.id)
            if item.tmdb_id is not None:
                self._episode_service.remove(item.tmdb_id)
                self._alternative_title_service.remove(item.tmdb_id)

        self._remove_images(item)
        logger.info(f"Item supprime: '{item.title}'")
        return OperationResult.done(item)

    def change_rating(self, item_id: int, rating: int) -> OperationResult:
        """
        Change la note personnelle et retire l'item de la liste de souhaits.

        Une premiere note (depuis la note neutre) compte comme un visionnage.
        """
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            return OperationResult.not_found()

        with self._transaction.atomic():
            if item.rating == NEUTRAL_RATING:
                now = utcnow()
                if item.tmdb_id is not None:
                    self._item_repo.touch_last_seen(item.tmdb_id, now)
                item.last_seen_at = now
            item.rating = rating
            item.watchlist = False
            stored = self._item_repo.update(item)
        return OperationResult.done(stored)

    def toggle_historic(self, item_id: int) -> OperationResult:
        """Inverse le statut historique, un item qui en sort redevient le plus recent."""
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            return OperationResult.not_found()

        if item.is_historic:
            item.is_historic = False
            item.last_seen_at = utcnow()
        else:
            item.is_historic = True

        with self._transaction.atomic():
            stored = self._item_repo.update(item)
        return OperationResult.done(stored)

    # ------------------------------------------------------------------
    # Lecture
    # ------------------------------------------------------------------

    def get_with_pagination(
        self,
        type: Optional[str],
        order_by: Optional[str],
        sort_direction: Optional[str],
        page: int = 1,
    ) -> ItemPage:
        """
        Page du catalogue filtree et triee.

        Args:
            type: "watchlist", "tv", "movie" ou autre valeur (tous les items)
            order_by: Libelle de tri ("title", "last seen with history", ...)
            sort_direction: "asc" ou "desc" (ignore pour le tri historique)
            page: Numero de page (1-indexe)
        """
        direction = (sort_direction or "").lower()
        if direction not in SORT_DIRECTIONS:
            direction = "desc"

        if type == "watchlist":
            watchlist: Optional[bool] = True
        elif not self._setting_repo.get().show_watchlist_everywhere:
            watchlist = False
        else:
            watchlist = None

        media_type = None
        if type in (MediaType.TV.value, MediaType.MOVIE.value):
            media_type = MediaType(type)

        return self._item_repo.paginate(
            ItemSortField.from_order_by(order_by),
            direction,
            media_type,
            watchlist,
            page,
            self._page_size,
        )

    def search(self, title: str) -> list[ItemListing]:
        """Recherche par titre, titre original ou titre alternatif."""
        return self._item_repo.listings(self._item_repo.search_by_title(title))

    def find_by(
        self, kind: str, value: Any, media_type: "Optional[str | MediaType]" = None
    ) -> Optional[ItemListing]:
        """
        Recherche un item unique.

        Le filtre par type de media ne s'applique pas aux recherches par
        tmdb_id et src : un film et une serie peuvent porter le meme titre,
        pas le meme ID.

        Args:
            kind: "title", "title_strict", "fp_name", "tmdb_id" ou "src"
            value: Valeur recherchee
            media_type: Filtre optionnel ("movie", "movies", "tv"...)
        """
        media = MediaType.parse(media_type) if media_type else None

        if kind == "title":
            item = self._item_repo.find_by_title(value, media)
        elif kind == "title_strict":
            item = self._item_repo.find_by_title(value, media, strict=True)
        elif kind == "fp_name":
            item = self._item_repo.find_by_fp_name(value, media)
        elif kind == "tmdb_id":
            item = self._item_repo.find_by_tmdb_id(int(value))
        elif kind == "src":
            item = self._item_repo.find_by_src(value)
        else:
            return None

        if item is None:
            return None
        return self._item_repo.listings([item])[0]

    # ------------------------------------------------------------------
    # Import et file-parser
    # ------------------------------------------------------------------

    async def import_item(self, record: Mapping[str, Any]) -> Item:
        """
        Importe un item depuis un export.

        L'ID de l'export est ignore (un nouvel ID est attribue), l'ancien champ
        "genre" est abandonne, last_seen_at manquant prend la valeur de
        created_at. Les items avec tmdb_id sont enrichis comme a la creation.
        """
        data = dict(record)
        data.pop("id", None)
        data.pop("genre", None)
        logger.info(f"Import: '{data.get('title')}'")

        created_at = parse_timestamp(data.get("created_at")) or utcnow()
        last_seen_at = parse_timestamp(data.get("last_seen_at")) or created_at
        media_type = MediaType.parse(data.get("media_type") or MediaType.MOVIE)
        tmdb_id = int(data["tmdb_id"]) if data.get("tmdb_id") else None

        fields = ItemFields(
            title=data.get("title") or None,
            original_title=data.get("original_title"),
            imdb_id=data.get("imdb_id") or None,
            youtube_key=data.get("youtube_key"),
            overview=data.get("overview"),
            tmdb_rating=_optional_float(data.get("tmdb_rating")),
            imdb_rating=_optional_float(data.get("imdb_rating")),
            backdrop=data.get("backdrop"),
            poster=data.get("poster"),
            slug=data.get("slug"),
            homepage=data.get("homepage"),
            released=parse_timestamp(data.get("released")),
        )
        if tmdb_id is not None:
            fields = await self.make_data_complete(tmdb_id, media_type, fields)

        item = fields.apply_to(
            Item(
                tmdb_id=tmdb_id,
                media_type=media_type,
                rating=int(data.get("rating") or NEUTRAL_RATING),
                watchlist=parse_flag(data.get("watchlist")),
                is_historic=parse_flag(data.get("is_historic")),
                last_seen_at=last_seen_at,
                created_at=created_at,
                refreshed_at=parse_timestamp(data.get("refreshed_at")),
                src=data.get("src"),
                fp_name=data.get("fp_name"),
                subtitles=data.get("subtitles"),
            )
        )
        item.slug = item.slug or slugify(item.title)

        with self._transaction.atomic():
            stored = self._item_repo.add(item)

        if tmdb_id is not None:
            await self._download_images(stored)
        return stored

    def create_empty(
        self,
        name: str,
        src: Optional[str],
        media_type: "str | MediaType",
        subtitles: Optional[str] = None,
    ) -> Item:
        """
        Cree un item sans ID TMDB pour un fichier que le file-parser n'a pas reconnu.

        Le nom du fichier sert de titre et de fp_name.
        """
        now = utcnow()
        item = Item(
            media_type=MediaType.parse(media_type),
            title=name,
            slug=slugify(name),
            fp_name=name,
            src=src,
            subtitles=subtitles,
            last_seen_at=now,
            created_at=now,
        )
        with self._transaction.atomic():
            stored = self._item_repo.add(item)
        logger.info(f"Item vide cree pour le fichier: '{name}'")
        return stored
