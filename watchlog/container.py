"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI.
Les repositories et le gestionnaire de transaction partagent une meme
session SQLModel : c'est ce qui permet a atomic() de regrouper leurs ecritures.
"""

from dependency_injector import containers, providers

from watchlog.adapters.api.cache import APICache
from watchlog.adapters.api.imdb_client import IMDbRatingClient
from watchlog.adapters.api.tmdb_client import TMDBClient
from watchlog.adapters.assets.image_store import LocalImageStore
from watchlog.adapters.tasks.refresh_runner import RefreshTaskRunner
from watchlog.config import Settings
from watchlog.infrastructure.persistence.database import create_session, init_db
from watchlog.infrastructure.persistence.repositories import (
    SQLModelAlternativeTitleRepository,
    SQLModelEpisodeRepository,
    SQLModelGenreRepository,
    SQLModelItemRepository,
    SQLModelSettingRepository,
)
from watchlog.infrastructure.persistence.transaction import SQLModelTransactionManager
from watchlog.services.alternative_title_syncer import AlternativeTitleSyncService
from watchlog.services.episode_sync import EpisodeSyncService
from watchlog.services.genre_syncer import GenreSyncService
from watchlog.services.item_sync import ItemSyncService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        service = container.item_sync_service()
        runner = container.refresh_runner()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session partagee par les repositories et la transaction
    session = providers.Singleton(create_session)
    transaction = providers.Singleton(SQLModelTransactionManager, session=session)

    # Repositories
    item_repository = providers.Singleton(SQLModelItemRepository, session=session)
    episode_repository = providers.Singleton(SQLModelEpisodeRepository, session=session)
    alternative_title_repository = providers.Singleton(
        SQLModelAlternativeTitleRepository,
        session=session,
    )
    genre_repository = providers.Singleton(SQLModelGenreRepository, session=session)
    setting_repository = providers.Singleton(SQLModelSettingRepository, session=session)

    # Cache API - Singleton pour partage entre clients
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Clients API - Singleton avec api_key depuis config
    # Sans api_key, le client leve ConfigurationError au premier appel
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        language=config.provided.tmdb_language,
        timeout=config.provided.http_timeout,
    )
    imdb_client = providers.Singleton(
        IMDbRatingClient,
        timeout=config.provided.http_timeout,
    )

    asset_store = providers.Singleton(
        LocalImageStore,
        assets_dir=config.provided.assets_dir,
        poster_size=config.provided.poster_size,
        backdrop_size=config.provided.backdrop_size,
        timeout=config.provided.http_timeout,
    )

    # Runner des rafraichissements (le handler est lie par la commande refresh-all)
    refresh_runner = providers.Singleton(
        RefreshTaskRunner,
        concurrency=config.provided.refresh_concurrency,
    )

    # Services
    genre_service = providers.Singleton(
        GenreSyncService,
        genre_repo=genre_repository,
        tmdb_client=tmdb_client,
        transaction=transaction,
    )
    alternative_title_service = providers.Singleton(
        AlternativeTitleSyncService,
        alternative_title_repo=alternative_title_repository,
        tmdb_client=tmdb_client,
        transaction=transaction,
    )
    episode_service = providers.Singleton(
        EpisodeSyncService,
        episode_repo=episode_repository,
        tmdb_client=tmdb_client,
        setting_repo=setting_repository,
        transaction=transaction,
    )
    item_sync_service = providers.Singleton(
        ItemSyncService,
        item_repo=item_repository,
        tmdb_client=tmdb_client,
        rating_client=imdb_client,
        asset_store=asset_store,
        episode_service=episode_service,
        genre_service=genre_service,
        alternative_title_service=alternative_title_service,
        setting_repo=setting_repository,
        transaction=transaction,
        task_sink=refresh_runner,
        page_size=config.provided.loading_items,
    )
