"""
Fixtures pytest partagees pour les tests Watchlog.

Ce module contient les fixtures communes utilisees dans les tests:
- Base SQLite en memoire et repositories SQLModel
- Mocks des ports (TMDB, IMDb, images, taches)
- Services construits sur la base en memoire et les mocks
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from watchlog.config import Settings
from watchlog.core.ports.api_clients import IMetadataProvider, IRatingProvider
from watchlog.core.ports.assets import IAssetStore
from watchlog.core.ports.tasks import ITaskSink
from watchlog.infrastructure.persistence.database import init_db
from watchlog.infrastructure.persistence.repositories import (
    SQLModelAlternativeTitleRepository,
    SQLModelEpisodeRepository,
    SQLModelGenreRepository,
    SQLModelItemRepository,
    SQLModelSettingRepository,
)
from watchlog.infrastructure.persistence.transaction import SQLModelTransactionManager
from watchlog.services import (
    AlternativeTitleSyncService,
    EpisodeSyncService,
    GenreSyncService,
    ItemSyncService,
)


# ============================================================================
# Base de donnees
# ============================================================================


@pytest.fixture
def session() -> Iterator[Session]:
    """Session sur une base SQLite en memoire, schema cree."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def transaction(session: Session) -> SQLModelTransactionManager:
    return SQLModelTransactionManager(session)


@pytest.fixture
def item_repo(session: Session) -> SQLModelItemRepository:
    return SQLModelItemRepository(session)


@pytest.fixture
def episode_repo(session: Session) -> SQLModelEpisodeRepository:
    return SQLModelEpisodeRepository(session)


@pytest.fixture
def alternative_title_repo(session: Session) -> SQLModelAlternativeTitleRepository:
    return SQLModelAlternativeTitleRepository(session)


@pytest.fixture
def genre_repo(session: Session) -> SQLModelGenreRepository:
    return SQLModelGenreRepository(session)


@pytest.fixture
def setting_repo(session: Session) -> SQLModelSettingRepository:
    return SQLModelSettingRepository(session)


# ============================================================================
# Mocks des ports
# ============================================================================


@pytest.fixture
def mock_tmdb() -> AsyncMock:
    """
    Mock de IMetadataProvider.

    Par defaut TMDB ne connait rien : chaque test configure ses reponses.
    """
    mock = AsyncMock(spec=IMetadataProvider)
    mock.details.return_value = None
    mock.videos.return_value = ()
    mock.tv_episodes.return_value = []
    mock.alternative_titles.return_value = []
    mock.genre_lists.return_value = []
    return mock


@pytest.fixture
def mock_rating() -> AsyncMock:
    """Mock de IRatingProvider (aucune note par defaut)."""
    mock = AsyncMock(spec=IRatingProvider)
    mock.parse_rating.return_value = None
    return mock


@pytest.fixture
def mock_assets() -> MagicMock:
    """Mock de IAssetStore (download_images est une coroutine)."""
    mock = MagicMock(spec=IAssetStore)
    mock.download_images = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_task_sink() -> MagicMock:
    return MagicMock(spec=ITaskSink)


# ============================================================================
# Services
# ============================================================================


@pytest.fixture
def genre_service(genre_repo, mock_tmdb, transaction) -> GenreSyncService:
    return GenreSyncService(genre_repo=genre_repo, tmdb_client=mock_tmdb, transaction=transaction)


@pytest.fixture
def alternative_title_service(
    alternative_title_repo, mock_tmdb, transaction
) -> AlternativeTitleSyncService:
    return AlternativeTitleSyncService(
        alternative_title_repo=alternative_title_repo,
        tmdb_client=mock_tmdb,
        transaction=transaction,
    )


@pytest.fixture
def episode_service(episode_repo, mock_tmdb, setting_repo, transaction) -> EpisodeSyncService:
    return EpisodeSyncService(
        episode_repo=episode_repo,
        tmdb_client=mock_tmdb,
        setting_repo=setting_repo,
        transaction=transaction,
    )


@pytest.fixture
def item_service(
    item_repo,
    mock_tmdb,
    mock_rating,
    mock_assets,
    episode_service,
    genre_service,
    alternative_title_service,
    setting_repo,
    transaction,
    mock_task_sink,
) -> ItemSyncService:
    """ItemSyncService sur base en memoire, pages de 2 items."""
    return ItemSyncService(
        item_repo=item_repo,
        tmdb_client=mock_tmdb,
        rating_client=mock_rating,
        asset_store=mock_assets,
        episode_service=episode_service,
        genre_service=genre_service,
        alternative_title_service=alternative_title_service,
        setting_repo=setting_repo,
        transaction=transaction,
        task_sink=mock_task_sink,
        page_size=2,
    )


# ============================================================================
# Configuration
# ============================================================================


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler la base, les images et le cache.
    """
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'watchlog.db'}",
        tmdb_api_key="test_api_key",
        assets_dir=tmp_path / "assets",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "logs" / "watchlog.log",
    )
