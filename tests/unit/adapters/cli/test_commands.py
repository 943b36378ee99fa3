"""
Tests unitaires pour les commandes CLI.

Le Container est patche dans helpers.py, la ou le decorateur
@with_container() l'importe et l'instancie : les commandes tournent
sur des services mockes.
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from watchlog.adapters.tasks import RefreshBatchStats
from watchlog.core.entities.media import Episode, Item, MediaType
from watchlog.core.exceptions import IncompleteItemError
from watchlog.core.value_objects import (
    EpisodeOverview,
    ItemDraft,
    ItemListing,
    ItemPage,
    OperationResult,
    OperationStatus,
)
from watchlog.main import app

runner = CliRunner()


@pytest.fixture
def mock_container():
    """Mock le Container, clients HTTP fermables en async."""
    with patch("watchlog.adapters.cli.helpers.Container") as mock_cls:
        container = MagicMock()
        mock_cls.return_value = container
        container.tmdb_client.return_value.close = AsyncMock()
        container.imdb_client.return_value.close = AsyncMock()
        yield container


@pytest.fixture
def item_service(mock_container) -> MagicMock:
    service = MagicMock()
    mock_container.item_sync_service.return_value = service
    return service


MATRIX = Item(id=1, tmdb_id=603, title="The Matrix", rating=8, tmdb_rating=8.2)


class TestAdd:
    def test_add_creates_item(self, mock_container, item_service) -> None:
        item_service.create = AsyncMock(return_value=MATRIX)

        result = runner.invoke(app, ["add", "603", "--watchlist"])

        assert result.exit_code == 0
        assert "The Matrix" in result.output
        mock_container.database.init.assert_called_once()
        draft = item_service.create.await_args.args[0]
        assert draft == ItemDraft(tmdb_id=603, media_type=MediaType.MOVIE, watchlist=True)

    def test_add_without_title_fails(self, mock_container, item_service) -> None:
        item_service.create = AsyncMock(side_effect=IncompleteItemError(603))

        result = runner.invoke(app, ["add", "603"])

        assert result.exit_code == 1
        assert "603" in result.output

    def test_clients_are_closed(self, mock_container, item_service) -> None:
        item_service.create = AsyncMock(return_value=MATRIX)

        runner.invoke(app, ["add", "603"])

        mock_container.tmdb_client.return_value.close.assert_awaited_once()
        mock_container.imdb_client.return_value.close.assert_awaited_once()
        mock_container.session.return_value.close.assert_called_once()
        mock_container.api_cache.return_value.close.assert_called_once()


class TestItemCommands:
    def test_refresh_not_refreshed(self, mock_container, item_service) -> None:
        item_service.refresh = AsyncMock(
            return_value=OperationResult(OperationStatus.NOT_REFRESHED, MATRIX)
        )

        result = runner.invoke(app, ["refresh", "1"])

        assert result.exit_code == 0
        assert "non rafraichi" in result.output

    def test_remove_missing_item(self, mock_container, item_service) -> None:
        item_service.remove.return_value = OperationResult.not_found()

        result = runner.invoke(app, ["remove", "42"])

        assert result.exit_code == 1
        assert "introuvable" in result.output

    def test_rate(self, mock_container, item_service) -> None:
        item_service.change_rating.return_value = OperationResult.done(MATRIX)

        result = runner.invoke(app, ["rate", "1", "9"])

        assert result.exit_code == 0
        item_service.change_rating.assert_called_once_with(1, 9)

    def test_refresh_all_prints_summary(self, mock_container, item_service) -> None:
        item_service.refresh_all = AsyncMock(return_value=3)
        refresh_runner = mock_container.refresh_runner.return_value
        refresh_runner.join = AsyncMock(
            return_value=RefreshBatchStats(submitted=3, refreshed=2, skipped=0, failed=1)
        )

        result = runner.invoke(app, ["refresh-all"])

        assert result.exit_code == 0
        refresh_runner.bind.assert_called_once_with(item_service.refresh)
        assert "3 item(s) soumis" in result.output
        assert "echec" in result.output


class TestListing:
    def test_list_passes_options(self, mock_container, item_service) -> None:
        item_service.get_with_pagination.return_value = ItemPage(
            items=[ItemListing(item=MATRIX)], page=1, per_page=30, has_more=True
        )

        result = runner.invoke(
            app, ["list", "--type", "movie", "--order-by", "title", "--direction", "asc"]
        )

        assert result.exit_code == 0
        assert "The Matrix" in result.output
        assert "--page 2" in result.output
        item_service.get_with_pagination.assert_called_once_with("movie", "title", "asc", 1)

    def test_list_empty(self, mock_container, item_service) -> None:
        item_service.get_with_pagination.return_value = ItemPage()

        result = runner.invoke(app, ["list"])

        assert "Aucun item" in result.output

    def test_find_nothing(self, mock_container, item_service) -> None:
        item_service.find_by.return_value = None

        result = runner.invoke(app, ["find", "title", "Alien", "--type", "movie"])

        assert result.exit_code == 1
        item_service.find_by.assert_called_once_with("title", "Alien", "movie")


class TestEpisodes:
    def test_list_masks_unseen_titles(self, mock_container) -> None:
        mock_container.episode_service.return_value.get_all_by_tmdb_id.return_value = (
            EpisodeOverview(
                episodes={
                    1: [
                        Episode(id=1, season_number=1, episode_number=1, name="Winter Is Coming", seen=True),
                        Episode(id=2, season_number=1, episode_number=2, name="The Kingsroad"),
                    ]
                },
                spoiler=True,
            )
        )

        result = runner.invoke(app, ["episodes", "list", "1399"])

        assert result.exit_code == 0
        assert "Winter Is Coming" in result.output
        assert "The Kingsroad" not in result.output

    def test_season_unseen(self, mock_container) -> None:
        service = mock_container.episode_service.return_value
        service.toggle_season.return_value = 10

        result = runner.invoke(app, ["episodes", "season", "1399", "2", "--unseen"])

        assert result.exit_code == 0
        service.toggle_season.assert_called_once_with(1399, 2, False)


class TestImport:
    def test_import_export_file(self, mock_container, item_service, tmp_path: Path) -> None:
        item_service.import_item = AsyncMock(return_value=MATRIX)
        episode_service = mock_container.episode_service.return_value
        export = tmp_path / "export.json"
        export.write_text(
            json.dumps(
                {
                    "items": [{"tmdb_id": 603, "title": "The Matrix"}],
                    "episodes": [{"tmdb_id": 1399, "season_number": 1, "episode_number": 1}],
                }
            ),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["import", str(export)])

        assert result.exit_code == 0
        item_service.import_item.assert_awaited_once_with({"tmdb_id": 603, "title": "The Matrix"})
        episode_service.import_episode.assert_called_once()


def test_version() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "Watchlog v" in result.output
