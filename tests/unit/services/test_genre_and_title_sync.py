"""
Tests unitaires pour GenreSyncService et AlternativeTitleSyncService.
"""

import pytest

from watchlog.core.entities.media import AlternativeTitle, Genre, Item, MediaType
from watchlog.core.ports.api_clients import ProviderAlternativeTitle


class TestGenreSync:
    @pytest.mark.asyncio
    async def test_update_genre_lists(self, genre_service, mock_tmdb, genre_repo) -> None:
        mock_tmdb.genre_lists.return_value = [
            Genre(id=28, name="Action"),
            Genre(id=10765, name="Sci-Fi & Fantasy"),
        ]

        assert await genre_service.update_genre_lists() == 2
        assert {g.id for g in genre_repo.list_all()} == {28, 10765}

    def test_sync_ignores_unknown_ids(self, genre_service, genre_repo, item_repo) -> None:
        item = item_repo.add(Item(tmdb_id=603, title="The Matrix"))
        genre_repo.upsert_many([Genre(id=28, name="Action"), Genre(id=878, name="Science Fiction")])

        linked = genre_service.sync(item, [878, 28, 12345])

        assert linked == [28, 878]
        assert [g.id for g in genre_repo.list_for_item(item.id)] == [28, 878]

    def test_sync_with_no_ids_clears_links(self, genre_service, genre_repo, item_repo) -> None:
        item = item_repo.add(Item(tmdb_id=603, title="The Matrix"))
        genre_repo.upsert_many([Genre(id=28, name="Action")])
        genre_service.sync(item, [28])

        assert genre_service.sync(item, []) == []
        assert genre_repo.list_for_item(item.id) == []


class TestAlternativeTitleSync:
    @pytest.mark.asyncio
    async def test_create_fetches_and_replaces(
        self, alternative_title_service, mock_tmdb, alternative_title_repo
    ) -> None:
        alternative_title_repo.replace_all(1399, [AlternativeTitle(title="Ancien titre")])
        mock_tmdb.alternative_titles.return_value = [
            ProviderAlternativeTitle(title="Le Trône de fer", country="FR"),
            ProviderAlternativeTitle(title="Il Trono di Spade", country="IT"),
        ]
        show = Item(tmdb_id=1399, media_type=MediaType.TV, title="Game of Thrones")

        stored = await alternative_title_service.create(show)

        assert [t.country for t in stored] == ["FR", "IT"]
        assert [t.title for t in alternative_title_repo.list_by_tmdb_id(1399)] == [
            "Le Trône de fer",
            "Il Trono di Spade",
        ]
        mock_tmdb.alternative_titles.assert_awaited_once_with(1399, MediaType.TV)

    @pytest.mark.asyncio
    async def test_item_without_tmdb_id(self, alternative_title_service, mock_tmdb) -> None:
        assert await alternative_title_service.create(Item(title="local file")) == []
        mock_tmdb.alternative_titles.assert_not_awaited()

    def test_remove(self, alternative_title_service, alternative_title_repo) -> None:
        alternative_title_repo.replace_all(603, [AlternativeTitle(title="Matrix")])

        assert alternative_title_service.remove(603) == 1
        assert alternative_title_repo.list_by_tmdb_id(603) == []
