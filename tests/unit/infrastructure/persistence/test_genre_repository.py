"""
Tests unitaires pour SQLModelGenreRepository et SQLModelSettingRepository.
"""

from watchlog.core.entities.media import Genre, Item
from watchlog.core.ports.repositories import AppSettings
from watchlog.infrastructure.persistence.models import SettingModel


class TestGenreRepository:
    def test_upsert_inserts_and_renames(self, genre_repo) -> None:
        genre_repo.upsert_many([Genre(id=878, name="Sci-Fi"), Genre(id=28, name="Action")])
        genre_repo.upsert_many([Genre(id=878, name="Science Fiction")])

        assert genre_repo.list_all() == [
            Genre(id=28, name="Action"),
            Genre(id=878, name="Science Fiction"),
        ]

    def test_filter_known(self, genre_repo) -> None:
        genre_repo.upsert_many([Genre(id=18, name="Drama")])

        assert genre_repo.filter_known([18, 99]) == {18}
        assert genre_repo.filter_known([]) == set()

    def test_set_item_genres_replaces_links(self, genre_repo, item_repo) -> None:
        item = item_repo.add(Item(tmdb_id=603, title="The Matrix"))
        genre_repo.upsert_many(
            [Genre(id=28, name="Action"), Genre(id=878, name="Science Fiction"), Genre(id=18, name="Drama")]
        )

        genre_repo.set_item_genres(item.id, [28, 878, 28])
        genre_repo.set_item_genres(item.id, [18, 878])

        assert [g.id for g in genre_repo.list_for_item(item.id)] == [18, 878]


class TestSettingRepository:
    def test_defaults_when_empty(self, setting_repo) -> None:
        assert setting_repo.get() == AppSettings()

    def test_reads_stored_record(self, setting_repo, session) -> None:
        session.add(SettingModel(show_watchlist_everywhere=True, episode_spoiler_protection=False))
        session.commit()

        settings = setting_repo.get()

        assert settings.show_watchlist_everywhere is True
        assert settings.episode_spoiler_protection is False
