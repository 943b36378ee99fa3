"""
Tests unitaires pour EpisodeSyncService.
"""

from datetime import date

import pytest

from watchlog.core.entities.media import Episode, Item, MediaType
from watchlog.core.ports.api_clients import ProviderEpisode
from watchlog.infrastructure.persistence.models import SettingModel

SHOW = Item(id=1, tmdb_id=1399, media_type=MediaType.TV, title="Game of Thrones")
MOVIE = Item(id=2, tmdb_id=603, media_type=MediaType.MOVIE, title="The Matrix")


class TestCreate:
    @pytest.mark.asyncio
    async def test_movie_makes_no_call_and_writes_nothing(
        self, episode_service, mock_tmdb, episode_repo
    ) -> None:
        result = await episode_service.create(MOVIE)

        assert result == []
        mock_tmdb.tv_episodes.assert_not_awaited()
        assert episode_repo.list_by_tmdb_id(603) == []

    @pytest.mark.asyncio
    async def test_show_episodes_are_stored(self, episode_service, mock_tmdb, episode_repo) -> None:
        mock_tmdb.tv_episodes.return_value = [
            ProviderEpisode(
                season_number=1,
                episode_number=1,
                name="Winter Is Coming",
                air_date=date(2011, 4, 17),
                episode_tmdb_id=63056,
                season_tmdb_id=3624,
            ),
        ]

        await episode_service.create(SHOW)

        [episode] = episode_repo.list_by_tmdb_id(1399)
        assert episode.name == "Winter Is Coming"
        assert episode.episode_tmdb_id == 63056
        assert episode.seen is False
        mock_tmdb.tv_episodes.assert_awaited_once_with(1399)

    @pytest.mark.asyncio
    async def test_local_fields_follow_episode_number(
        self, episode_service, mock_tmdb, episode_repo
    ) -> None:
        """Les champs locaux suivent le numero, meme si TMDB renomme l'episode."""
        episode_repo.replace_all(
            1399,
            [
                Episode(
                    season_number=1,
                    episode_number=1,
                    name="Pilot",
                    seen=True,
                    src="/got/s01e01.mkv",
                    subtitles="/got/s01e01.srt",
                ),
                Episode(season_number=1, episode_number=9, seen=True),
            ],
        )
        mock_tmdb.tv_episodes.return_value = [
            ProviderEpisode(season_number=1, episode_number=1, name="Winter Is Coming"),
        ]

        await episode_service.create(SHOW)

        [episode] = episode_repo.list_by_tmdb_id(1399)
        assert episode.name == "Winter Is Coming"
        assert episode.seen is True
        assert episode.src == "/got/s01e01.mkv"
        assert episode.subtitles == "/got/s01e01.srt"


def test_replace_with_none_is_a_no_op(episode_service, episode_repo) -> None:
    episode_repo.replace_all(1399, [Episode(season_number=1, episode_number=1)])

    assert episode_service.replace(SHOW, None) == []
    assert len(episode_repo.list_by_tmdb_id(1399)) == 1


def test_remove(episode_service, episode_repo) -> None:
    episode_repo.replace_all(1399, [Episode(season_number=1, episode_number=1)])

    assert episode_service.remove(1399) == 1
    assert episode_repo.list_by_tmdb_id(1399) == []


class TestOverview:
    def test_grouped_by_season_with_spoiler_default(self, episode_service, episode_repo) -> None:
        episode_repo.replace_all(
            1399,
            [
                Episode(season_number=2, episode_number=1),
                Episode(season_number=1, episode_number=2),
                Episode(season_number=1, episode_number=1),
            ],
        )

        overview = episode_service.get_all_by_tmdb_id(1399)

        assert list(overview.episodes) == [1, 2]
        assert [e.episode_number for e in overview.episodes[1]] == [1, 2]
        assert overview.spoiler is True

    def test_spoiler_setting(self, episode_service, session) -> None:
        session.add(SettingModel(episode_spoiler_protection=False))
        session.commit()

        assert episode_service.get_all_by_tmdb_id(1399).spoiler is False


class TestSeenState:
    def test_toggle_seen(self, episode_service, episode_repo) -> None:
        [episode] = episode_repo.replace_all(1399, [Episode(season_number=1, episode_number=1)])

        assert episode_service.toggle_seen(episode.id).seen is True
        assert episode_service.toggle_seen(episode.id).seen is False
        assert episode_service.toggle_seen(9999) is None

    def test_toggle_season(self, episode_service, episode_repo) -> None:
        episode_repo.replace_all(
            1399,
            [
                Episode(season_number=1, episode_number=1),
                Episode(season_number=1, episode_number=2),
                Episode(season_number=2, episode_number=1),
            ],
        )

        assert episode_service.toggle_season(1399, 1, True) == 2
        assert [e.seen for e in episode_repo.list_by_tmdb_id(1399)] == [True, True, False]


class TestFindBy:
    @pytest.fixture(autouse=True)
    def episodes(self, episode_repo):
        episode_repo.replace_all(
            1399,
            [
                Episode(season_number=1, episode_number=1, src="/got/s01e01.mkv"),
                Episode(season_number=1, episode_number=2),
            ],
        )

    def test_by_src(self, episode_service) -> None:
        assert episode_service.find_by("src", "/got/s01e01.mkv").number == (1, 1)

    def test_by_tmdb_id(self, episode_service) -> None:
        assert len(episode_service.find_by("tmdb_id", "1399")) == 2

    def test_by_episode(self, episode_service) -> None:
        assert episode_service.find_by("episode", 1, episode=2).number == (1, 2)

    def test_unknown_kind(self, episode_service) -> None:
        assert episode_service.find_by("name", "Pilot") is None


class TestImportEpisode:
    def test_release_episode_timestamp(self, episode_service) -> None:
        episode = episode_service.import_episode(
            {
                "id": 77,
                "tmdb_id": "1399",
                "season_number": "1",
                "episode_number": "1",
                "name": "Winter Is Coming",
                "release_episode": 1302998400,
                "seen": 1,
            }
        )

        assert episode.id != 77
        assert episode.tmdb_id == 1399
        assert episode.air_date == date(2011, 4, 17)
        assert episode.seen is True

    def test_air_date_string(self, episode_service) -> None:
        episode = episode_service.import_episode(
            {"tmdb_id": 1399, "season_number": 2, "episode_number": 1, "air_date": "2012-04-01"}
        )

        assert episode.air_date == date(2012, 4, 1)
        assert episode.name == ""

    def test_seen_exported_as_string(self, episode_service) -> None:
        episode = episode_service.import_episode(
            {"tmdb_id": 1399, "season_number": 1, "episode_number": 2, "seen": "0"}
        )

        assert episode.seen is False
