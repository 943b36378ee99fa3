"""
Tests unitaires pour SQLModelEpisodeRepository et SQLModelAlternativeTitleRepository.
"""

from datetime import date

import pytest

from watchlog.core.entities.media import AlternativeTitle, Episode


def _episodes() -> list[Episode]:
    return [
        Episode(season_number=2, episode_number=1, name="The North Remembers"),
        Episode(season_number=1, episode_number=2, name="The Kingsroad"),
        Episode(
            season_number=1,
            episode_number=1,
            name="Winter Is Coming",
            air_date=date(2011, 4, 17),
        ),
    ]


class TestEpisodeRepository:
    def test_replace_all_forces_show_id_and_sorts_on_read(self, episode_repo) -> None:
        episode_repo.replace_all(1399, _episodes())

        stored = episode_repo.list_by_tmdb_id(1399)

        assert [e.number for e in stored] == [(1, 1), (1, 2), (2, 1)]
        assert all(e.tmdb_id == 1399 for e in stored)
        assert stored[0].air_date == date(2011, 4, 17)

    def test_replace_all_drops_previous_set(self, episode_repo) -> None:
        episode_repo.replace_all(1399, _episodes())
        episode_repo.replace_all(1399, [Episode(season_number=3, episode_number=1)])

        assert [e.number for e in episode_repo.list_by_tmdb_id(1399)] == [(3, 1)]

    def test_replace_all_leaves_other_shows_alone(self, episode_repo) -> None:
        episode_repo.replace_all(1399, _episodes())
        episode_repo.replace_all(1396, [Episode(season_number=1, episode_number=1)])

        assert len(episode_repo.list_by_tmdb_id(1399)) == 3

    def test_set_season_seen(self, episode_repo) -> None:
        episode_repo.replace_all(1399, _episodes())

        assert episode_repo.set_season_seen(1399, 1, True) == 2
        seen = {e.number: e.seen for e in episode_repo.list_by_tmdb_id(1399)}
        assert seen == {(1, 1): True, (1, 2): True, (2, 1): False}

    def test_update(self, episode_repo) -> None:
        episode = episode_repo.add(Episode(tmdb_id=1399, season_number=1, episode_number=1))
        episode.seen = True
        episode.src = "/series/got/s01e01.mkv"

        episode_repo.update(episode)

        stored = episode_repo.get_by_id(episode.id)
        assert stored.seen is True
        assert episode_repo.find_by_src("/series/got/s01e01.mkv").id == episode.id

    def test_update_missing_raises(self, episode_repo) -> None:
        with pytest.raises(ValueError):
            episode_repo.update(Episode(id=42))

    def test_find_specific(self, episode_repo) -> None:
        episode_repo.replace_all(1399, _episodes())
        episode_repo.replace_all(1396, [Episode(season_number=1, episode_number=1)])

        assert episode_repo.find_specific(1, 1, tmdb_id=1396).tmdb_id == 1396
        assert episode_repo.find_specific(1, 1).tmdb_id == 1399
        assert episode_repo.find_specific(9, 9) is None

    def test_delete_by_tmdb_id(self, episode_repo) -> None:
        episode_repo.replace_all(1399, _episodes())

        assert episode_repo.delete_by_tmdb_id(1399) == 3
        assert episode_repo.list_by_tmdb_id(1399) == []


class TestAlternativeTitleRepository:
    def test_replace_all_keeps_insertion_order(self, alternative_title_repo) -> None:
        alternative_title_repo.replace_all(
            603,
            [AlternativeTitle(title="Matrix", country="FR"), AlternativeTitle(title="Matrice")],
        )

        titles = alternative_title_repo.list_by_tmdb_id(603)

        assert [(t.title, t.country) for t in titles] == [("Matrix", "FR"), ("Matrice", None)]
        assert all(t.tmdb_id == 603 for t in titles)

    def test_replace_and_delete(self, alternative_title_repo) -> None:
        alternative_title_repo.replace_all(603, [AlternativeTitle(title="Matrix")])
        alternative_title_repo.replace_all(603, [AlternativeTitle(title="Matrice")])

        assert [t.title for t in alternative_title_repo.list_by_tmdb_id(603)] == ["Matrice"]
        assert alternative_title_repo.delete_by_tmdb_id(603) == 1
