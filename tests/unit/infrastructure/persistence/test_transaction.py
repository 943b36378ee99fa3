"""
Tests unitaires pour SQLModelTransactionManager.

Les repositories ne font que flush() : seul le bloc le plus externe valide.
"""

import pytest

from watchlog.core.entities.media import Episode, Item


class TestAtomic:
    def test_commit_on_success(self, transaction, item_repo, session) -> None:
        with transaction.atomic():
            item_repo.add(Item(tmdb_id=603, title="The Matrix"))

        session.rollback()  # Sans effet apres commit
        assert item_repo.find_by_tmdb_id(603) is not None

    def test_rollback_on_error(self, transaction, item_repo, episode_repo) -> None:
        with pytest.raises(RuntimeError):
            with transaction.atomic():
                item_repo.add(Item(tmdb_id=1399, title="Game of Thrones"))
                episode_repo.replace_all(1399, [Episode(season_number=1, episode_number=1)])
                raise RuntimeError("echec au milieu de la synchronisation")

        assert item_repo.find_by_tmdb_id(1399) is None
        assert episode_repo.list_by_tmdb_id(1399) == []
        assert transaction.active is False

    def test_nested_block_does_not_commit(self, transaction, item_repo) -> None:
        """Une erreur apres un bloc interne annule aussi ses ecritures."""
        with pytest.raises(RuntimeError):
            with transaction.atomic():
                with transaction.atomic():
                    item_repo.add(Item(tmdb_id=603, title="The Matrix"))
                assert transaction.active is True
                raise RuntimeError("boom")

        assert item_repo.find_by_tmdb_id(603) is None

    def test_inner_error_propagates_to_outer(self, transaction, item_repo) -> None:
        with pytest.raises(ValueError):
            with transaction.atomic():
                item_repo.add(Item(tmdb_id=603, title="The Matrix"))
                with transaction.atomic():
                    raise ValueError("interne")

        assert item_repo.find_by_tmdb_id(603) is None
