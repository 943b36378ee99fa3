"""
Frontiere transactionnelle des ecritures.

Les repositories ne font que flush() : c'est le bloc atomic() le plus externe
qui valide la session, ou l'annule si une exception le traverse.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlmodel import Session

from watchlog.core.ports.repositories import ITransactionManager


class SQLModelTransactionManager(ITransactionManager):
    """
    Transactions imbricables sur une session SQLModel.

    Example:
        with transaction.atomic():
            item_repo.add(item)
            with transaction.atomic():  # bloc interne, pas de commit
                episode_repo.replace_all(tmdb_id, episodes)
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._depth = 0

    @property
    def active(self) -> bool:
        """True si un bloc atomique est ouvert."""
        return self._depth > 0

    @contextmanager
    def atomic(self) -> Iterator[None]:
        self._depth += 1
        try:
            yield
        except Exception:
            self._depth -= 1
            if self._depth == 0:
                self._session.rollback()
                logger.debug("Transaction annulee")
            raise
        else:
            self._depth -= 1
            if self._depth == 0:
                try:
                    self._session.commit()
                except Exception:
                    self._session.rollback()
                    raise
