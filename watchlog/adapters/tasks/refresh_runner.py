"""
Execution des rafraichissements d'items en tache de fond.

Implemente ITaskSink avec des taches asyncio bornees par un semaphore.
Chaque tache est independante : un echec est journalise et n'interrompt
pas les autres.

Usage:
    runner = RefreshTaskRunner(concurrency=4)
    runner.bind(item_sync_service.refresh)
    await item_sync_service.refresh_all()   # soumet une tache par item
    stats = await runner.join()
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from watchlog.core.ports.tasks import ITaskSink
from watchlog.core.value_objects.results import OperationResult

RefreshHandler = Callable[[int], Awaitable[Any]]


@dataclass
class RefreshBatchStats:
    """Statistiques d'un lot de rafraichissements."""

    submitted: int = 0
    refreshed: int = 0
    skipped: int = 0
    failed: int = 0


class RefreshTaskRunner(ITaskSink):
    """
    Recepteur de taches base sur asyncio.

    Les taches demarrent des leur soumission (une boucle asyncio doit etre
    active) et join() attend la fin du lot courant.
    """

    def __init__(self, concurrency: int = 4, handler: Optional[RefreshHandler] = None) -> None:
        """
        Initialise le runner.

        Args:
            concurrency: Nombre maximum de rafraichissements simultanes
            handler: Coroutine de rafraichissement d'un item (voir bind)
        """
        self._concurrency = concurrency
        self._handler = handler
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._tasks: list[asyncio.Task] = []
        self._stats = RefreshBatchStats()

    def bind(self, handler: RefreshHandler) -> None:
        """Definit la coroutine executee pour chaque item soumis."""
        self._handler = handler

    def submit(self, item_id: int) -> None:
        """
        Planifie le rafraichissement d'un item.

        Raises:
            RuntimeError: Si aucun handler n'est defini ou hors boucle asyncio
        """
        if self._handler is None:
            raise RuntimeError("RefreshTaskRunner sans handler, appeler bind() d'abord")
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self._concurrency)

        loop = asyncio.get_running_loop()
        self._stats.submitted += 1
        self._tasks.append(
            loop.create_task(self._run(item_id), name=f"refresh-item-{item_id}")
        )

    async def _run(self, item_id: int) -> None:
        """Execute un rafraichissement, journalise l'issue."""
        async with self._semaphore:
            try:
                result = await self._handler(item_id)
            except Exception:
                self._stats.failed += 1
                logger.exception(f"Echec du rafraichissement de l'item {item_id}")
                return

        if isinstance(result, OperationResult) and not result.ok:
            self._stats.skipped += 1
            logger.info(f"Item {item_id} non rafraichi ({result.status.value})")
        else:
            self._stats.refreshed += 1

    async def join(self) -> RefreshBatchStats:
        """
        Attend la fin des taches soumises.

        Returns:
            Statistiques du lot, remises a zero pour le lot suivant
        """
        tasks, self._tasks = self._tasks, []
        if tasks:
            await asyncio.gather(*tasks)
        stats, self._stats = self._stats, RefreshBatchStats()
        return stats
