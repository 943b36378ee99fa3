"""Execution des taches de fond (rafraichissement des items)."""

from watchlog.adapters.tasks.refresh_runner import RefreshBatchStats, RefreshTaskRunner

__all__ = ["RefreshBatchStats", "RefreshTaskRunner"]
