"""Stockage des images du catalogue."""

from watchlog.adapters.assets.image_store import LocalImageStore

__all__ = ["LocalImageStore"]
