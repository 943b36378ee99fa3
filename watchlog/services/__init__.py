"""
Services applicatifs du catalogue.

- ItemSyncService : creation, rafraichissement et requetes des items
- EpisodeSyncService : episodes des series
- GenreSyncService : genres TMDB et liens avec les items
- AlternativeTitleSyncService : titres alternatifs
"""

from watchlog.services.alternative_title_syncer import AlternativeTitleSyncService
from watchlog.services.episode_sync import EpisodeSyncService
from watchlog.services.genre_syncer import GenreSyncService
from watchlog.services.item_sync import ItemSyncService

__all__ = [
    "AlternativeTitleSyncService",
    "EpisodeSyncService",
    "GenreSyncService",
    "ItemSyncService",
]
