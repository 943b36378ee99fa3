"""
Implementations SQLModel des repositories.
"""

from watchlog.infrastructure.persistence.repositories.alternative_title_repository import (
    SQLModelAlternativeTitleRepository,
)
from watchlog.infrastructure.persistence.repositories.episode_repository import (
    SQLModelEpisodeRepository,
)
from watchlog.infrastructure.persistence.repositories.genre_repository import (
    SQLModelGenreRepository,
)
from watchlog.infrastructure.persistence.repositories.item_repository import (
    SQLModelItemRepository,
)
from watchlog.infrastructure.persistence.repositories.setting_repository import (
    SQLModelSettingRepository,
)

__all__ = [
    "SQLModelAlternativeTitleRepository",
    "SQLModelEpisodeRepository",
    "SQLModelGenreRepository",
    "SQLModelItemRepository",
    "SQLModelSettingRepository",
]
