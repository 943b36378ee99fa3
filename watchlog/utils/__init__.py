"""
Utilitaires et constantes pour Watchlog.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from watchlog.utils.constants import (
    EMPTY_SLUG,
    FALLBACK_VIDEO_LANGUAGE,
    NEUTRAL_RATING,
)
from watchlog.utils.helpers import slugify, utcnow

__all__ = [
    "EMPTY_SLUG",
    "FALLBACK_VIDEO_LANGUAGE",
    "NEUTRAL_RATING",
    "slugify",
    "utcnow",
]
