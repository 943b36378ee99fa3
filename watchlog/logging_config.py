"""
Configuration du logging via loguru.

Deux sorties : la console (coloree, niveau choisi par l'utilisateur) et un
fichier JSON avec rotation qui garde aussi les appels TMDB/IMDb logues en DEBUG.
"""

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from watchlog.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: "Settings") -> None:
    """Remplace les handlers loguru par ceux decrits dans les parametres."""
    settings.log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.configure(
        handlers=[
            {
                "sink": sys.stderr,
                "level": settings.log_level.upper(),
                "format": CONSOLE_FORMAT,
                "colorize": True,
            },
            {
                "sink": settings.log_file,
                "level": "DEBUG",
                "serialize": True,
                "rotation": settings.log_rotation_size,
                "retention": settings.log_retention_count,
                "compression": "zip",
                "enqueue": True,
            },
        ],
        extra={"app": "watchlog"},
    )

    logger.debug(f"Logs ecrits dans {settings.log_file}")
