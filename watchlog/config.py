"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe WATCHLOG_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle - l'enrichissement échoue explicitement si elle manque.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de watchlog/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe WATCHLOG_.
    Exemple : WATCHLOG_LOADING_ITEMS=50

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="WATCHLOG_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///watchlog.db")

    # TMDB
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="en")

    # Images (posters et backdrops téléchargés localement)
    assets_dir: Path = Field(default=Path("~/.local/share/watchlog/assets"))
    poster_size: str = Field(default="w185")
    backdrop_size: str = Field(default="w1280")

    # Appels réseau
    http_timeout: float = Field(default=20.0, gt=0)
    cache_dir: Path = Field(default=Path(".cache/api"))

    # Catalogue
    loading_items: int = Field(default=30, ge=1)
    refresh_concurrency: int = Field(default=4, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/watchlog.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("assets_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)
