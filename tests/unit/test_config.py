"""
Tests unitaires pour Settings et configure_logging.
"""

import json
from pathlib import Path

import pytest
from loguru import logger

from watchlog.config import Settings
from watchlog.logging_config import configure_logging


class TestSettings:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WATCHLOG_LOADING_ITEMS", "50")
        monkeypatch.setenv("WATCHLOG_TMDB_LANGUAGE", "fr")

        settings = Settings()

        assert settings.loading_items == 50
        assert settings.tmdb_language == "fr"

    def test_paths_are_expanded(self) -> None:
        settings = Settings(assets_dir="~/watchlog-assets")

        assert settings.assets_dir == Path.home() / "watchlog-assets"

    def test_tmdb_enabled(self, test_settings: Settings) -> None:
        assert test_settings.tmdb_enabled is True
        assert Settings(tmdb_api_key="").tmdb_enabled is False


def test_configure_logging_writes_json(test_settings: Settings) -> None:
    configure_logging(test_settings)
    logger.bind(tmdb_id=603).debug("Appel TMDB")
    # remove() vide la file d'attente du handler enqueue
    logger.remove()

    lines = test_settings.log_file.read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])["record"]
    assert record["message"] == "Appel TMDB"
    assert record["extra"]["tmdb_id"] == 603
    assert record["extra"]["app"] == "watchlog"
