"""
Tests unitaires pour APICache.

Ces tests verifient:
- TTL differencies pour les videos (24h) et les genres (7j)
- Les entites Genre survivent a la serialisation disque
- Les entrees survivent a la reouverture du cache
"""

from pathlib import Path

import pytest

from watchlog.adapters.api.cache import APICache
from watchlog.core.entities.media import Genre


@pytest.fixture
def cache(tmp_path: Path) -> APICache:
    """Cree un cache avec un repertoire temporaire."""
    cache = APICache(cache_dir=tmp_path / "api_cache")
    yield cache
    cache.close()


def test_ttls() -> None:
    """Videos gardees 24h, genres 7 jours."""
    assert APICache.VIDEOS_TTL == 86400
    assert APICache.GENRES_TTL == 604800


@pytest.mark.asyncio
async def test_missing_key_returns_none(cache: APICache) -> None:
    assert await cache.get("tmdb:videos:movie:1:en") is None


@pytest.mark.asyncio
async def test_videos_are_stored(cache: APICache) -> None:
    await cache.set_videos("tmdb:videos:movie:603:en", ("vKQi3bBA1y8",))

    assert await cache.get("tmdb:videos:movie:603:en") == ("vKQi3bBA1y8",)


@pytest.mark.asyncio
async def test_genre_entities_survive_round_trip(cache: APICache) -> None:
    """Les listes de Genre sont picklees telles quelles par diskcache."""
    genres = [Genre(id=18, name="Drama"), Genre(id=28, name="Action")]

    await cache.set_genres("tmdb:genres:en", genres)

    assert await cache.get("tmdb:genres:en") == genres


@pytest.mark.asyncio
async def test_entries_survive_reopen(tmp_path: Path) -> None:
    first = APICache(cache_dir=tmp_path / "api_cache")
    await first.set_videos("tmdb:videos:tv:1399:en", ("KPLWWIOCOOQ",))
    first.close()

    second = APICache(cache_dir=tmp_path / "api_cache")
    try:
        assert await second.get("tmdb:videos:tv:1399:en") == ("KPLWWIOCOOQ",)
    finally:
        second.close()
