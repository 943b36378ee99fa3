"""
Catalog entities.

Entities representing catalog items (movies and TV shows) and the
collections they own: episodes, alternative titles and genres.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class MediaType(str, Enum):
    """Kind of catalog item."""

    MOVIE = "movie"
    TV = "tv"

    @classmethod
    def parse(cls, value: "str | MediaType") -> "MediaType":
        """
        Normalize a media type coming from a caller or a legacy export.

        Accepts the plural form used by file-parser payloads ("movies").

        Raises:
            ValueError: If the value is not a known media type
        """
        if isinstance(value, MediaType):
            return value
        normalized = value.strip().lower()
        if normalized in ("movie", "movies"):
            return cls.MOVIE
        if normalized in ("tv", "tvshow", "tvshows"):
            return cls.TV
        raise ValueError(f"Unknown media type: {value!r}")


@dataclass
class Item:
    """
    A movie or TV show in the catalog.

    Attributes:
        id: Internal database ID
        tmdb_id: Provider ID (TMDB), immutable once set, None for file-parser placeholders
        media_type: Movie or TV show
        title: Localized title
        original_title: Original language title
        slug: URL-safe form of the title
        overview: Plot summary
        homepage: Official homepage URL
        youtube_key: YouTube key of the trailer
        poster: Poster path on the TMDB CDN
        backdrop: Backdrop path on the TMDB CDN
        released: Release date (first air date for TV shows)
        imdb_id: IMDb ID used to fetch the external rating
        tmdb_rating: TMDB vote average
        imdb_rating: IMDb rating
        rating: Personal rating, 0 means unrated
        watchlist: Queued to watch
        is_historic: No longer relevant for recency based views
        last_seen_at: Last time the item was seen or rated
        created_at: Creation timestamp
        refreshed_at: Last metadata refresh
        src: Local file path (file-parser)
        fp_name: File-parser name
        subtitles: Local subtitles path
    """

    id: Optional[int] = None
    tmdb_id: Optional[int] = None
    media_type: MediaType = MediaType.MOVIE
    title: str = ""
    original_title: Optional[str] = None
    slug: Optional[str] = None
    overview: Optional[str] = None
    homepage: Optional[str] = None
    youtube_key: Optional[str] = None
    poster: Optional[str] = None
    backdrop: Optional[str] = None
    released: Optional[datetime] = None
    imdb_id: Optional[str] = None
    tmdb_rating: Optional[float] = None
    imdb_rating: Optional[float] = None
    rating: int = 0
    watchlist: bool = False
    is_historic: bool = False
    last_seen_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    refreshed_at: Optional[datetime] = None
    src: Optional[str] = None
    fp_name: Optional[str] = None
    subtitles: Optional[str] = None


@dataclass
class Episode:
    """
    Individual episode of a TV show.

    Episodes reference their show by provider ID, not by internal ID.

    Attributes:
        id: Internal database ID
        tmdb_id: Provider ID of the owning show
        season_number: Season number
        episode_number: Episode number within season
        name: Episode title
        air_date: Original air date
        episode_tmdb_id: Provider ID of the episode
        season_tmdb_id: Provider ID of the season
        seen: Watched by the user (local, provider independent)
        src: Local file path (file-parser)
        fp_name: File-parser name
        subtitles: Local subtitles path
    """

    id: Optional[int] = None
    tmdb_id: Optional[int] = None
    season_number: int = 0
    episode_number: int = 0
    name: str = ""
    air_date: Optional[date] = None
    episode_tmdb_id: Optional[int] = None
    season_tmdb_id: Optional[int] = None
    seen: bool = False
    src: Optional[str] = None
    fp_name: Optional[str] = None
    subtitles: Optional[str] = None

    @property
    def number(self) -> tuple[int, int]:
        """Season and episode number pair."""
        return (self.season_number, self.episode_number)


@dataclass
class AlternativeTitle:
    """Alternative title of an item (localized release title)."""

    id: Optional[int] = None
    tmdb_id: Optional[int] = None
    title: str = ""
    country: Optional[str] = None


@dataclass
class Genre:
    """Genre known by the provider (ID shared across movies and TV)."""

    id: int
    name: str
