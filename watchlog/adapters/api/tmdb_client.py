"""
Client TMDB pour la recuperation des metadonnees du catalogue.

Implemente l'interface IMetadataProvider pour TMDB (The Movie Database) :
details, videos, saisons, titres alternatifs et listes de genres.
Utilise le mecanisme de retry pour gerer le rate limiting et le cache
persistant pour les donnees qui changent rarement.

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache)
    details = await client.details(550, MediaType.MOVIE)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from watchlog.adapters.api.cache import APICache
from watchlog.adapters.api.retry import request_with_retry
from watchlog.core.entities.media import Genre, MediaType
from watchlog.core.exceptions import ConfigurationError
from watchlog.core.ports.api_clients import (
    IMetadataProvider,
    ProviderAlternativeTitle,
    ProviderDetails,
    ProviderEpisode,
)
from watchlog.utils.constants import TMDB_BASE_URL
from watchlog.utils.helpers import (
    clean_title,
    extract_imdb_id,
    parse_date,
    parse_timestamp,
)


class TMDBClient(IMetadataProvider):
    """
    Client API TMDB pour les metadonnees des films et series.

    Implemente IMetadataProvider avec:
    - Details complets (videos et IDs externes ajoutes a la reponse)
    - Videos dans une langue donnee (repli des bandes-annonces)
    - Episodes de toutes les saisons d'une serie
    - Titres alternatifs
    - Listes de genres films + series
    - Retry automatique sur rate limiting (429)

    Example:
        client = TMDBClient(api_key="xxx", cache=APICache())
        details = await client.details(1399, MediaType.TV)
        print(details.title, details.imdb_id)
        await client.close()
    """

    TMDB_BASE_URL = TMDB_BASE_URL

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        language: str = "en",
        timeout: float = 20.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4)
            cache: Instance APICache pour le caching des resultats
            language: Langue des metadonnees (ex: "en", "fr-FR")
            timeout: Delai maximum de chaque requete en secondes
        """
        self._api_key = api_key
        self._cache = cache
        self._language = language
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer

        Raises:
            ConfigurationError: Si aucune cle API n'est configuree
        """
        if not self._api_key:
            raise ConfigurationError("Cle API TMDB non configuree (WATCHLOG_TMDB_API_KEY)")

        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    async def _get_json(self, url: str, **params: Any) -> Optional[dict[str, Any]]:
        """GET JSON, None si la ressource n'existe pas (404)."""
        try:
            response = await request_with_retry(
                self._get_client(), "GET", url, params=params
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.debug("Ressource TMDB introuvable", url=url)
                return None
            raise
        return response.json()

    async def details(
        self, tmdb_id: int, media_type: MediaType
    ) -> Optional[ProviderDetails]:
        """
        Recupere les details complets d'un film ou d'une serie.

        Les videos sont ajoutees a la reponse ; pour les series, les IDs
        externes aussi (l'ID IMDb n'est pas dans le document principal).

        Returns:
            ProviderDetails, ou None si TMDB ne connait pas cet ID
        """
        append = "videos,external_ids" if media_type == MediaType.TV else "videos"
        data = await self._get_json(
            f"/{media_type.value}/{tmdb_id}",
            language=self._language,
            append_to_response=append,
        )
        if data is None:
            return None

        if media_type == MediaType.TV:
            title = clean_title(data.get("name"))
            original_title = data.get("original_name")
            release = data.get("first_air_date")
        else:
            title = clean_title(data.get("title"))
            original_title = data.get("original_title")
            release = data.get("release_date")

        videos = (data.get("videos") or {}).get("results") or []

        return ProviderDetails(
            id=int(data.get("id", tmdb_id)),
            title=title,
            original_title=original_title,
            overview=data.get("overview"),
            vote_average=data.get("vote_average"),
            backdrop_path=data.get("backdrop_path"),
            poster_path=data.get("poster_path"),
            homepage=data.get("homepage") or None,
            imdb_id=extract_imdb_id(data),
            release_date=parse_timestamp(parse_date(release)),
            genre_ids=tuple(
                int(genre["id"]) for genre in data.get("genres") or [] if "id" in genre
            ),
            video_keys=tuple(video["key"] for video in videos if video.get("key")),
        )

    async def videos(
        self, tmdb_id: int, media_type: MediaType, language: str
    ) -> tuple[str, ...]:
        """
        Recupere les cles des videos d'un media dans une langue donnee.

        Utilise le pattern cache-first (24h).
        """
        cache_key = f"tmdb:videos:{media_type.value}:{tmdb_id}:{language}"

        cached = await self._cache.get(cache_key)
        if cached is not None:
            return tuple(cached)

        data = await self._get_json(
            f"/{media_type.value}/{tmdb_id}/videos", language=language
        )
        keys = tuple(
            video["key"]
            for video in (data or {}).get("results") or []
            if video.get("key")
        )

        await self._cache.set_videos(cache_key, keys)
        return keys

    async def tv_episodes(self, tmdb_id: int) -> list[ProviderEpisode]:
        """
        Recupere les episodes de toutes les saisons d'une serie.

        La saison 0 (episodes speciaux) est ignoree.

        Returns:
            Liste plate des episodes, dans l'ordre des saisons
        """
        show = await self._get_json(f"/tv/{tmdb_id}", language=self._language)
        if show is None:
            return []

        season_numbers = sorted(
            season["season_number"]
            for season in show.get("seasons") or []
            if season.get("season_number", 0) > 0
        )

        episodes: list[ProviderEpisode] = []
        for season_number in season_numbers:
            season = await self._get_json(
                f"/tv/{tmdb_id}/season/{season_number}", language=self._language
            )
            if season is None:
                continue
            for episode in season.get("episodes") or []:
                episodes.append(
                    ProviderEpisode(
                        season_number=episode.get("season_number", season_number),
                        episode_number=episode["episode_number"],
                        name=clean_title(episode.get("name")) or "",
                        air_date=parse_date(episode.get("air_date")),
                        episode_tmdb_id=episode.get("id"),
                        season_tmdb_id=season.get("id"),
                    )
                )

        logger.debug(
            "Episodes TMDB recuperes",
            tmdb_id=tmdb_id,
            seasons=len(season_numbers),
            episodes=len(episodes),
        )
        return episodes

    async def alternative_titles(
        self, tmdb_id: int, media_type: MediaType
    ) -> list[ProviderAlternativeTitle]:
        """
        Recupere les titres alternatifs.

        TMDB les expose sous "titles" pour les films et "results" pour les series.
        """
        data = await self._get_json(f"/{media_type.value}/{tmdb_id}/alternative_titles")
        if data is None:
            return []

        entries = data.get("titles") if media_type == MediaType.MOVIE else data.get("results")
        titles = []
        for entry in entries or []:
            title = clean_title(entry.get("title"))
            if title:
                titles.append(
                    ProviderAlternativeTitle(title=title, country=entry.get("iso_3166_1"))
                )
        return titles

    async def genre_lists(self) -> list[Genre]:
        """
        Recupere les genres films et series, fusionnes par ID.

        Utilise le pattern cache-first (7 jours).
        """
        cache_key = f"tmdb:genres:{self._language}"

        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        genres: dict[int, Genre] = {}
        for media_type in (MediaType.MOVIE, MediaType.TV):
            data = await self._get_json(
                f"/genre/{media_type.value}/list", language=self._language
            )
            for entry in (data or {}).get("genres") or []:
                genre_id = int(entry["id"])
                genres.setdefault(genre_id, Genre(id=genre_id, name=entry.get("name", "")))

        result = list(genres.values())
        await self._cache.set_genres(cache_key, result)
        return result

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
