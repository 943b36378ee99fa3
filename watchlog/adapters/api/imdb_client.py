"""
Client IMDb pour la recuperation des notes.

Implemente l'interface IRatingProvider en lisant la note publiee sur la
page d'un titre IMDb (bloc JSON-LD aggregateRating).
"""

from typing import Optional

import httpx
from loguru import logger

from watchlog.adapters.api.retry import request_with_retry
from watchlog.core.ports.api_clients import IRatingProvider
from watchlog.utils.constants import IMDB_BASE_URL
from watchlog.utils.helpers import extract_rating


class IMDbRatingClient(IRatingProvider):
    """
    Client des notes IMDb.

    Un titre inconnu (404) ou sans note retourne None ; les autres erreurs
    HTTP et reseau sont propagees.
    """

    IMDB_BASE_URL = IMDB_BASE_URL

    def __init__(self, timeout: float = 20.0) -> None:
        """
        Initialise le client IMDb.

        Args:
            timeout: Delai maximum de chaque requete en secondes
        """
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.IMDB_BASE_URL,
                headers={
                    "Accept": "text/html",
                    "Accept-Language": "en-US,en;q=0.8",
                    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) watchlog/0.1",
                },
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    async def parse_rating(self, imdb_id: str) -> Optional[float]:
        """
        Recupere la note IMDb d'un titre.

        Args:
            imdb_id: ID IMDb (format ttXXXXXXX)

        Returns:
            La note, ou None si le titre est inconnu ou sans note
        """
        try:
            response = await request_with_retry(
                self._get_client(), "GET", f"/title/{imdb_id}/"
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                logger.debug("Titre IMDb introuvable", imdb_id=imdb_id)
                return None
            raise

        rating = extract_rating(response.text)
        logger.debug("Note IMDb", imdb_id=imdb_id, rating=rating)
        return rating

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
