"""
Cache persistant pour les API externes avec TTL differencies.

Le cache utilise diskcache pour la persistence sur disque, ce qui permet
de conserver les donnees entre les redemarrages de l'application.

Seules les donnees qui changent rarement sont cachees : les details et
les saisons ne le sont jamais, un rafraichissement doit toujours voir
l'etat courant de TMDB.

TTL par defaut:
- Videos de repli (VIDEOS_TTL): 24 heures
- Listes de genres (GENRES_TTL): 7 jours
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_videos("tmdb:videos:movie:550:en", ("SUXWAEX2jlg",))
        data = await cache.get("tmdb:videos:movie:550:en")
    """

    VIDEOS_TTL = 24 * 60 * 60  # 24 heures en secondes (86400)
    GENRES_TTL = 7 * 24 * 60 * 60  # 7 jours en secondes (604800)

    def __init__(self, cache_dir: str | Path = ".cache/api") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    async def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Returns:
            La valeur stockee ou None si absente ou expiree
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """
        Stocke une valeur dans le cache avec un TTL.

        Args:
            key: Cle unique identifiant la donnee
            value: Valeur a stocker (doit etre serializable)
            ttl: Duree de vie en secondes
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_videos(self, key: str, value: Any) -> None:
        """Stocke des cles de videos (TTL de 24h)."""
        await self.set(key, value, self.VIDEOS_TTL)

    async def set_genres(self, key: str, value: Any) -> None:
        """Stocke une liste de genres (TTL de 7 jours)."""
        await self.set(key, value, self.GENRES_TTL)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
