"""
Stockage local des images TMDB (posters et backdrops).

Implemente IAssetStore : les images sont telechargees depuis le CDN TMDB
dans assets_dir/poster et assets_dir/backdrop, en conservant le nom de
fichier TMDB. Toutes les operations sont best-effort : un echec est
journalise et n'interrompt jamais l'operation appelante.
"""

from pathlib import Path
from typing import Optional

import httpx
from loguru import logger

from watchlog.core.ports.assets import IAssetStore
from watchlog.utils.constants import TMDB_IMAGE_BASE_URL


class LocalImageStore(IAssetStore):
    """
    Stockage des images sur le systeme de fichiers local.

    Example:
        store = LocalImageStore(assets_dir=Path("assets"))
        await store.download_images("/poster.jpg", "/backdrop.jpg")
        store.remove_images("/poster.jpg", "/backdrop.jpg")
    """

    def __init__(
        self,
        assets_dir: Path,
        poster_size: str = "w185",
        backdrop_size: str = "w1280",
        timeout: float = 20.0,
    ) -> None:
        """
        Initialise le stockage.

        Args:
            assets_dir: Repertoire racine des images
            poster_size: Taille TMDB des posters (ex: "w185", "w500")
            backdrop_size: Taille TMDB des backdrops (ex: "w1280", "original")
            timeout: Delai maximum d'un telechargement en secondes
        """
        self._assets_dir = Path(assets_dir)
        self._sizes = {"poster": poster_size, "backdrop": backdrop_size}
        self._timeout = timeout

    def path_for(self, kind: str, image_path: str) -> Path:
        """Chemin local d'une image ("poster" ou "backdrop")."""
        return self._assets_dir / kind / Path(image_path).name

    async def download_images(
        self, poster: Optional[str], backdrop: Optional[str]
    ) -> None:
        """Telecharge le poster et le backdrop s'ils ne sont pas deja presents."""
        candidates = (("poster", poster), ("backdrop", backdrop))
        wanted = [(kind, path) for kind, path in candidates if path]
        if not wanted:
            return

        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            for kind, image_path in wanted:
                await self._download(client, kind, image_path)

    async def _download(
        self, client: httpx.AsyncClient, kind: str, image_path: str
    ) -> None:
        """Telecharge une image en streaming, journalise les echecs."""
        destination = self.path_for(kind, image_path)
        if destination.exists():
            return

        url = f"{TMDB_IMAGE_BASE_URL}/{self._sizes[kind]}/{image_path.lstrip('/')}"
        partial_file = destination.with_suffix(destination.suffix + ".part")
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                with open(partial_file, "wb") as f:
                    async for chunk in response.aiter_bytes():
                        f.write(chunk)
            partial_file.replace(destination)
            logger.debug("Image telechargee", kind=kind, path=str(destination))
        except (httpx.HTTPError, OSError) as e:
            partial_file.unlink(missing_ok=True)
            logger.warning(f"Echec du telechargement de l'image {url}: {e}")

    def remove_images(self, poster: Optional[str], backdrop: Optional[str]) -> None:
        """Supprime les fichiers locaux, les fichiers absents sont ignores."""
        for kind, image_path in (("poster", poster), ("backdrop", backdrop)):
            if not image_path:
                continue
            target = self.path_for(kind, image_path)
            try:
                target.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Echec de la suppression de l'image {target}: {e}")
