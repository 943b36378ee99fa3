"""
Interface port pour le stockage des images (posters et backdrops).
"""

from abc import ABC, abstractmethod
from typing import Optional


class IAssetStore(ABC):
    """
    Interface de stockage des images d'un item.

    Les deux opérations sont "best-effort" : un échec est journalisé et
    n'annule jamais les écritures en base déjà validées.
    """

    @abstractmethod
    async def download_images(
        self, poster: Optional[str], backdrop: Optional[str]
    ) -> None:
        """Télécharge le poster et le backdrop (chemins TMDB) s'ils sont définis."""
        ...

    @abstractmethod
    def remove_images(self, poster: Optional[str], backdrop: Optional[str]) -> None:
        """Supprime les fichiers locaux du poster et du backdrop."""
        ...
