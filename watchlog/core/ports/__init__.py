"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance des données
- IItemRepository, IEpisodeRepository, IAlternativeTitleRepository, IGenreRepository
- ISettingRepository : Lecture des réglages globaux (AppSettings)
- ITransactionManager : Frontière transactionnelle

Ports client API : Contrats pour les services externes
- IMetadataProvider : Détails, vidéos, saisons, titres alternatifs, genres (TMDB)
- IRatingProvider : Note externe (IMDb)

Autres ports :
- IAssetStore : Téléchargement et suppression des images
- ITaskSink : Soumission des rafraîchissements en tâche de fond
"""

from watchlog.core.ports.api_clients import (
    IMetadataProvider,
    IRatingProvider,
    ProviderAlternativeTitle,
    ProviderDetails,
    ProviderEpisode,
)
from watchlog.core.ports.assets import IAssetStore
from watchlog.core.ports.repositories import (
    AppSettings,
    IAlternativeTitleRepository,
    IEpisodeRepository,
    IGenreRepository,
    IItemRepository,
    ISettingRepository,
    ITransactionManager,
)
from watchlog.core.ports.tasks import ITaskSink

__all__ = [
    # Repositories
    "AppSettings",
    "IAlternativeTitleRepository",
    "IEpisodeRepository",
    "IGenreRepository",
    "IItemRepository",
    "ISettingRepository",
    "ITransactionManager",
    # Clients API
    "IMetadataProvider",
    "IRatingProvider",
    "ProviderAlternativeTitle",
    "ProviderDetails",
    "ProviderEpisode",
    # Autres
    "IAssetStore",
    "ITaskSink",
]
