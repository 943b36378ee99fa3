"""
Clients API externes pour l'enrichissement des metadonnees.

Ce module fournit les adaptateurs pour communiquer avec les API externes:
- TMDB: details, videos, saisons, titres alternatifs et genres
- IMDb: notes des titres

Infrastructure partagee:
- APICache: Cache persistant avec TTL differencies (videos 24h, genres 7j)
- RateLimitError: Exception pour les erreurs 429
- request_with_retry: Requete avec backoff exponentiel sur rate limiting
"""

from watchlog.adapters.api.cache import APICache
from watchlog.adapters.api.imdb_client import IMDbRatingClient
from watchlog.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from watchlog.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "IMDbRatingClient",
    "RateLimitError",
    "TMDBClient",
    "request_with_retry",
    "with_retry",
]
