"""
Clients API externes pour l'enrichissement des metadonnees.

Ce module fournit les adaptateurs pour communiquer avec TMDB:
- TMDBClient: recherche de films, de series et episodes d'une saison
- ImageDownloader: telechargement des affiches vers assets_dir

Infrastructure partagee:
- APICache: Cache persistant avec TTL differencies (recherche 24h, saisons 7j)
- RateLimitError: Exception pour les erreurs 429
- with_retry / request_with_retry: backoff exponentiel sur rate limiting
"""

from homeflix.adapters.api.cache import APICache
from homeflix.adapters.api.image_downloader import ImageDownloader
from homeflix.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from homeflix.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "ImageDownloader",
    "RateLimitError",
    "TMDBClient",
    "request_with_retry",
    "with_retry",
]
