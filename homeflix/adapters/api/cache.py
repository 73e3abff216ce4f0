"""
Cache persistant des reponses TMDB avec TTL differencies.

Le cache utilise diskcache pour la persistence sur disque : un second scan
de la meme mediatheque ne refait pas les recherches deja resolues.

TTL par defaut:
- Recherches (SEARCH_TTL): 24 heures
- Saisons (SEASON_TTL): 7 jours - la liste des episodes d'une saison change rarement
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les appels TMDB.

    Les operations diskcache (bloquantes) passent par run_in_executor.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_search("tmdb:search_movie:dune", results)
        data = await cache.get("tmdb:search_movie:dune")
    """

    SEARCH_TTL = 24 * 60 * 60  # 24 heures en secondes (86400)
    SEASON_TTL = 7 * 24 * 60 * 60  # 7 jours en secondes (604800)

    def __init__(self, cache_dir: str | Path = ".cache/api") -> None:
        """
        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    async def get(self, key: str) -> Optional[Any]:
        """Recupere une valeur, ou None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur avec une duree de vie en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke un resultat de recherche (TTL de 24h)."""
        await self.set(key, value, self.SEARCH_TTL)

    async def set_season(self, key: str, value: Any) -> None:
        """Stocke la liste des episodes d'une saison (TTL de 7 jours)."""
        await self.set(key, value, self.SEASON_TTL)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache."""
        self._cache.close()
