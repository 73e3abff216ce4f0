"""
Client TMDB pour la recherche de films, de series et d'episodes.

Implemente l'interface IMetadataProvider pour TMDB (The Movie Database).
Utilise le cache persistant et le mecanisme de retry pour gerer
le rate limiting.

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache)
    movies = await client.search_movie("Interstellar")
    episodes = await client.get_season_episodes("1396", 1)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from homeflix.adapters.api.cache import APICache
from homeflix.adapters.api.retry import request_with_retry
from homeflix.core.ports.api_clients import (
    EpisodeCandidate,
    IMetadataProvider,
    MovieCandidate,
    SeriesCandidate,
)


class TMDBClient(IMetadataProvider):
    """
    Client API TMDB pour les metadonnees de films et series.

    Implemente IMetadataProvider avec:
    - Recherche de films et de series par titre
    - Liste des episodes d'une saison
    - Construction des URLs d'images
    - Cache persistant (24h recherches, 7j saisons)
    - Retry automatique sur rate limiting (429)

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_IMAGE_BASE_URL: URL de base des images (la taille est ajoutee)
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        language: str = "de-DE",
        include_adult: bool = True,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB v3 ou Read Access Token v4
            cache: Instance APICache pour le caching des resultats
            language: Langue des metadonnees (ex: "de-DE", "en-US")
            include_adult: Inclure les contenus adultes dans les recherches
        """
        self._api_key = api_key
        self._cache = cache
        self._language = language
        self._include_adult = include_adult
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer

        Raises:
            ValueError: Si aucune cle API n'est configuree
        """
        if not self._api_key:
            raise ValueError("TMDB API key is not configured")

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
                timeout=30.0,
            )
        return self._client

    def _search_params(self, query: str) -> dict[str, str]:
        return {
            "query": query,
            "language": self._language,
            "include_adult": "true" if self._include_adult else "false",
        }

    async def search_movie(self, query: str) -> list[MovieCandidate]:
        """
        Recherche des films par titre.

        Utilise le pattern cache-first: verifie le cache AVANT de faire
        un appel API.

        Returns:
            Liste de MovieCandidate dans l'ordre de pertinence TMDB (vide si aucun resultat)
        """
        cache_key = f"tmdb:search_movie:{self._language}:{query}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        response = await request_with_retry(
            self._get_client(), "GET", "/search/movie", params=self._search_params(query)
        )
        data = response.json()

        results = [
            MovieCandidate(
                id=str(item["id"]),
                title=item.get("title") or item.get("original_title") or "",
                original_title=item.get("original_title"),
                overview=item.get("overview") or "",
                release_date=item.get("release_date") or "",
                genre_ids=tuple(item.get("genre_ids") or ()),
                original_language=item.get("original_language") or "",
                vote_average=float(item.get("vote_average") or 0),
                poster_path=item.get("poster_path"),
                backdrop_path=item.get("backdrop_path"),
            )
            for item in data.get("results", [])
        ]
        logger.debug(f"TMDB movie search '{query}': {len(results)} results")

        await self._cache.set_search(cache_key, results)
        return results

    async def search_series(self, query: str) -> list[SeriesCandidate]:
        """
        Recherche des series TV par titre.

        Returns:
            Liste de SeriesCandidate dans l'ordre de pertinence TMDB (vide si aucun resultat)
        """
        cache_key = f"tmdb:search_tv:{self._language}:{query}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        response = await request_with_retry(
            self._get_client(), "GET", "/search/tv", params=self._search_params(query)
        )
        data = response.json()

        results = [self._to_series_candidate(item) for item in data.get("results", [])]
        logger.debug(f"TMDB series search '{query}': {len(results)} results")

        await self._cache.set_search(cache_key, results)
        return results

    async def get_season_episodes(
        self, series_id: str, season_number: int
    ) -> list[EpisodeCandidate]:
        """
        Recupere la liste des episodes d'une saison.

        Args:
            series_id: ID TMDB de la serie
            season_number: Numero de saison

        Returns:
            Liste d'EpisodeCandidate, vide si la saison n'existe pas (404)
        """
        cache_key = f"tmdb:season:{self._language}:{series_id}:{season_number}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            response = await request_with_retry(
                self._get_client(),
                "GET",
                f"/tv/{series_id}/season/{season_number}",
                params={"language": self._language},
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return []
            raise

        data = response.json()
        episodes = [
            EpisodeCandidate(
                episode_number=int(item.get("episode_number") or 0),
                season_number=int(item.get("season_number") or season_number),
                name=item.get("name") or "",
                overview=item.get("overview") or "",
                air_date=item.get("air_date") or "",
                still_path=item.get("still_path"),
                vote_average=float(item.get("vote_average") or 0),
            )
            for item in data.get("episodes", [])
        ]

        await self._cache.set_season(cache_key, episodes)
        return episodes

    def image_url(self, image_path: str, size: str = "w500") -> str:
        """
        Construit l'URL absolue d'une image TMDB.

        "/abc.jpg" -> "https://image.tmdb.org/t/p/w500/abc.jpg"
        """
        if not image_path:
            return ""
        return f"{self.TMDB_IMAGE_BASE_URL}{size}{image_path}"

    @staticmethod
    def _to_series_candidate(item: dict[str, Any]) -> SeriesCandidate:
        return SeriesCandidate(
            id=str(item["id"]),
            name=item.get("name") or item.get("original_name") or "",
            original_name=item.get("original_name"),
            overview=item.get("overview") or "",
            first_air_date=item.get("first_air_date") or "",
            genre_ids=tuple(item.get("genre_ids") or ()),
            original_language=item.get("original_language") or "",
            origin_country=tuple(item.get("origin_country") or ()),
            popularity=float(item.get("popularity") or 0),
            vote_average=float(item.get("vote_average") or 0),
            vote_count=int(item.get("vote_count") or 0),
            poster_path=item.get("poster_path"),
            backdrop_path=item.get("backdrop_path"),
        )

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
