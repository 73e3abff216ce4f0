"""
Tests unitaires pour APICache.

Ces tests verifient:
- Stockage et recuperation de valeurs
- TTL differencies pour recherche (24h) et saisons (7j)
- Operations asynchrones non-bloquantes
- Persistance des candidats TMDB (dataclasses)
"""

import asyncio
from pathlib import Path

import pytest

from homeflix.adapters.api.cache import APICache
from homeflix.core.ports.api_clients import EpisodeCandidate, MovieCandidate


class TestAPICache:
    """Tests pour la classe APICache."""

    @pytest.fixture
    def cache(self, tmp_path: Path) -> APICache:
        """Cree un cache avec un repertoire temporaire."""
        cache = APICache(cache_dir=tmp_path / "test_cache")
        yield cache
        cache.close()

    @pytest.mark.asyncio
    async def test_get_returns_none_for_missing_key(self, cache: APICache) -> None:
        assert await cache.get("nonexistent_key") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: APICache) -> None:
        await cache.set("test_key", {"title": "Interstellar"}, ttl=3600)
        assert await cache.get("test_key") == {"title": "Interstellar"}

    def test_search_ttl_uses_24_hours(self) -> None:
        assert APICache.SEARCH_TTL == 86400

    def test_season_ttl_uses_7_days(self) -> None:
        assert APICache.SEASON_TTL == 604800

    @pytest.mark.asyncio
    async def test_empty_search_result_is_cached(self, cache: APICache) -> None:
        """Une recherche sans resultat est mise en cache (distincte d'un miss)."""
        await cache.set_search("tmdb:search_movie:de-DE:xyz", [])
        assert await cache.get("tmdb:search_movie:de-DE:xyz") == []

    @pytest.mark.asyncio
    async def test_stores_candidates(self, cache: APICache) -> None:
        movies = [MovieCandidate(id="157336", title="Interstellar", genre_ids=(12, 18))]
        episodes = [EpisodeCandidate(episode_number=1, season_number=1, name="Pilot")]

        await cache.set_search("movies", movies)
        await cache.set_season("season", episodes)

        assert await cache.get("movies") == movies
        assert await cache.get("season") == episodes

    @pytest.mark.asyncio
    async def test_clear_removes_all_entries(self, cache: APICache) -> None:
        await cache.set("key1", "value1", ttl=3600)
        await cache.set("key2", "value2", ttl=3600)

        await cache.clear()

        assert await cache.get("key1") is None
        assert await cache.get("key2") is None

    @pytest.mark.asyncio
    async def test_async_operations_dont_block(self, cache: APICache) -> None:
        """Plusieurs operations peuvent etre lancees en parallele."""
        keys = [f"key_{i}" for i in range(10)]
        values = [f"value_{i}" for i in range(10)]

        await asyncio.gather(*[cache.set(k, v, ttl=3600) for k, v in zip(keys, values)])
        results = await asyncio.gather(*[cache.get(k) for k in keys])

        assert results == values
