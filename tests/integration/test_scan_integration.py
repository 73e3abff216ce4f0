"""
Tests d'integration du scan avec les vrais adaptateurs.

Container complet (systeme de fichiers, SQLite, cache disque, client TMDB,
telechargement d'images); seuls les serveurs TMDB sont simules par respx.
"""

import asyncio
from pathlib import Path

import httpx
import pytest
import respx
from dependency_injector import providers

from homeflix.config import Settings
from homeflix.container import Container
from homeflix.core.value_objects import MediaType
from homeflix.services.reconciler import ScanReport
from tests.conftest import create_media_file
from tests.fixtures.tmdb_responses import (
    TMDB_MOVIE_SEARCH_RESPONSE,
    TMDB_SEARCH_EMPTY_RESPONSE,
    TMDB_SEASON_RESPONSE,
    TMDB_TV_SEARCH_RESPONSE,
)

TMDB_API = "https://api.themoviedb.org/3"


@pytest.fixture
def container(test_settings: Settings):
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.database.init()
    yield container
    container.api_cache().close()
    container.engine().dispose()


async def run_scan(container: Container) -> ScanReport:
    with container.session() as session:
        service = container.reconciliation_service(
            media_repo=container.media_repository(session=session),
            series_repo=container.series_repository(session=session),
        )
        try:
            return await service.scan()
        finally:
            await container.tmdb_client().close()
            await container.image_downloader().close()


def mock_tmdb(router: respx.MockRouter) -> None:
    router.get(f"{TMDB_API}/search/movie").mock(
        return_value=httpx.Response(200, json=TMDB_MOVIE_SEARCH_RESPONSE)
    )
    router.get(f"{TMDB_API}/search/tv").mock(
        return_value=httpx.Response(200, json=TMDB_TV_SEARCH_RESPONSE)
    )
    router.get(f"{TMDB_API}/tv/1396/season/1").mock(
        return_value=httpx.Response(200, json=TMDB_SEASON_RESPONSE)
    )
    router.get(url__startswith="https://image.tmdb.org/t/p/w500/").mock(
        return_value=httpx.Response(200, content=b"\xff\xd8jpeg")
    )


class TestScanIntegrationFlow:
    """Scan complet d'une mediatheque films + series."""

    @pytest.mark.asyncio
    async def test_full_library_scan(
        self, container: Container, media_root: Path, test_settings: Settings
    ):
        movie = create_media_file(media_root / "Movies" / "GRP-Interstellar.mkv")
        pilot = create_media_file(
            media_root / "Series" / "Breaking Bad" / "Season 1" / "E01.mp4"
        )
        second = create_media_file(
            media_root / "Series" / "Breaking Bad" / "Season 1" / "E02.mp4"
        )

        with respx.mock as router:
            mock_tmdb(router)
            report = await run_scan(container)

        assert report.discovered == 3
        assert report.processed == 3
        assert report.failed == 0

        with container.session() as session:
            media_repo = container.media_repository(session=session)
            series_repo = container.series_repository(session=session)

            indexed_movie = media_repo.get_by_filepath(str(movie))
            assert indexed_movie.title == "Interstellar"
            assert indexed_movie.poster == "/data/posters/interstellar/poster.jpg"

            series = series_repo.get_by_title("Breaking Bad")
            assert series_repo.count() == 1
            episodes = media_repo.list_by_series(series.id)
            assert {e.filepath for e in episodes} == {str(pilot), str(second)}
            assert all(e.media_type == MediaType.EPISODE for e in episodes)

            indexed_second = media_repo.get_by_filepath(str(second))
            assert indexed_second.title == "Die Katze ist im Sack"
            # Episode sans capture: affiche de la serie
            assert indexed_second.poster == "/data/posters/breaking_bad/poster.jpg"

        assets = test_settings.assets_dir
        assert (assets / "posters" / "interstellar" / "poster.jpg").read_bytes() == b"\xff\xd8jpeg"
        assert (assets / "posters" / "breaking_bad" / "poster.jpg").exists()
        assert (assets / "posters" / "breaking_bad" / "S1E1.jpg").exists()
        assert (assets / "backdrops" / "breaking_bad" / "backdrop.jpg").exists()

    @pytest.mark.asyncio
    async def test_second_scan_is_idempotent(self, container: Container, media_root: Path):
        create_media_file(media_root / "Movies" / "GRP-Interstellar.mkv")

        with respx.mock(assert_all_called=False) as router:
            mock_tmdb(router)
            first = await run_scan(container)
        assert first.processed == 1

        # Aucune route: le second scan ne doit faire aucun appel HTTP
        with respx.mock:
            second = await run_scan(container)

        assert second.processed == 0
        assert second.skipped == 1

    @pytest.mark.asyncio
    async def test_new_file_uses_cached_search(self, container: Container, media_root: Path):
        """Un nouveau fichier du meme titre reutilise la recherche en cache."""
        create_media_file(media_root / "Movies" / "A-Interstellar.mkv")

        with respx.mock(assert_all_called=False) as router:
            router.get(f"{TMDB_API}/search/movie").mock(
                return_value=httpx.Response(200, json=TMDB_MOVIE_SEARCH_RESPONSE)
            )
            router.get(url__startswith="https://image.tmdb.org/").mock(
                return_value=httpx.Response(200, content=b"jpeg")
            )
            await run_scan(container)

        create_media_file(media_root / "Movies" / "B-Interstellar.mkv")
        with respx.mock:
            report = await run_scan(container)

        assert report.processed == 1
        assert report.skipped == 1

    @pytest.mark.asyncio
    async def test_unmatched_files_use_path_metadata(
        self, container: Container, media_root: Path
    ):
        movie = create_media_file(media_root / "Movies" / "X-Home Video 1998.mp4")

        with respx.mock:
            respx.get(f"{TMDB_API}/search/movie").mock(
                return_value=httpx.Response(200, json=TMDB_SEARCH_EMPTY_RESPONSE)
            )
            report = await run_scan(container)

        assert report.processed == 1
        with container.session() as session:
            item = container.media_repository(session=session).get_by_filepath(str(movie))
        assert item.title == "Home Video 1998"
        assert item.poster == ""

    @pytest.mark.asyncio
    async def test_two_copies_of_same_movie_share_poster(
        self, container: Container, media_root: Path, test_settings: Settings
    ):
        """Deux fichiers du meme film telechargent la meme affiche sans echec."""
        create_media_file(media_root / "Movies" / "A-Interstellar.mkv")
        create_media_file(media_root / "Movies" / "B-Interstellar.mp4")

        async def slow_chunks():
            for part in (b"\xff\xd8", b"jpeg"):
                await asyncio.sleep(0.01)
                yield part

        with respx.mock(assert_all_called=False) as router:
            router.get(f"{TMDB_API}/search/movie").mock(
                return_value=httpx.Response(200, json=TMDB_MOVIE_SEARCH_RESPONSE)
            )
            router.get(url__startswith="https://image.tmdb.org/").mock(
                side_effect=lambda request: httpx.Response(200, content=slow_chunks())
            )
            report = await run_scan(container)

        assert report.processed == 2
        assert report.failed == 0
        folder = test_settings.assets_dir / "posters" / "interstellar"
        assert [p.name for p in folder.iterdir()] == ["poster.jpg"]
        assert (folder / "poster.jpg").read_bytes() == b"\xff\xd8jpeg"
