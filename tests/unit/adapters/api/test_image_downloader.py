"""
Tests unitaires pour ImageDownloader.

Le fournisseur est mocke pour la construction d'URL et respx intercepte
le telechargement des images.
"""

import asyncio
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
import respx

from homeflix.adapters.api.image_downloader import ImageDownloader
from homeflix.core.ports.api_clients import AssetKind, IMetadataProvider

IMAGE_URL = "https://image.tmdb.org/t/p/w500/poster.jpg"


async def slow_image_chunks():
    for part in (b"jpeg", b"data"):
        await asyncio.sleep(0.01)
        yield part


@pytest.fixture
def provider() -> MagicMock:
    provider = MagicMock(spec=IMetadataProvider)
    provider.image_url.side_effect = lambda path, size="w500": f"https://image.tmdb.org/t/p/{size}{path}"
    return provider


@pytest.fixture
def downloader(tmp_path: Path, provider: MagicMock) -> ImageDownloader:
    return ImageDownloader(assets_dir=tmp_path / "data", provider=provider)


class TestImageDownloaderPaths:
    """Tests des chemins disque et URL."""

    def test_local_path_uses_sanitized_title(self, downloader: ImageDownloader, tmp_path: Path):
        path = downloader.local_path("Breaking Bad", AssetKind.POSTER, "S1E2.jpg")
        assert path == tmp_path / "data" / "posters" / "breaking_bad" / "S1E2.jpg"

    def test_url_path_for_backdrop(self):
        assert (
            ImageDownloader.url_path("Dune: Part Two", AssetKind.BACKDROP, "backdrop.jpg")
            == "/data/backdrops/dune_part_two/backdrop.jpg"
        )


class TestImageDownloaderDownload:
    """Tests du telechargement."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_download_writes_file(self, downloader: ImageDownloader):
        respx.get(IMAGE_URL).mock(return_value=httpx.Response(200, content=b"jpegdata"))

        url_path = await downloader.download("/poster.jpg", "Interstellar", AssetKind.POSTER, "poster.jpg")

        assert url_path == "/data/posters/interstellar/poster.jpg"
        target = downloader.local_path("Interstellar", AssetKind.POSTER, "poster.jpg")
        assert target.read_bytes() == b"jpegdata"
        await downloader.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_existing_file_not_downloaded_again(self, downloader: ImageDownloader):
        """Une image deja presente n'est pas retelechargee."""
        target = downloader.local_path("Interstellar", AssetKind.POSTER, "poster.jpg")
        target.parent.mkdir(parents=True)
        target.write_bytes(b"old")

        url_path = await downloader.download("/poster.jpg", "Interstellar", AssetKind.POSTER, "poster.jpg")

        assert url_path == "/data/posters/interstellar/poster.jpg"
        assert target.read_bytes() == b"old"

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_file_is_replaced(self, downloader: ImageDownloader):
        target = downloader.local_path("Interstellar", AssetKind.POSTER, "poster.jpg")
        target.parent.mkdir(parents=True)
        target.touch()
        respx.get(IMAGE_URL).mock(return_value=httpx.Response(200, content=b"jpegdata"))

        await downloader.download("/poster.jpg", "Interstellar", AssetKind.POSTER, "poster.jpg")

        assert target.read_bytes() == b"jpegdata"
        await downloader.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_propagates_without_partial_file(self, downloader: ImageDownloader):
        """Un echec HTTP remonte et ne laisse ni image ni fichier temporaire."""
        respx.get(IMAGE_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(httpx.HTTPStatusError):
            await downloader.download("/poster.jpg", "Interstellar", AssetKind.POSTER, "poster.jpg")

        folder = downloader.local_path("Interstellar", AssetKind.POSTER, "poster.jpg").parent
        assert list(folder.iterdir()) == []
        await downloader.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_concurrent_downloads_of_same_target(self, downloader: ImageDownloader):
        """Deux telechargements simultanes de la meme image reussissent tous les deux."""
        respx.get(IMAGE_URL).mock(
            side_effect=lambda request: httpx.Response(200, content=slow_image_chunks())
        )

        results = await asyncio.gather(
            downloader.download("/poster.jpg", "Interstellar", AssetKind.POSTER, "poster.jpg"),
            downloader.download("/poster.jpg", "Interstellar", AssetKind.POSTER, "poster.jpg"),
        )

        assert results == ["/data/posters/interstellar/poster.jpg"] * 2
        target = downloader.local_path("Interstellar", AssetKind.POSTER, "poster.jpg")
        assert target.read_bytes() == b"jpegdata"
        assert [p.name for p in target.parent.iterdir()] == ["poster.jpg"]
        await downloader.close()

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self, downloader: ImageDownloader):
        await downloader.close()
        assert downloader._client is None
