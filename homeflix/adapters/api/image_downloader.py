"""
Telechargement des affiches et images de fond TMDB vers le stockage local.

Arborescence produite (servie sous /data):
    <assets_dir>/posters/<titre_nettoye>/poster.jpg
    <assets_dir>/posters/<titre_nettoye>/S1E2.jpg
    <assets_dir>/backdrops/<titre_nettoye>/backdrop.jpg
"""

import os
import tempfile
from functools import partial
from pathlib import Path
from typing import Optional

import httpx
from loguru import logger

from homeflix.core.ports.api_clients import AssetKind, IImageDownloader, IMetadataProvider
from homeflix.utils.constants import ASSETS_URL_PREFIX, BACKDROPS_DIR, POSTERS_DIR
from homeflix.utils.helpers import run_blocking, sanitize_folder_name

_KIND_DIRS = {
    AssetKind.POSTER: POSTERS_DIR,
    AssetKind.BACKDROP: BACKDROPS_DIR,
}


def _is_present(path: Path) -> bool:
    return path.is_file() and path.stat().st_size > 0


class ImageDownloader(IImageDownloader):
    """
    Telecharge une image du fournisseur une seule fois par emplacement local.

    Un fichier deja present et non vide n'est pas retelecharge. L'ecriture
    passe par un fichier temporaire renomme a la fin (os.replace), un
    telechargement interrompu ne laisse donc jamais d'image tronquee.

    Les erreurs HTTP et disque remontent a l'appelant.
    """

    def __init__(
        self,
        assets_dir: Path,
        provider: IMetadataProvider,
        image_size: str = "w500",
    ) -> None:
        self._assets_dir = Path(assets_dir)
        self._provider = provider
        self._image_size = image_size
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=60.0, follow_redirects=True)
        return self._client

    def local_path(self, media_title: str, kind: AssetKind, filename: str) -> Path:
        """Chemin disque de l'image pour un titre donne."""
        return self._assets_dir / _KIND_DIRS[kind] / sanitize_folder_name(media_title) / filename

    @staticmethod
    def url_path(media_title: str, kind: AssetKind, filename: str) -> str:
        """Chemin URL sous lequel l'image est servie."""
        folder = sanitize_folder_name(media_title)
        return f"{ASSETS_URL_PREFIX}/{_KIND_DIRS[kind]}/{folder}/{filename}"

    async def download(
        self,
        image_path: str,
        media_title: str,
        kind: AssetKind,
        filename: str,
    ) -> str:
        """
        Telecharge l'image si necessaire et retourne son chemin URL local.

        Chaque appel ecrit dans son propre fichier temporaire: deux
        telechargements simultanes de la meme image aboutissent tous les deux,
        le dernier os.replace gagne.

        Raises:
            httpx.HTTPError: Si le telechargement echoue
            OSError: Si l'ecriture sur disque echoue
        """
        target = self.local_path(media_title, kind, filename)
        url_path = self.url_path(media_title, kind, filename)

        if await run_blocking(_is_present, target):
            logger.debug(f"Image already present: {target}")
            return url_path

        await run_blocking(partial(target.parent.mkdir, parents=True, exist_ok=True))
        url = self._provider.image_url(image_path, self._image_size)

        tmp_path: Optional[Path] = None
        try:
            async with self._get_client().stream("GET", url) as response:
                response.raise_for_status()
                tmp_file = await run_blocking(
                    partial(
                        tempfile.NamedTemporaryFile,
                        dir=target.parent,
                        prefix=f".{target.name}.",
                        suffix=".part",
                        delete=False,
                    )
                )
                tmp_path = Path(tmp_file.name)
                with tmp_file:
                    async for chunk in response.aiter_bytes():
                        await run_blocking(tmp_file.write, chunk)
            await run_blocking(os.replace, tmp_path, target)
            tmp_path = None
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        logger.info(f"Downloaded {kind.value} for '{media_title}': {url_path}")
        return url_path

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
