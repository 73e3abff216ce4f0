"""
Routes de l'API catalogue : /api/media.

Consultation (liste paginée, recherche, genres, favoris, vus, statistiques),
mutations utilisateur (favori, vu, position de lecture), lancement du scan
et streaming des fichiers avec support des requêtes Range.
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse, PlainTextResponse, StreamingResponse
from loguru import logger
from pydantic import BaseModel, Field

from ...core.exceptions import ScanInProgressError
from ...services.catalog import CatalogService
from ...services.streaming import iter_file, parse_range_header
from ...utils.constants import ASSETS_URL_PREFIX, VIDEO_CONTENT_TYPE
from ..deps import get_catalog, get_container
from ..serializers import (
    media_to_json,
    pagination_to_json,
    search_group_to_json,
    series_to_json,
    stats_to_json,
)

router = APIRouter(prefix="/api/media", tags=["media"])


class PositionUpdate(BaseModel):
    """Corps de la requête de mise à jour de la position de lecture."""

    position: int = Field(ge=0, description="Position de lecture en secondes")


@router.get("")
def list_media(
    genre: Optional[str] = None,
    media_type: Optional[str] = Query(None, alias="mediaType"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    catalog: CatalogService = Depends(get_catalog),
):
    """Liste paginée des séries avec leurs épisodes."""
    result = catalog.list_series(genre=genre, media_type=media_type, page=page, limit=limit)
    logger.info(f"Fetched {len(result.items)} series (page {page})")
    return {
        "series": [series_to_json(entry) for entry in result.items],
        "pagination": pagination_to_json(result.pagination),
    }


@router.post("/scan", response_class=PlainTextResponse)
async def scan_media(request: Request) -> str:
    """Scanne la médiathèque et catalogue les nouveaux fichiers."""
    lock = request.app.state.scan_lock
    if lock.locked():
        raise ScanInProgressError()

    async with lock:
        container = get_container(request)
        with container.session() as session:
            service = container.reconciliation_service(
                media_repo=container.media_repository(session=session),
                series_repo=container.series_repository(session=session),
            )
            report = await service.scan()
    return report.summary()


@router.get("/genres")
def list_genres(catalog: CatalogService = Depends(get_catalog)) -> list[str]:
    """Noms de genre distincts, triés."""
    return catalog.genres()


@router.get("/search")
def search_media(
    q: str = "",
    catalog: CatalogService = Depends(get_catalog),
):
    """Recherche dans le titre, la description et le nom de fichier."""
    result = catalog.search(q)
    logger.info(
        f"Search '{q}': {len(result.movies)} movies, {len(result.series)} series"
    )
    return {
        "movies": [media_to_json(item) for item in result.movies],
        "series": [search_group_to_json(group) for group in result.series],
    }


@router.get("/favorites")
def list_favorites(catalog: CatalogService = Depends(get_catalog)):
    return [media_to_json(item) for item in catalog.favorites()]


@router.get("/watched")
def list_watched(catalog: CatalogService = Depends(get_catalog)):
    return [media_to_json(item) for item in catalog.watched()]


@router.get("/stats")
def get_stats(catalog: CatalogService = Depends(get_catalog)):
    return stats_to_json(catalog.stats())


@router.get("/stream/{media_id}")
def stream_media(
    media_id: int,
    request: Request,
    catalog: CatalogService = Depends(get_catalog),
):
    """
    Diffuse un fichier vidéo.

    Sans header Range : 200 et fichier complet. Avec Range : 206 et la
    plage demandée, ou 416 si elle sort du fichier.
    """
    item = catalog.get_media(media_id)
    path = Path(item.filepath)
    try:
        file_size = path.stat().st_size
    except FileNotFoundError:
        logger.warning(f"Media file missing on disk for id={media_id}: {path}")
        raise HTTPException(status_code=404, detail="Media file not found")

    byte_range = parse_range_header(request.headers.get("range"), file_size)
    if byte_range is None:
        logger.info(f"Streaming full media id={media_id}")
        return StreamingResponse(
            iter_file(path),
            status_code=200,
            media_type=VIDEO_CONTENT_TYPE,
            headers={
                "Content-Length": str(file_size),
                "Accept-Ranges": "bytes",
            },
        )

    logger.info(f"Streaming media id={media_id} range={byte_range.start}-{byte_range.end}")
    return StreamingResponse(
        iter_file(path, byte_range.start, byte_range.end),
        status_code=206,
        media_type=VIDEO_CONTENT_TYPE,
        headers={
            "Content-Range": byte_range.content_range,
            "Content-Length": str(byte_range.length),
            "Accept-Ranges": "bytes",
        },
    )


@router.patch("/{media_id}/favorite")
def toggle_favorite(media_id: int, catalog: CatalogService = Depends(get_catalog)):
    catalog.toggle_favorite(media_id)
    logger.info(f"Toggled favorite for media id={media_id}")
    return {"message": "Favorite status toggled"}


@router.patch("/{media_id}/watch")
def toggle_watched(media_id: int, catalog: CatalogService = Depends(get_catalog)):
    catalog.toggle_watched(media_id)
    logger.info(f"Toggled watched for media id={media_id}")
    return {"message": "Watched status toggled"}


@router.put("/{media_id}/position")
def update_position(
    media_id: int,
    body: PositionUpdate,
    catalog: CatalogService = Depends(get_catalog),
):
    catalog.update_position(media_id, body.position)
    logger.info(f"Updated playback position for media id={media_id} to {body.position}")
    return {"message": "Playback position updated"}


@router.get("/{media_id}/position")
def get_position(media_id: int, catalog: CatalogService = Depends(get_catalog)):
    position, last_played = catalog.get_position(media_id)
    return {
        "playback_position": position,
        "last_played": last_played.isoformat() if last_played else None,
    }


@router.get("/{media_id}/poster")
def get_poster(
    media_id: int,
    request: Request,
    catalog: CatalogService = Depends(get_catalog),
):
    """Image de l'affiche téléchargée, 404 si absente."""
    item = catalog.get_media(media_id)
    prefix = f"{ASSETS_URL_PREFIX}/"
    if not item.poster.startswith(prefix):
        raise HTTPException(status_code=404, detail="Poster not found")

    assets_dir = get_container(request).config().assets_dir.resolve()
    poster_path = (assets_dir / item.poster[len(prefix):]).resolve()
    if assets_dir not in poster_path.parents or not poster_path.is_file():
        raise HTTPException(status_code=404, detail="Poster not found")
    return FileResponse(poster_path)
