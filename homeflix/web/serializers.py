"""
Conversion des entités du catalogue en JSON.

Les noms de champs (mediaType, seriesId, totalPages...) sont ceux attendus
par les clients existants de l'API.
"""

from typing import Any

from ..core.entities.media import MediaItem
from ..core.ports.repositories import CatalogStats
from ..services.catalog import Pagination, SearchSeriesGroup, SeriesWithEpisodes
from ..utils.constants import SEARCH_SERIES_MEDIA_TYPE

_BYTES_PER_GB = 1024**3


def media_to_json(item: MediaItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "filename": item.filename,
        "filepath": item.filepath,
        "filesize": item.filesize,
        "title": item.title,
        "mediaType": item.media_type.value,
        "description": item.description,
        "poster": item.poster,
        "year": item.year,
        "genre": item.genre,
        "language": item.language,
        "rating": item.rating,
        "watched": item.watched,
        "favorite": item.favorite,
        "playback_position": item.playback_position,
        "last_played": item.last_played.isoformat() if item.last_played else None,
        "seriesId": item.series_id,
    }


def series_to_json(entry: SeriesWithEpisodes) -> dict[str, Any]:
    series = entry.series
    return {
        "id": series.id,
        "title": series.title,
        "overview": series.overview,
        "genre": series.genre,
        "poster": series.poster_path,
        "backdrop": series.backdrop_path,
        "mediaType": series.media_type,
        "episodes": [media_to_json(item) for item in entry.episodes],
    }


def pagination_to_json(pagination: Pagination) -> dict[str, Any]:
    return {
        "total": pagination.total,
        "totalPages": pagination.total_pages,
        "currentPage": pagination.current_page,
        "limit": pagination.limit,
        "hasNextPage": pagination.has_next_page,
        "hasPrevPage": pagination.has_prev_page,
    }


def search_group_to_json(group: SearchSeriesGroup) -> dict[str, Any]:
    return {
        "name": group.name,
        "overview": group.overview,
        "poster": group.poster,
        "year": group.year,
        "genre": group.genre,
        "rating": group.rating,
        "mediaType": SEARCH_SERIES_MEDIA_TYPE,
        "episodes": [media_to_json(item) for item in group.episodes],
    }


def stats_to_json(stats: CatalogStats) -> dict[str, Any]:
    return {
        "total": stats.total,
        "watched": stats.watched,
        "favorites": stats.favorites,
        "totalSizeGB": stats.total_size_bytes / _BYTES_PER_GB,
    }
