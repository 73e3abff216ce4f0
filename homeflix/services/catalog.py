"""
Service de consultation et de mise a jour du catalogue.

Regroupe les operations exposees par l'API REST: pagination des series,
recherche, genres, favoris, vus, statistiques et position de lecture.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from homeflix.core.entities.media import MediaItem, Series
from homeflix.core.exceptions import MediaNotFoundError, SeriesNameMissingError
from homeflix.core.ports.parser import ITitleExtractor
from homeflix.core.ports.repositories import (
    CatalogStats,
    IMediaRepository,
    ISeriesRepository,
)
from homeflix.core.value_objects import MediaType
from homeflix.utils.helpers import year_from_date

UNKNOWN_SERIES_NAME = "Unknown Series"


@dataclass
class Pagination:
    """Informations de pagination d'une liste."""

    total: int
    total_pages: int
    current_page: int
    limit: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1


@dataclass
class SeriesWithEpisodes:
    """Serie et ses episodes, tries par titre."""

    series: Series
    episodes: list[MediaItem] = field(default_factory=list)


@dataclass
class SeriesPage:
    """Page de series avec sa pagination."""

    items: list[SeriesWithEpisodes]
    pagination: Pagination


@dataclass
class SearchSeriesGroup:
    """Episodes trouves regroupes par serie."""

    name: str
    overview: str = ""
    poster: str = ""
    year: str = ""
    genre: str = ""
    rating: float = 0.0
    episodes: list[MediaItem] = field(default_factory=list)


@dataclass
class SearchResult:
    """Resultat de recherche: films et groupes de series."""

    movies: list[MediaItem] = field(default_factory=list)
    series: list[SearchSeriesGroup] = field(default_factory=list)


class CatalogService:
    """
    Operations de lecture et de mutation utilisateur du catalogue.

    Les mutations ne touchent que les champs utilisateur (favori, vu,
    position de lecture), jamais les metadonnees.
    """

    def __init__(
        self,
        media_repo: IMediaRepository,
        series_repo: ISeriesRepository,
        title_extractor: ITitleExtractor,
    ) -> None:
        self._media_repo = media_repo
        self._series_repo = series_repo
        self._extractor = title_extractor

    def list_series(
        self,
        genre: Optional[str] = None,
        media_type: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> SeriesPage:
        """
        Liste une page de series avec leurs episodes.

        Args:
            genre: Filtre sous-chaine sur le genre de la serie
            media_type: Filtre exact sur le type de la serie
            page: Numero de page (a partir de 1)
            limit: Nombre de series par page
        """
        page = max(page, 1)
        limit = max(limit, 1)
        total = self._series_repo.count(genre=genre, media_type=media_type)
        rows = self._series_repo.list_page(
            genre=genre,
            media_type=media_type,
            offset=(page - 1) * limit,
            limit=limit,
        )
        items = [
            SeriesWithEpisodes(series=series, episodes=self._media_repo.list_by_series(series.id))
            for series in rows
        ]
        return SeriesPage(
            items=items,
            pagination=Pagination(
                total=total,
                total_pages=math.ceil(total / limit),
                current_page=page,
                limit=limit,
            ),
        )

    def genres(self) -> list[str]:
        """Noms de genre distincts, tries."""
        return self._media_repo.list_genres()

    def search(self, query: str) -> SearchResult:
        """
        Recherche les films et episodes dont le titre, la description ou
        le nom de fichier contient la requete.

        Les episodes sont regroupes par serie cataloguee; un episode sans
        serie est regroupe sous le nom de son dossier.
        """
        result = SearchResult()
        groups: dict[str, SearchSeriesGroup] = {}
        series_cache: dict[int, Optional[Series]] = {}

        for item in self._media_repo.search(query):
            if item.media_type != MediaType.EPISODE:
                result.movies.append(item)
                continue

            series = None
            if item.series_id is not None:
                if item.series_id not in series_cache:
                    series_cache[item.series_id] = self._series_repo.get_by_id(item.series_id)
                series = series_cache[item.series_id]

            if series is not None:
                key = series.title
                if key not in groups:
                    groups[key] = SearchSeriesGroup(
                        name=series.title,
                        overview=series.overview,
                        poster=series.poster_path,
                        year=year_from_date(series.first_air_date),
                        genre=series.genre,
                        rating=series.vote_average,
                    )
            else:
                key = self._series_name_from_path(item.filepath)
                groups.setdefault(key, SearchSeriesGroup(name=key))
            groups[key].episodes.append(item)

        result.series = list(groups.values())
        return result

    def _series_name_from_path(self, filepath: str) -> str:
        try:
            return self._extractor.parse_episode(filepath).series_name
        except SeriesNameMissingError:
            return UNKNOWN_SERIES_NAME

    def get_media(self, media_id: int) -> MediaItem:
        """
        Raises:
            MediaNotFoundError: Si l'ID est inconnu
        """
        item = self._media_repo.get_by_id(media_id)
        if item is None:
            raise MediaNotFoundError(media_id)
        return item

    def favorites(self) -> list[MediaItem]:
        return self._media_repo.list_favorites()

    def watched(self) -> list[MediaItem]:
        return self._media_repo.list_watched()

    def stats(self) -> CatalogStats:
        return self._media_repo.stats()

    def toggle_favorite(self, media_id: int) -> bool:
        """Inverse le flag favori et retourne la nouvelle valeur."""
        value = self._media_repo.toggle_favorite(media_id)
        if value is None:
            raise MediaNotFoundError(media_id)
        return value

    def toggle_watched(self, media_id: int) -> bool:
        """Inverse le flag vu et retourne la nouvelle valeur."""
        value = self._media_repo.toggle_watched(media_id)
        if value is None:
            raise MediaNotFoundError(media_id)
        return value

    def update_position(self, media_id: int, position: int) -> None:
        """Enregistre la position de lecture (secondes) et la date de lecture."""
        if position < 0:
            raise ValueError("Playback position must be >= 0")
        if not self._media_repo.update_position(media_id, position):
            raise MediaNotFoundError(media_id)

    def get_position(self, media_id: int) -> tuple[int, Optional[datetime]]:
        """Retourne (position, derniere lecture) d'un media."""
        item = self.get_media(media_id)
        return item.playback_position, item.last_played
