"""
Media catalog entities.

Entities representing cataloged files (movies and episodes) and the
parent series grouping episodes, enriched with TMDB metadata.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from homeflix.core.value_objects import MediaType
from homeflix.utils.constants import SERIES_MEDIA_TYPE


@dataclass
class MediaItem:
    """
    One cataloged movie or single episode (one row per physical file).

    Attributes:
        id: Internal database ID
        filepath: Absolute path of the file (natural key, unique)
        filename: File name with extension
        filesize: File size in bytes
        title: Resolved title (TMDB or filename-derived)
        description: Overview from TMDB
        poster: Local URL path of the downloaded poster or still
        year: 4-digit year string, or "" when unknown
        genre: Genre names joined with ", "
        language: Original language code
        rating: TMDB vote average (0 when unknown)
        media_type: MOVIE or EPISODE
        favorite: User favorite flag
        watched: User watched flag
        playback_position: Resume position in seconds
        last_played: Last playback update
        series_id: Parent series ID (None for movies)
    """

    filepath: str
    filename: str
    filesize: int = 0
    title: str = ""
    description: str = ""
    poster: str = ""
    year: str = ""
    genre: str = ""
    language: str = ""
    rating: float = 0.0
    media_type: MediaType = MediaType.MOVIE
    favorite: bool = False
    watched: bool = False
    playback_position: int = 0
    last_played: Optional[datetime] = None
    series_id: Optional[int] = None
    id: Optional[int] = None


@dataclass
class Series:
    """
    Parent metadata shared by all episodes of one show.

    Attributes:
        id: Internal database ID
        title: Show name (natural key, unique)
        original_name: Title in original language
        overview: Plot summary
        first_air_date: First air date ("YYYY-MM-DD" or "")
        genre: Genre names joined with ", "
        original_language: Original language code
        origin_country: Country codes
        popularity: TMDB popularity score
        vote_average: TMDB vote average
        vote_count: TMDB vote count
        poster_path: Local URL path of the poster
        backdrop_path: Local URL path of the backdrop
        media_type: Type marker stored on the row
    """

    title: str
    original_name: str = ""
    overview: str = ""
    first_air_date: str = ""
    genre: str = ""
    original_language: str = ""
    origin_country: tuple[str, ...] = field(default_factory=tuple)
    popularity: float = 0.0
    vote_average: float = 0.0
    vote_count: int = 0
    poster_path: str = ""
    backdrop_path: str = ""
    media_type: str = SERIES_MEDIA_TYPE
    id: Optional[int] = None
