"""
Modeles SQLModel pour la base de donnees Homeflix.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- media: Un fichier catalogue (film ou episode), unique par chemin
- series: Metadonnees partagees par les episodes d'une serie, unique par titre
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from homeflix.utils.helpers import utc_now


class SeriesModel(SQLModel, table=True):
    """
    Modele representant une serie TV dans la base de donnees.

    Les images sont des chemins URL locaux (/data/...), pas des URLs TMDB.
    """

    __tablename__ = "series"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(index=True, unique=True)
    original_name: str = ""
    overview: str = ""
    first_air_date: str = ""
    genre: str = Field(default="", index=True)
    original_language: str = ""
    origin_country: str = ""  # Codes pays separes par des virgules: "US,CA"
    popularity: float = 0.0
    vote_average: float = 0.0
    vote_count: int = 0
    poster_path: str = ""
    backdrop_path: str = ""
    media_type: str = Field(default="series", index=True)
    created_at: datetime | None = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class MediaModel(SQLModel, table=True):
    """
    Modele representant un fichier video catalogue.

    Cree une seule fois par le scan; seuls les champs utilisateur
    (favori, vu, position de lecture) sont modifies ensuite.
    """

    __tablename__ = "media"

    id: int | None = Field(default=None, primary_key=True)
    filename: str
    filepath: str = Field(index=True, unique=True)
    filesize: int = 0
    title: str = Field(default="", index=True)
    description: str = ""
    poster: str = ""
    year: str = ""
    genre: str = Field(default="", index=True)
    language: str = ""
    rating: float = 0.0
    media_type: str = Field(default="movie", index=True)
    favorite: bool = Field(default=False, index=True)
    watched: bool = Field(default=False, index=True)
    playback_position: int = 0
    last_played: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    series_id: int | None = Field(default=None, foreign_key="series.id", index=True)
    created_at: datetime | None = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
