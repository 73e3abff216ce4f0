"""
Interfaces ports pour les clients API.

Interfaces abstraites (ports) définissant les contrats vers le fournisseur de
métadonnées externe (TMDB) et le téléchargement des images associées.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass
class MovieCandidate:
    """
    Film candidat retourné par une recherche.

    Attributs :
        id : ID spécifique à l'API (ID TMDB)
        title : Titre localisé
        original_title : Titre en langue originale
        overview : Résumé
        release_date : Date de sortie "YYYY-MM-DD" (ou "")
        genre_ids : IDs de genre du fournisseur
        original_language : Code langue originale
        vote_average : Note moyenne (0-10)
        poster_path : Chemin relatif de l'affiche chez le fournisseur
        backdrop_path : Chemin relatif de l'image de fond
    """

    id: str
    title: str
    original_title: Optional[str] = None
    overview: str = ""
    release_date: str = ""
    genre_ids: tuple[int, ...] = ()
    original_language: str = ""
    vote_average: float = 0.0
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None


@dataclass
class SeriesCandidate:
    """
    Série candidate retournée par une recherche.

    Attributs :
        id : ID TMDB de la série
        name : Titre localisé
        original_name : Titre original
        first_air_date : Date de première diffusion "YYYY-MM-DD" (ou "")
        origin_country : Codes pays d'origine
        popularity : Score de popularité
        vote_count : Nombre de votes
    """

    id: str
    name: str
    original_name: Optional[str] = None
    overview: str = ""
    first_air_date: str = ""
    genre_ids: tuple[int, ...] = ()
    original_language: str = ""
    origin_country: tuple[str, ...] = field(default_factory=tuple)
    popularity: float = 0.0
    vote_average: float = 0.0
    vote_count: int = 0
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None


@dataclass
class EpisodeCandidate:
    """
    Épisode d'une saison chez le fournisseur.

    Attributs :
        episode_number : Numéro de l'épisode dans la saison
        season_number : Numéro de saison
        name : Titre de l'épisode
        overview : Résumé de l'épisode
        air_date : Date de diffusion "YYYY-MM-DD" (ou "")
        still_path : Chemin relatif de la capture de l'épisode
        vote_average : Note moyenne
    """

    episode_number: int
    season_number: int
    name: str = ""
    overview: str = ""
    air_date: str = ""
    still_path: Optional[str] = None
    vote_average: float = 0.0


class IMetadataProvider(ABC):
    """
    Interface du fournisseur de métadonnées films/séries.

    Une liste vide signifie "aucune correspondance" ; toute exception signifie
    un échec d'appel (réseau, timeout, rate limiting épuisé).
    """

    @abstractmethod
    async def search_movie(self, query: str) -> list[MovieCandidate]:
        """Recherche des films par titre. Le meilleur résultat est en tête."""
        ...

    @abstractmethod
    async def search_series(self, query: str) -> list[SeriesCandidate]:
        """Recherche des séries par titre. Le meilleur résultat est en tête."""
        ...

    @abstractmethod
    async def get_season_episodes(
        self, series_id: str, season_number: int
    ) -> list[EpisodeCandidate]:
        """Liste les épisodes d'une saison d'une série."""
        ...

    @abstractmethod
    def image_url(self, image_path: str, size: str = "w500") -> str:
        """Construit l'URL absolue d'une image du fournisseur."""
        ...


class AssetKind(str, Enum):
    """Nature d'une image téléchargée (détermine le sous-répertoire)."""

    POSTER = "poster"
    BACKDROP = "backdrop"


class IImageDownloader(ABC):
    """Interface de téléchargement des images vers le stockage local."""

    @abstractmethod
    async def download(
        self,
        image_path: str,
        media_title: str,
        kind: AssetKind,
        filename: str,
    ) -> str:
        """
        Télécharge une image du fournisseur et la stocke localement.

        Args :
            image_path : Chemin relatif de l'image chez le fournisseur
            media_title : Titre servant de clé au dossier local
            kind : Affiche ou image de fond
            filename : Nom du fichier local (ex: "poster.jpg", "S1E2.jpg")

        Retourne :
            Chemin URL local de l'image (ex: "/data/posters/dune/poster.jpg")
        """
        ...
