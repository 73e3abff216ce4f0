"""
Objets valeur pour la classification des fichiers media.

Objets valeur immutables representant le type d'un fichier (film ou episode)
et sa position dans l'arborescence d'une serie (nom, saison, episode).
"""

from dataclasses import dataclass
from enum import Enum


class MediaType(str, Enum):
    """Type de media deduit du repertoire racine d'un fichier.

    Valeurs:
        MOVIE: Film (fichier sous le repertoire des films)
        EPISODE: Episode de serie (fichier sous le repertoire des series)
        UNKNOWN: Hors des deux racines, non cataloguable
    """

    MOVIE = "movie"
    EPISODE = "episode"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class EpisodeLocation:
    """
    Position d'un episode deduite de son chemin.

    Attributs:
        series_name: Nom du dossier de la serie (segment suivant la racine series)
        season: Numero de saison (1 par defaut)
        episode: Numero d'episode (1 par defaut)
    """

    series_name: str
    season: int = 1
    episode: int = 1
