"""
Interface port pour l'analyse des chemins de fichiers.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from homeflix.core.value_objects import EpisodeLocation, MediaType


class ITitleExtractor(ABC):
    """
    Interface d'extraction des informations portées par un chemin de fichier.
    """

    @abstractmethod
    def extract_query(self, filename: str) -> str:
        """Dérive la requête de recherche à partir du nom de fichier."""
        ...

    @abstractmethod
    def classify(self, path: Path) -> MediaType:
        """Classe un fichier en film ou épisode selon sa racine."""
        ...

    @abstractmethod
    def parse_episode(self, path: Path) -> EpisodeLocation:
        """
        Extrait la série, la saison et l'épisode d'un chemin.

        Lève SeriesNameMissingError si aucun dossier de série n'est présent.
        """
        ...
