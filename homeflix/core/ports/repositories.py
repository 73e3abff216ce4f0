"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance du catalogue.
Les implémentations (adaptateurs) fournissent le stockage concret (SQLite via SQLModel).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from homeflix.core.entities.media import MediaItem, Series


@dataclass
class CatalogStats:
    """Agrégats du catalogue."""

    total: int = 0
    watched: int = 0
    favorites: int = 0
    total_size_bytes: int = 0


class IMediaRepository(ABC):
    """
    Interface de stockage des fichiers catalogués (films et épisodes).
    """

    @abstractmethod
    def get_by_id(self, media_id: int) -> Optional[MediaItem]:
        """Récupère un média par son ID interne."""
        ...

    @abstractmethod
    def get_by_filepath(self, filepath: str) -> Optional[MediaItem]:
        """Récupère un média par son chemin exact."""
        ...

    @abstractmethod
    def insert(self, item: MediaItem) -> Optional[MediaItem]:
        """
        Insère un média si son chemin est absent.

        Retourne :
            Le média inséré avec son ID, ou None si le chemin existait déjà
        """
        ...

    @abstractmethod
    def list_by_series(self, series_id: int) -> list[MediaItem]:
        """Liste les épisodes d'une série, triés par titre."""
        ...

    @abstractmethod
    def search(self, query: str) -> list[MediaItem]:
        """Recherche dans le titre, la description et le nom de fichier."""
        ...

    @abstractmethod
    def list_favorites(self) -> list[MediaItem]:
        """Liste les médias favoris."""
        ...

    @abstractmethod
    def list_watched(self) -> list[MediaItem]:
        """Liste les médias déjà vus."""
        ...

    @abstractmethod
    def list_genres(self) -> list[str]:
        """Retourne les noms de genre distincts, triés."""
        ...

    @abstractmethod
    def stats(self) -> CatalogStats:
        """Calcule les agrégats du catalogue."""
        ...

    @abstractmethod
    def toggle_favorite(self, media_id: int) -> Optional[bool]:
        """Inverse le flag favori. Retourne la nouvelle valeur, None si inconnu."""
        ...

    @abstractmethod
    def toggle_watched(self, media_id: int) -> Optional[bool]:
        """Inverse le flag vu. Retourne la nouvelle valeur, None si inconnu."""
        ...

    @abstractmethod
    def update_position(self, media_id: int, position: int) -> bool:
        """Met à jour la position de lecture et la date de lecture. False si inconnu."""
        ...


class ISeriesRepository(ABC):
    """
    Interface de stockage des séries.
    """

    @abstractmethod
    def get_by_id(self, series_id: int) -> Optional[Series]:
        """Récupère une série par son ID interne."""
        ...

    @abstractmethod
    def get_by_title(self, title: str) -> Optional[Series]:
        """Récupère une série par son titre exact."""
        ...

    @abstractmethod
    def insert_if_absent(self, series: Series) -> Series:
        """
        Insère une série si son titre est absent, sans jamais écraser l'existante.

        Retourne :
            La série persistée (nouvelle ou existante) avec son ID
        """
        ...

    @abstractmethod
    def list_page(
        self,
        genre: Optional[str] = None,
        media_type: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Series]:
        """Liste une page de séries filtrées, triées par titre."""
        ...

    @abstractmethod
    def count(self, genre: Optional[str] = None, media_type: Optional[str] = None) -> int:
        """Compte les séries correspondant aux filtres."""
        ...
