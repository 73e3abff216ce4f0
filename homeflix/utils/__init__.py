"""
Utilitaires et constantes pour Homeflix.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from homeflix.utils.constants import (
    ASSETS_URL_PREFIX,
    GENRE_MAP,
    VIDEO_CONTENT_TYPE,
)
from homeflix.utils.helpers import map_genres, sanitize_folder_name, year_from_date

__all__ = [
    "ASSETS_URL_PREFIX",
    "GENRE_MAP",
    "VIDEO_CONTENT_TYPE",
    "map_genres",
    "sanitize_folder_name",
    "year_from_date",
]
