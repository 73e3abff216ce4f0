"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes :
- api/ : Client TMDB, cache, retry et téléchargement des images
- file_system.py : Parcours des répertoires de la médiathèque
- parsing/ : Extraction de la requête, du type et de l'épisode depuis un chemin

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from homeflix.adapters.file_system import FileSystemAdapter
from homeflix.adapters.parsing.title_extractor import TitleExtractor

__all__ = [
    "FileSystemAdapter",
    "TitleExtractor",
]
