"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance du catalogue
- IMediaRepository : Stockage des films et épisodes
- ISeriesRepository : Stockage des séries

Ports client API : Contrats pour les services externes
- IMetadataProvider : Fournisseur de métadonnées (recherche, saisons, images)
- IImageDownloader : Téléchargement des affiches vers le stockage local

Ports système de fichiers et parsing
- IFileSystem : Parcours des répertoires racine
- ITitleExtractor : Classification et extraction depuis les chemins
"""

from homeflix.core.ports.api_clients import (
    AssetKind,
    EpisodeCandidate,
    IImageDownloader,
    IMetadataProvider,
    MovieCandidate,
    SeriesCandidate,
)
from homeflix.core.ports.file_system import IFileSystem, WalkResult
from homeflix.core.ports.parser import ITitleExtractor
from homeflix.core.ports.repositories import (
    CatalogStats,
    IMediaRepository,
    ISeriesRepository,
)

__all__ = [
    # Repositories
    "CatalogStats",
    "IMediaRepository",
    "ISeriesRepository",
    # Clients API
    "AssetKind",
    "EpisodeCandidate",
    "IImageDownloader",
    "IMetadataProvider",
    "MovieCandidate",
    "SeriesCandidate",
    # Système de fichiers et parsing
    "IFileSystem",
    "ITitleExtractor",
    "WalkResult",
]
