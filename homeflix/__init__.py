"""
Homeflix - Catalogue et streaming de videotheque personnelle.

Ce package scanne les repertoires Films/Series, enrichit les fichiers
avec les metadonnees TMDB, les persiste en base SQLite et expose une API REST
de navigation et de streaming.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (scan, reconciliation, catalogue, streaming)
- adapters/ : Couche infrastructure (systeme de fichiers, TMDB, parsing)
- infrastructure/ : Persistance SQLModel
- web/ : API REST FastAPI
"""

__version__ = "1.0.0"
