"""
Module de persistance SQLite pour Homeflix.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Creation de l'engine SQLite, initialisation des tables
- models.py : Modeles SQLModel representant les tables media et series
- repositories/ : Implementations des ports de persistance

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    engine = create_db_engine("sqlite:///data/media_catalog.db")
    init_db(engine)
    with Session(engine) as session:
        repo = SQLModelMediaRepository(session)
"""

from homeflix.infrastructure.persistence.database import create_db_engine, init_db
from homeflix.infrastructure.persistence.models import MediaModel, SeriesModel

__all__ = [
    "create_db_engine",
    "init_db",
    "MediaModel",
    "SeriesModel",
]
