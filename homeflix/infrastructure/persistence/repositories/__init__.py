"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans homeflix/core/ports/repositories.py, utilisant SQLModel pour
la persistance SQLite.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from homeflix.infrastructure.persistence.repositories.media_repository import (
    SQLModelMediaRepository,
)
from homeflix.infrastructure.persistence.repositories.series_repository import (
    SQLModelSeriesRepository,
)

__all__ = [
    "SQLModelMediaRepository",
    "SQLModelSeriesRepository",
]
