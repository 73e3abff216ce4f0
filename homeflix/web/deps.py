"""
Dépendances partagées de l'application web.

Fournit le container DI et les services construits sur une session
SQLModel ouverte pour la durée de la requête.
"""

from collections.abc import Iterator

from fastapi import Request

from ..container import Container
from ..services.catalog import CatalogService


def get_container(request: Request) -> Container:
    """Container DI attaché à l'application au démarrage."""
    return request.app.state.container


def get_catalog(request: Request) -> Iterator[CatalogService]:
    """Service catalogue lié à une session fermée en fin de requête."""
    container = get_container(request)
    with container.session() as session:
        yield container.catalog_service(
            media_repo=container.media_repository(session=session),
            series_repo=container.series_repository(session=session),
        )
