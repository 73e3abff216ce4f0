"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
La configuration (Settings) est injectee explicitement dans les adaptateurs
et services, jamais lue comme etat global.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.api.cache import APICache
from .adapters.api.image_downloader import ImageDownloader
from .adapters.api.tmdb_client import TMDBClient
from .adapters.file_system import FileSystemAdapter
from .adapters.parsing.title_extractor import TitleExtractor
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import (
    SQLModelMediaRepository,
    SQLModelSeriesRepository,
)
from .services.catalog import CatalogService
from .services.reconciler import ReconciliationService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        with container.session() as session:
            service = container.reconciliation_service(
                media_repo=container.media_repository(session=session),
                series_repo=container.series_repository(session=session),
            )

    En test, la configuration se remplace avec :
        container.config.override(providers.Object(Settings(...)))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine unique, tables creees par la Resource
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(Session, engine)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    media_repository = providers.Factory(
        SQLModelMediaRepository,
        session=session,
    )
    series_repository = providers.Factory(
        SQLModelSeriesRepository,
        session=session,
    )

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    title_extractor = providers.Singleton(
        TitleExtractor,
        movies_dir=config.provided.movies_dir,
        series_dir=config.provided.series_dir,
    )

    # Cache API - Singleton pour partage entre les scans
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Client TMDB - Singleton avec api_key depuis config
    # Si api_key est None/vide, le client est cree mais le scan refuse de demarrer
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        language=config.provided.tmdb_language,
        include_adult=config.provided.tmdb_include_adult,
    )

    image_downloader = providers.Singleton(
        ImageDownloader,
        assets_dir=config.provided.assets_dir,
        provider=tmdb_client,
    )

    # Services - Factory car dependent de repositories (sessions fraiches)
    reconciliation_service = providers.Factory(
        ReconciliationService,
        settings=config,
        file_system=file_system,
        title_extractor=title_extractor,
        provider=tmdb_client,
        image_downloader=image_downloader,
        media_repo=media_repository,
        series_repo=series_repository,
    )

    catalog_service = providers.Factory(
        CatalogService,
        media_repo=media_repository,
        series_repo=series_repository,
        title_extractor=title_extractor,
    )
