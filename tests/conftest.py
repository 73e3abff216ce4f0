"""
Fixtures pytest partagees pour les tests Homeflix.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec une mediatheque temporaire
- Base SQLite temporaire et repositories
- Mocks des ports (fournisseur de metadonnees, telechargement d'images)
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import Engine
from sqlmodel import Session

from homeflix.config import Settings
from homeflix.core.ports.api_clients import IImageDownloader, IMetadataProvider
from homeflix.infrastructure.persistence.database import create_db_engine, init_db
from homeflix.infrastructure.persistence.repositories import (
    SQLModelMediaRepository,
    SQLModelSeriesRepository,
)


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    """Mediatheque temporaire avec les racines Movies et Series vides."""
    root = tmp_path / "Homeflix"
    (root / "Movies").mkdir(parents=True)
    (root / "Series").mkdir(parents=True)
    return root


@pytest.fixture
def test_settings(tmp_path: Path, media_root: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler la base, le cache et les images
    de chaque test.
    """
    return Settings(
        _env_file=None,
        media_base_path=media_root,
        database_url=f"sqlite:///{tmp_path}/test.db",
        assets_dir=tmp_path / "data",
        cache_dir=tmp_path / "cache",
        tmdb_api_key="test_api_key",
        scan_concurrency=4,
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def engine(tmp_path: Path) -> Engine:
    """Engine SQLite sur un fichier temporaire, tables creees."""
    engine = create_db_engine(f"sqlite:///{tmp_path}/catalog.db")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def media_repo(session: Session) -> SQLModelMediaRepository:
    return SQLModelMediaRepository(session)


@pytest.fixture
def series_repo(session: Session) -> SQLModelSeriesRepository:
    return SQLModelSeriesRepository(session)


@pytest.fixture
def mock_provider() -> AsyncMock:
    """
    Mock de IMetadataProvider.

    Aucune correspondance par defaut; configurer les retours dans chaque test.
    """
    mock = AsyncMock(spec=IMetadataProvider)
    mock.search_movie.return_value = []
    mock.search_series.return_value = []
    mock.get_season_episodes.return_value = []
    return mock


@pytest.fixture
def mock_downloader() -> AsyncMock:
    """
    Mock de IImageDownloader.

    Retourne un chemin URL construit a partir des arguments, sans reseau.
    """
    mock = AsyncMock(spec=IImageDownloader)

    async def fake_download(image_path, media_title, kind, filename):
        folder = media_title.lower().replace(" ", "_")
        return f"/data/{kind.value}s/{folder}/{filename}"

    mock.download.side_effect = fake_download
    return mock


def create_media_file(path: Path, size: int = 1024) -> Path:
    """Cree un faux fichier video de la taille donnee."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * size)
    return path
