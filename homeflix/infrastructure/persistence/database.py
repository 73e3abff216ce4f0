"""
Configuration de la base de donnees SQLite pour Homeflix.

Ce module fournit :
- Engine SQLite avec configuration pour acces multi-thread
- Activation des cles etrangeres (media.series_id -> series.id)
- Fonction d'initialisation des tables

L'URL de la base est fournie par la configuration (HOMEFLIX_DATABASE_URL,
defaut: sqlite:///data/media_catalog.db). Le conteneur DI cree l'engine.
"""

from pathlib import Path

from sqlalchemy import Engine, event
from sqlmodel import SQLModel, create_engine


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Cree l'engine SQLAlchemy pour l'URL donnee.

    Pour une URL de fichier SQLite, le repertoire parent est cree si necessaire.
    """
    is_sqlite = database_url.startswith("sqlite")
    if database_url.startswith("sqlite:///") and not database_url.startswith("sqlite:///:memory:"):
        db_path = Path(database_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    engine = create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant les tables absentes.

    Les modeles sont importes ici pour enregistrer leurs metadonnees
    dans SQLModel.metadata avant create_all.
    """
    from homeflix.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
