"""
Implementation SQLModel du repository Media.

Implemente l'interface IMediaRepository pour la persistance des fichiers
catalogues (films et episodes) dans la base de donnees SQLite via SQLModel.
"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.dialects.sqlite import insert
from sqlmodel import Session, select

from homeflix.core.entities.media import MediaItem
from homeflix.core.ports.repositories import CatalogStats, IMediaRepository
from homeflix.core.value_objects import MediaType
from homeflix.infrastructure.persistence.models import MediaModel
from homeflix.utils.helpers import split_genres, utc_now


class SQLModelMediaRepository(IMediaRepository):
    """
    Repository SQLModel pour les fichiers catalogues.

    Implemente IMediaRepository avec conversion bidirectionnelle
    entre l'entite MediaItem (domaine) et MediaModel (persistance).
    L'insertion ignore un chemin deja present (ON CONFLICT DO NOTHING).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: MediaModel) -> MediaItem:
        """Convertit un modele DB en entite domaine."""
        return MediaItem(
            id=model.id,
            filepath=model.filepath,
            filename=model.filename,
            filesize=model.filesize,
            title=model.title,
            description=model.description,
            poster=model.poster,
            year=model.year,
            genre=model.genre,
            language=model.language,
            rating=model.rating,
            media_type=MediaType(model.media_type),
            favorite=model.favorite,
            watched=model.watched,
            playback_position=model.playback_position,
            last_played=model.last_played,
            series_id=model.series_id,
        )

    def _to_values(self, entity: MediaItem) -> dict:
        """Convertit une entite domaine en valeurs de colonnes pour l'insertion."""
        return {
            "filename": entity.filename,
            "filepath": entity.filepath,
            "filesize": entity.filesize,
            "title": entity.title,
            "description": entity.description,
            "poster": entity.poster,
            "year": entity.year,
            "genre": entity.genre,
            "language": entity.language,
            "rating": entity.rating,
            "media_type": entity.media_type.value,
            "favorite": entity.favorite,
            "watched": entity.watched,
            "playback_position": entity.playback_position,
            "last_played": entity.last_played,
            "series_id": entity.series_id,
            "created_at": utc_now(),
        }

    def _to_entities(self, statement) -> list[MediaItem]:
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def get_by_id(self, media_id: int) -> Optional[MediaItem]:
        """Recupere un media par son ID interne."""
        model = self._session.get(MediaModel, media_id)
        if model:
            return self._to_entity(model)
        return None

    def get_by_filepath(self, filepath: str) -> Optional[MediaItem]:
        """Recupere un media par son chemin exact."""
        statement = select(MediaModel).where(MediaModel.filepath == filepath)
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def insert(self, item: MediaItem) -> Optional[MediaItem]:
        """
        Insere un media si son chemin est absent.

        Retourne None si une autre insertion a deja catalogue ce chemin.
        """
        statement = (
            insert(MediaModel)
            .values(**self._to_values(item))
            .on_conflict_do_nothing(index_elements=["filepath"])
        )
        result = self._session.execute(statement)
        self._session.commit()
        if result.rowcount == 0:
            return None
        return self.get_by_filepath(item.filepath)

    def list_by_series(self, series_id: int) -> list[MediaItem]:
        """Liste les episodes d'une serie, tries par titre."""
        statement = (
            select(MediaModel)
            .where(MediaModel.series_id == series_id)
            .order_by(MediaModel.title, MediaModel.id)
        )
        return self._to_entities(statement)

    def search(self, query: str) -> list[MediaItem]:
        """Recherche (LIKE) dans le titre, la description et le nom de fichier."""
        statement = (
            select(MediaModel)
            .where(
                or_(
                    MediaModel.title.contains(query),
                    MediaModel.description.contains(query),
                    MediaModel.filename.contains(query),
                )
            )
            .order_by(MediaModel.title, MediaModel.id)
        )
        return self._to_entities(statement)

    def list_favorites(self) -> list[MediaItem]:
        """Liste les medias favoris."""
        statement = (
            select(MediaModel)
            .where(MediaModel.favorite == True)  # noqa: E712
            .order_by(MediaModel.title, MediaModel.id)
        )
        return self._to_entities(statement)

    def list_watched(self) -> list[MediaItem]:
        """Liste les medias deja vus."""
        statement = (
            select(MediaModel)
            .where(MediaModel.watched == True)  # noqa: E712
            .order_by(MediaModel.title, MediaModel.id)
        )
        return self._to_entities(statement)

    def list_genres(self) -> list[str]:
        """
        Retourne les noms de genre distincts, tries.

        La colonne genre contient des listes ("Crime, Drama"), elles sont
        eclatees avant deduplication.
        """
        statement = select(MediaModel.genre).where(MediaModel.genre != "").distinct()
        genres: set[str] = set()
        for value in self._session.exec(statement).all():
            genres.update(split_genres(value))
        return sorted(genres)

    def stats(self) -> CatalogStats:
        """Calcule les agregats du catalogue."""
        count = select(func.count(MediaModel.id))
        total = self._session.exec(count).one()
        watched = self._session.exec(count.where(MediaModel.watched == True)).one()  # noqa: E712
        favorites = self._session.exec(count.where(MediaModel.favorite == True)).one()  # noqa: E712
        total_size = self._session.exec(
            select(func.coalesce(func.sum(MediaModel.filesize), 0))
        ).one()
        return CatalogStats(
            total=int(total),
            watched=int(watched),
            favorites=int(favorites),
            total_size_bytes=int(total_size),
        )

    def toggle_favorite(self, media_id: int) -> Optional[bool]:
        """Inverse le flag favori."""
        model = self._session.get(MediaModel, media_id)
        if model is None:
            return None
        model.favorite = not model.favorite
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return model.favorite

    def toggle_watched(self, media_id: int) -> Optional[bool]:
        """Inverse le flag vu."""
        model = self._session.get(MediaModel, media_id)
        if model is None:
            return None
        model.watched = not model.watched
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return model.watched

    def update_position(self, media_id: int, position: int) -> bool:
        """Enregistre la position de lecture et la date de derniere lecture."""
        model = self._session.get(MediaModel, media_id)
        if model is None:
            return False
        model.playback_position = position
        model.last_played = utc_now()
        self._session.add(model)
        self._session.commit()
        return True
