"""
Implementation SQLModel du repository Series.

Implemente l'interface ISeriesRepository pour la persistance des series TV
dans la base de donnees SQLite via SQLModel.
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.dialects.sqlite import insert
from sqlmodel import Session, select

from homeflix.core.entities.media import Series
from homeflix.core.ports.repositories import ISeriesRepository
from homeflix.infrastructure.persistence.models import SeriesModel
from homeflix.utils.helpers import utc_now


class SQLModelSeriesRepository(ISeriesRepository):
    """
    Repository SQLModel pour les series TV.

    Implemente ISeriesRepository avec conversion bidirectionnelle
    entre l'entite Series (domaine) et SeriesModel (persistance).
    Une serie existante n'est jamais ecrasee.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: SeriesModel) -> Series:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele SeriesModel depuis la DB

        Retourne :
            L'entite Series correspondante
        """
        countries = tuple(c for c in model.origin_country.split(",") if c)
        return Series(
            id=model.id,
            title=model.title,
            original_name=model.original_name,
            overview=model.overview,
            first_air_date=model.first_air_date,
            genre=model.genre,
            original_language=model.original_language,
            origin_country=countries,
            popularity=model.popularity,
            vote_average=model.vote_average,
            vote_count=model.vote_count,
            poster_path=model.poster_path,
            backdrop_path=model.backdrop_path,
            media_type=model.media_type,
        )

    def _to_values(self, entity: Series) -> dict:
        """
        Convertit une entite domaine en valeurs de colonnes.

        Args :
            entity : L'entite Series du domaine

        Retourne :
            Les valeurs pour l'instruction INSERT
        """
        return {
            "title": entity.title,
            "original_name": entity.original_name,
            "overview": entity.overview,
            "first_air_date": entity.first_air_date,
            "genre": entity.genre,
            "original_language": entity.original_language,
            "origin_country": ",".join(entity.origin_country),
            "popularity": entity.popularity,
            "vote_average": entity.vote_average,
            "vote_count": entity.vote_count,
            "poster_path": entity.poster_path,
            "backdrop_path": entity.backdrop_path,
            "media_type": entity.media_type,
            "created_at": utc_now(),
        }

    def _filtered(self, statement, genre: Optional[str], media_type: Optional[str]):
        if genre:
            statement = statement.where(SeriesModel.genre.contains(genre))
        if media_type:
            statement = statement.where(SeriesModel.media_type == media_type)
        return statement

    def get_by_id(self, series_id: int) -> Optional[Series]:
        """Recupere une serie par son ID interne."""
        model = self._session.get(SeriesModel, series_id)
        if model:
            return self._to_entity(model)
        return None

    def get_by_title(self, title: str) -> Optional[Series]:
        """Recupere une serie par son titre exact."""
        statement = select(SeriesModel).where(SeriesModel.title == title)
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def insert_if_absent(self, series: Series) -> Series:
        """
        Insere une serie si son titre est absent (ON CONFLICT DO NOTHING).

        Retourne la ligne persistee, nouvelle ou deja existante.
        """
        statement = (
            insert(SeriesModel)
            .values(**self._to_values(series))
            .on_conflict_do_nothing(index_elements=["title"])
        )
        self._session.execute(statement)
        self._session.commit()
        persisted = self.get_by_title(series.title)
        if persisted is None:
            raise RuntimeError(f"Series row missing after insert: {series.title}")
        return persisted

    def list_page(
        self,
        genre: Optional[str] = None,
        media_type: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Series]:
        """Liste une page de series filtrees, triees par titre."""
        statement = self._filtered(select(SeriesModel), genre, media_type)
        statement = statement.order_by(SeriesModel.title).offset(offset).limit(limit)
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def count(self, genre: Optional[str] = None, media_type: Optional[str] = None) -> int:
        """Compte les series correspondant aux filtres."""
        statement = self._filtered(select(func.count(SeriesModel.id)), genre, media_type)
        return int(self._session.exec(statement).one())
