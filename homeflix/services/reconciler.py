"""
Service de reconciliation entre la mediatheque et le catalogue.

Parcourt les racines films et series, enrichit chaque nouveau fichier via
TMDB (metadonnees et affiches) puis l'insere dans le catalogue. Un fichier
deja catalogue est ignore, un fichier en erreur n'est pas persiste et sera
donc retente au prochain scan.

Cycle de vie d'un fichier:
    decouvert -> deja catalogue (SKIPPED)
              -> classe -> recherche TMDB -> {trouve, fallback}
              -> telechargement affiche -> insere (PROCESSED) | erreur (FAILED)
"""

import asyncio
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TypeVar

from loguru import logger

from homeflix.config import Settings
from homeflix.core.entities.media import MediaItem, Series
from homeflix.core.exceptions import (
    ScanConfigurationError,
    ScanFailedError,
    UnclassifiedPathError,
)
from homeflix.core.ports.api_clients import (
    AssetKind,
    EpisodeCandidate,
    IImageDownloader,
    IMetadataProvider,
    SeriesCandidate,
)
from homeflix.core.ports.file_system import IFileSystem
from homeflix.core.ports.parser import ITitleExtractor
from homeflix.core.ports.repositories import IMediaRepository, ISeriesRepository
from homeflix.core.value_objects import EpisodeLocation, MediaType
from homeflix.utils.helpers import clean_title, map_genres, run_blocking, year_from_date

T = TypeVar("T")


class FileOutcome(str, Enum):
    """Resultat de reconciliation d'un fichier."""

    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ScanReport:
    """
    Bilan d'un scan complet.

    Attributes:
        discovered: Fichiers trouves par le parcours
        processed: Fichiers nouvellement catalogues
        skipped: Fichiers deja presents dans le catalogue
        failed: Fichiers en erreur (non persistes)
        root_errors: Erreurs de parcours par repertoire racine
        failures: Message d'erreur par chemin de fichier en echec
    """

    discovered: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    root_errors: dict[str, list[str]] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    def record(self, filepath: str, outcome: FileOutcome, error: Optional[str] = None) -> None:
        """Comptabilise le resultat d'un fichier."""
        if outcome == FileOutcome.PROCESSED:
            self.processed += 1
        elif outcome == FileOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
            self.failures[filepath] = error or ""

    def summary(self) -> str:
        """Message de fin de scan."""
        if self.failed:
            return (
                f"Media scan completed: {self.processed} files processed, "
                f"{self.failed} files failed"
            )
        return f"Media scan completed: {self.processed} files processed successfully"


@dataclass
class ResolvedSeries:
    """Serie persistee et candidat TMDB ayant servi a la creer (None en fallback)."""

    series: Series
    candidate: Optional[SeriesCandidate] = None


class ScanContext:
    """
    Etat partage par les fichiers d'un meme scan.

    Un verrou par nom de dossier garantit une seule resolution TMDB par
    serie, un verrou par titre resolu une seule creation quand deux dossiers
    designent la meme serie. Les appels au catalogue passent un par un dans
    un thread, la session SQLModel etant partagee par tout le scan.
    """

    def __init__(self, concurrency: int = 1) -> None:
        self.semaphore = asyncio.Semaphore(concurrency)
        self.series_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self.title_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self.resolved_series: dict[str, ResolvedSeries] = {}
        self._store_lock = asyncio.Lock()

    async def store(self, func: Callable[..., T], *args) -> T:
        """Execute un appel au catalogue hors de la boucle d'evenements."""
        async with self._store_lock:
            return await run_blocking(func, *args)


class ReconciliationService:
    """
    Service de scan et d'indexation de la mediatheque.

    Les fichiers sont traites en parallele (borne par scan_concurrency),
    aucun fichier ne depend d'un autre et une erreur sur un fichier
    n'interrompt jamais le scan.
    """

    def __init__(
        self,
        settings: Settings,
        file_system: IFileSystem,
        title_extractor: ITitleExtractor,
        provider: IMetadataProvider,
        image_downloader: IImageDownloader,
        media_repo: IMediaRepository,
        series_repo: ISeriesRepository,
    ) -> None:
        self._settings = settings
        self._file_system = file_system
        self._extractor = title_extractor
        self._provider = provider
        self._downloader = image_downloader
        self._media_repo = media_repo
        self._series_repo = series_repo

    def check_configuration(self) -> None:
        """
        Verifie que le scan peut demarrer.

        Raises:
            ScanConfigurationError: Cle API absente ou racine introuvable
        """
        if not self._settings.tmdb_enabled:
            logger.error("TMDB API key is missing (HOMEFLIX_TMDB_API_KEY)")
            raise ScanConfigurationError("TMDB API key is missing (HOMEFLIX_TMDB_API_KEY)")

        roots = [self._settings.movies_root, self._settings.series_root]
        missing = [str(root) for root in roots if not self._file_system.exists(root)]
        if missing:
            message = f"Directories do not exist: {', '.join(missing)}"
            logger.error(message)
            raise ScanConfigurationError(message, missing_dirs=missing)

    async def scan(
        self,
        on_progress: Optional[Callable[[str, FileOutcome], None]] = None,
    ) -> ScanReport:
        """
        Scanne les deux racines et catalogue les nouveaux fichiers.

        Args:
            on_progress: Callback optionnel appele apres chaque fichier

        Returns:
            Rapport du scan

        Raises:
            ScanConfigurationError: Si la configuration interdit le scan
            ScanFailedError: Si aucune racine n'a pu etre parcourue, ou si
                tous les fichiers tentes ont echoue
        """
        self.check_configuration()

        roots = [self._settings.movies_root, self._settings.series_root]
        walk = await run_blocking(self._file_system.walk, roots, self._settings.extensions)
        report = ScanReport(discovered=len(walk.files), root_errors=walk.errors)

        for root, errors in walk.errors.items():
            for error in errors:
                logger.error(f"Error scanning directory {root}: {error}")

        if not walk.files and len(walk.errors) >= len(roots):
            details = "; ".join(
                f"{root}: {', '.join(errors)}" for root, errors in walk.errors.items()
            )
            raise ScanFailedError(f"Failed to scan media directories: {details}", report)

        logger.info(f"Media scan started: {report.discovered} files found")
        context = ScanContext(self._settings.scan_concurrency)

        async def _run(path: Path) -> None:
            async with context.semaphore:
                outcome, error = await self._reconcile_safely(path, context)
            report.record(str(path), outcome, error)
            if on_progress:
                on_progress(str(path), outcome)

        await asyncio.gather(*(_run(path) for path in sorted(walk.files)))

        if report.failed and not report.processed:
            logger.error("Media scan completed with errors: All files failed to process")
            raise ScanFailedError(
                "Media scan completed with errors: All files failed to process", report
            )

        logger.info(report.summary())
        return report

    async def _reconcile_safely(
        self, path: Path, context: ScanContext
    ) -> tuple[FileOutcome, Optional[str]]:
        try:
            return await self.reconcile_file(path, context), None
        except Exception as e:
            logger.error(f"Error processing file {path}: {e}")
            return FileOutcome.FAILED, str(e)

    async def reconcile_file(
        self, path: Path, context: Optional[ScanContext] = None
    ) -> FileOutcome:
        """
        Catalogue un fichier s'il est absent du catalogue.

        Args:
            path: Chemin absolu du fichier
            context: Etat du scan en cours (un contexte isole est cree si absent)

        Returns:
            PROCESSED si insere, SKIPPED si deja catalogue

        Raises:
            Exception: Toute erreur de classification, TMDB, telechargement ou disque
        """
        context = context or ScanContext()
        path = Path(path)
        filepath = str(path)

        if await context.store(self._media_repo.get_by_filepath, filepath) is not None:
            return FileOutcome.SKIPPED

        media_type = self._extractor.classify(path)
        if media_type == MediaType.UNKNOWN:
            raise UnclassifiedPathError(filepath)

        filesize = await run_blocking(self._file_system.get_size, path)
        if media_type == MediaType.MOVIE:
            item = await self._build_movie(path, filesize)
        else:
            item = await self._build_episode(path, filesize, context)

        if await context.store(self._media_repo.insert, item) is None:
            logger.debug(f"Already indexed by a concurrent insert: {filepath}")
            return FileOutcome.SKIPPED

        logger.info(f"Indexed: {filepath}")
        return FileOutcome.PROCESSED

    async def _build_movie(self, path: Path, filesize: int) -> MediaItem:
        query = self._extractor.extract_query(path.name)
        item = MediaItem(
            filepath=str(path),
            filename=path.name,
            filesize=filesize,
            title=query,
            media_type=MediaType.MOVIE,
        )

        results = await self._provider.search_movie(query)
        if not results:
            logger.warning(f"No TMDB movie found for: {query}")
            return item

        movie = results[0]
        item.title = clean_title(movie.title) or query
        item.description = movie.overview
        item.year = year_from_date(movie.release_date)
        item.genre = map_genres(movie.genre_ids)
        item.language = movie.original_language
        item.rating = movie.vote_average
        if movie.poster_path:
            item.poster = await self._downloader.download(
                movie.poster_path, item.title, AssetKind.POSTER, "poster.jpg"
            )
        return item

    async def _build_episode(
        self, path: Path, filesize: int, context: ScanContext
    ) -> MediaItem:
        location = self._extractor.parse_episode(path)
        resolved = await self._resolve_series(location.series_name, context)
        series = resolved.series

        item = MediaItem(
            filepath=str(path),
            filename=path.name,
            filesize=filesize,
            title=self._extractor.extract_query(path.name),
            media_type=MediaType.EPISODE,
            series_id=series.id,
        )

        candidate = resolved.candidate
        if candidate is None:
            return item

        episode = await self._find_episode(candidate, location)
        # Priorite: episode > serie > nom de fichier
        item.title = clean_title(episode.name if episode else "") or series.title
        item.description = (episode.overview if episode else "") or candidate.overview
        item.year = year_from_date(episode.air_date if episode else "") or year_from_date(
            candidate.first_air_date
        )
        item.genre = map_genres(candidate.genre_ids)
        item.language = candidate.original_language
        item.rating = (episode.vote_average if episode else 0.0) or candidate.vote_average

        if episode and episode.still_path:
            item.poster = await self._downloader.download(
                episode.still_path,
                series.title,
                AssetKind.POSTER,
                f"S{episode.season_number}E{episode.episode_number}.jpg",
            )
        elif candidate.poster_path:
            item.poster = await self._downloader.download(
                candidate.poster_path, series.title, AssetKind.POSTER, "poster.jpg"
            )
        return item

    async def _find_episode(
        self, candidate: SeriesCandidate, location: EpisodeLocation
    ) -> Optional[EpisodeCandidate]:
        episodes = await self._provider.get_season_episodes(candidate.id, location.season)
        for episode in episodes:
            if episode.episode_number == location.episode:
                return episode
        logger.warning(
            f"No TMDB episode S{location.season}E{location.episode} "
            f"for series: {candidate.name}"
        )
        return None

    async def _resolve_series(self, name: str, context: ScanContext) -> ResolvedSeries:
        """
        Resout une serie par son nom de dossier, une seule fois par scan.

        La serie est creee avec ses images si son titre est absent du
        catalogue, une serie existante n'est jamais modifiee.
        """
        async with context.series_locks[name]:
            if name in context.resolved_series:
                return context.resolved_series[name]

            results = await self._provider.search_series(name)
            if results:
                candidate = results[0]
                series = await self._get_or_create_series(candidate, name, context)
                resolved = ResolvedSeries(series=series, candidate=candidate)
            else:
                logger.warning(f"No TMDB series found for: {name}")
                series = await self._get_or_create_fallback_series(name, context)
                resolved = ResolvedSeries(series=series)

            context.resolved_series[name] = resolved
            return resolved

    async def _get_or_create_series(
        self, candidate: SeriesCandidate, folder_name: str, context: ScanContext
    ) -> Series:
        title = clean_title(candidate.name) or folder_name
        async with context.title_locks[title]:
            existing = await context.store(self._series_repo.get_by_title, title)
            if existing is not None:
                return existing

            poster = ""
            backdrop = ""
            if candidate.poster_path:
                poster = await self._downloader.download(
                    candidate.poster_path, title, AssetKind.POSTER, "poster.jpg"
                )
            if candidate.backdrop_path:
                backdrop = await self._downloader.download(
                    candidate.backdrop_path, title, AssetKind.BACKDROP, "backdrop.jpg"
                )

            series = await context.store(
                self._series_repo.insert_if_absent,
                Series(
                    title=title,
                    original_name=candidate.original_name or "",
                    overview=candidate.overview,
                    first_air_date=candidate.first_air_date,
                    genre=map_genres(candidate.genre_ids),
                    original_language=candidate.original_language,
                    origin_country=tuple(candidate.origin_country),
                    popularity=candidate.popularity,
                    vote_average=candidate.vote_average,
                    vote_count=candidate.vote_count,
                    poster_path=poster,
                    backdrop_path=backdrop,
                ),
            )
        logger.info(f"Series created: {series.title}")
        return series

    async def _get_or_create_fallback_series(self, name: str, context: ScanContext) -> Series:
        async with context.title_locks[name]:
            series = await context.store(self._series_repo.get_by_title, name)
            if series is None:
                series = await context.store(self._series_repo.insert_if_absent, Series(title=name))
            return series
