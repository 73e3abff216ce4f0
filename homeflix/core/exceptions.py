"""
Exceptions du domaine Homeflix.

Hierarchie:
- HomeflixError
  - ScanConfigurationError : scan impossible (cle API absente, racine manquante)
  - ScanInProgressError : un scan est deja en cours
  - ScanFailedError : aucun fichier traite avec succes
  - SeriesNameMissingError : episode sans dossier de serie
  - UnclassifiedPathError : fichier hors des racines films/series
  - RangeNotSatisfiableError : plage d'octets invalide pour le fichier
  - MediaNotFoundError : ID de media inconnu
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from homeflix.services.reconciler import ScanReport


class HomeflixError(Exception):
    """Exception de base de l'application."""


class ScanConfigurationError(HomeflixError):
    """
    Exception levee quand la configuration interdit le lancement du scan.

    Attributes:
        missing_dirs: Repertoires racine introuvables (vide si la cause est la cle API)
    """

    def __init__(self, message: str, missing_dirs: Optional[list[str]] = None) -> None:
        self.missing_dirs = missing_dirs or []
        super().__init__(message)


class ScanInProgressError(HomeflixError):
    """Exception levee quand un scan est deja en cours."""

    def __init__(self) -> None:
        super().__init__("A media scan is already running")


class ScanFailedError(HomeflixError):
    """
    Exception levee quand le scan echoue globalement.

    Attributes:
        report: Rapport partiel du scan (None si l'echec survient avant le traitement)
    """

    def __init__(self, message: str, report: Optional["ScanReport"] = None) -> None:
        self.report = report
        super().__init__(message)


class SeriesNameMissingError(HomeflixError):
    """Exception levee quand un episode n'est pas range dans un dossier de serie."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No series folder found for: {path}")


class UnclassifiedPathError(HomeflixError):
    """Exception levee quand un fichier n'est ni sous la racine films ni sous la racine series."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Cannot classify media file: {path}")


class RangeNotSatisfiableError(HomeflixError):
    """
    Exception levee quand la plage demandee sort du fichier.

    Attributes:
        file_size: Taille du fichier (pour le header Content-Range: bytes */size)
    """

    def __init__(self, header: str, file_size: int) -> None:
        self.header = header
        self.file_size = file_size
        super().__init__(f"Range not satisfiable: {header} (size {file_size})")


class MediaNotFoundError(HomeflixError):
    """Exception levee quand un ID de media est inconnu du catalogue."""

    def __init__(self, media_id: int) -> None:
        self.media_id = media_id
        super().__init__("Media not found")
