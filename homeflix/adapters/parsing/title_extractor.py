"""
Extraction des informations portees par le chemin d'un fichier media.

Conventions de rangement reconnues:
    <base>/Movies/<releaseTag>-<Titre>.mkv
    <base>/Series/<Serie>/Season 1/E01.mp4
    <base>/Series/<Serie>/Staffel_2/Show.S02E05.mkv
"""

import re
from pathlib import Path

from homeflix.core.exceptions import SeriesNameMissingError
from homeflix.core.ports.parser import ITitleExtractor
from homeflix.core.value_objects import EpisodeLocation, MediaType

# Marqueurs de saison dans un dossier ou un nom de fichier (de, en, fr)
_SEASON_WORD_PATTERN = re.compile(r"(?:staffel|season|saison)[\s_]?(\d+)", re.IGNORECASE)
# Convention S01E02 dans le nom de fichier
_SXXEXX_PATTERN = re.compile(r"S(\d+)E(\d+)", re.IGNORECASE)
_EPISODE_WORD_PATTERN = re.compile(r"(?:episode|folge)[\s_.]?(\d+)", re.IGNORECASE)
_EPISODE_PATTERN = re.compile(r"E(\d+)", re.IGNORECASE)

DEFAULT_SEASON = 1
DEFAULT_EPISODE = 1


class TitleExtractor(ITitleExtractor):
    """
    Derive la requete de recherche, le type et la position d'episode d'un fichier.

    Args:
        movies_dir: Nom du repertoire racine des films (ex: "Movies")
        series_dir: Nom du repertoire racine des series (ex: "Series")
    """

    def __init__(self, movies_dir: str, series_dir: str) -> None:
        self._movies_dir = movies_dir
        self._series_dir = series_dir

    def extract_query(self, filename: str) -> str:
        """
        Derive la requete de recherche depuis le nom de fichier.

        L'extension est retiree, puis tout ce qui precede le premier tiret
        (tiret compris) : "GRP-Interstellar.mkv" -> "Interstellar".
        Si le reste est vide, le nom complet sans extension est conserve.
        """
        stem = Path(filename).stem.strip()
        if "-" in stem:
            remainder = stem.split("-", 1)[1].strip()
            if remainder:
                return remainder
        return stem

    def classify(self, path: Path) -> MediaType:
        """
        Classe un fichier selon le premier segment racine de son chemin.

        Returns:
            MOVIE, EPISODE, ou UNKNOWN si aucune racine n'apparait
        """
        for part in Path(path).parts[:-1]:
            if part == self._movies_dir:
                return MediaType.MOVIE
            if part == self._series_dir:
                return MediaType.EPISODE
        return MediaType.UNKNOWN

    def parse_episode(self, path: Path) -> EpisodeLocation:
        """
        Extrait la serie, la saison et l'episode d'un chemin d'episode.

        Raises:
            SeriesNameMissingError: Si le fichier n'est pas dans un dossier de serie
        """
        path = Path(path)
        return EpisodeLocation(
            series_name=self._series_name(path),
            season=self._season_number(path),
            episode=self._episode_number(path.name),
        )

    def _series_name(self, path: Path) -> str:
        """Segment qui suit directement la racine series (doit etre un dossier)."""
        directories = path.parts[:-1]
        for index, part in enumerate(directories):
            if part == self._series_dir:
                if index + 1 < len(directories):
                    return directories[index + 1]
                break
        raise SeriesNameMissingError(str(path))

    def _season_number(self, path: Path) -> int:
        match = _SEASON_WORD_PATTERN.search(str(path))
        if match:
            return int(match.group(1))
        match = _SXXEXX_PATTERN.search(path.name)
        if match:
            return int(match.group(1))
        return DEFAULT_SEASON

    def _episode_number(self, filename: str) -> int:
        for pattern, group in (
            (_SXXEXX_PATTERN, 2),
            (_EPISODE_WORD_PATTERN, 1),
            (_EPISODE_PATTERN, 1),
        ):
            match = pattern.search(filename)
            if match:
                return int(match.group(group))
        return DEFAULT_EPISODE
