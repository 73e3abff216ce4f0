"""
Tests unitaires pour TitleExtractor.

Verifie la derivation de la requete de recherche, la classification
films/series et l'extraction saison/episode depuis le chemin.
"""

from pathlib import Path

import pytest

from homeflix.adapters.parsing.title_extractor import TitleExtractor
from homeflix.core.exceptions import SeriesNameMissingError
from homeflix.core.value_objects import EpisodeLocation, MediaType

BASE = Path("/media/Homeflix")


@pytest.fixture
def extractor() -> TitleExtractor:
    return TitleExtractor(movies_dir="Movies", series_dir="Series")


class TestExtractQuery:
    """Tests de extract_query()."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("GRP-Interstellar.mkv", "Interstellar"),
            ("2024-Dune Part Two.mp4", "Dune Part Two"),
            ("Interstellar.mkv", "Interstellar"),
            ("A-B-C.mkv", "B-C"),
            ("GRP-.mkv", "GRP-"),
            ("E01.mp4", "E01"),
        ],
    )
    def test_extract_query(self, extractor: TitleExtractor, filename: str, expected: str):
        assert extractor.extract_query(filename) == expected


class TestClassify:
    """Tests de classify()."""

    def test_movie(self, extractor: TitleExtractor):
        assert extractor.classify(BASE / "Movies" / "GRP-Interstellar.mkv") == MediaType.MOVIE

    def test_movie_in_subfolder(self, extractor: TitleExtractor):
        assert extractor.classify(BASE / "Movies" / "Sci-Fi" / "Dune.mkv") == MediaType.MOVIE

    def test_episode(self, extractor: TitleExtractor):
        path = BASE / "Series" / "Breaking Bad" / "Season 1" / "E01.mp4"
        assert extractor.classify(path) == MediaType.EPISODE

    def test_outside_roots_is_unknown(self, extractor: TitleExtractor):
        assert extractor.classify(Path("/tmp/Interstellar.mkv")) == MediaType.UNKNOWN

    def test_filename_named_like_root_is_ignored(self, extractor: TitleExtractor):
        assert extractor.classify(Path("/tmp/Movies")) == MediaType.UNKNOWN


class TestParseEpisode:
    """Tests de parse_episode()."""

    def test_season_folder_and_episode_file(self, extractor: TitleExtractor):
        path = BASE / "Series" / "Breaking Bad" / "Season 1" / "E01.mp4"
        assert extractor.parse_episode(path) == EpisodeLocation("Breaking Bad", 1, 1)

    def test_staffel_folder(self, extractor: TitleExtractor):
        path = BASE / "Series" / "Dark" / "Staffel_2" / "Dark.S02E05.mkv"
        assert extractor.parse_episode(path) == EpisodeLocation("Dark", 2, 5)

    def test_sxxexx_in_filename_without_season_folder(self, extractor: TitleExtractor):
        path = BASE / "Series" / "Dark" / "Dark.S03E07.mkv"
        assert extractor.parse_episode(path) == EpisodeLocation("Dark", 3, 7)

    def test_episode_word(self, extractor: TitleExtractor):
        path = BASE / "Series" / "Dark" / "Saison 1" / "Folge 4.mkv"
        assert extractor.parse_episode(path) == EpisodeLocation("Dark", 1, 4)

    def test_defaults_to_season_and_episode_one(self, extractor: TitleExtractor):
        path = BASE / "Series" / "Dark" / "Pilot.mkv"
        assert extractor.parse_episode(path) == EpisodeLocation("Dark", 1, 1)

    def test_file_directly_in_series_root_raises(self, extractor: TitleExtractor):
        with pytest.raises(SeriesNameMissingError):
            extractor.parse_episode(BASE / "Series" / "E01.mp4")
