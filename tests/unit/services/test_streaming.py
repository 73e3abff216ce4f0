"""
Tests unitaires pour le decoupage des requetes Range et la lecture par blocs.
"""

from pathlib import Path

import pytest

from homeflix.core.exceptions import RangeNotSatisfiableError
from homeflix.core.value_objects import ByteRange
from homeflix.services.streaming import iter_file, parse_range_header


class TestParseRangeHeader:
    """Tests de parse_range_header()."""

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("bytes=0-99", ByteRange(0, 99, 1000)),
            ("bytes=500-", ByteRange(500, 999, 1000)),
            ("bytes=-100", ByteRange(900, 999, 1000)),
            ("bytes=900-5000", ByteRange(900, 999, 1000)),
            ("bytes=-5000", ByteRange(0, 999, 1000)),
            ("bytes=0-0", ByteRange(0, 0, 1000)),
            ("bytes=0-99, 200-299", ByteRange(0, 99, 1000)),
            (" bytes = 10 - 20 ", ByteRange(10, 20, 1000)),
        ],
    )
    def test_valid_ranges(self, header: str, expected: ByteRange):
        assert parse_range_header(header, 1000) == expected

    @pytest.mark.parametrize("header", [None, "", "items=0-10", "bytes=abc", "bytes=-", "bytes"])
    def test_invalid_header_ignored(self, header):
        """Un header invalide est ignore: le fichier complet est servi."""
        assert parse_range_header(header, 1000) is None

    @pytest.mark.parametrize("header", ["bytes=1000-", "bytes=2000-3000", "bytes=50-10", "bytes=-0"])
    def test_unsatisfiable_ranges(self, header: str):
        with pytest.raises(RangeNotSatisfiableError) as exc_info:
            parse_range_header(header, 1000)
        assert exc_info.value.file_size == 1000

    def test_any_range_on_empty_file_is_unsatisfiable(self):
        with pytest.raises(RangeNotSatisfiableError):
            parse_range_header("bytes=0-", 0)

    def test_byte_range_headers(self):
        byte_range = ByteRange(start=100, end=199, total=1000)
        assert byte_range.length == 100
        assert byte_range.content_range == "bytes 100-199/1000"


class TestIterFile:
    """Tests de iter_file()."""

    @pytest.fixture
    def video(self, tmp_path: Path) -> Path:
        path = tmp_path / "video.mp4"
        path.write_bytes(bytes(range(256)) * 4)
        return path

    def test_reads_whole_file(self, video: Path):
        assert b"".join(iter_file(video, chunk_size=100)) == video.read_bytes()

    def test_reads_inclusive_range(self, video: Path):
        data = b"".join(iter_file(video, start=10, end=19, chunk_size=3))
        assert data == video.read_bytes()[10:20]

    def test_chunks_respect_size(self, video: Path):
        chunks = list(iter_file(video, start=0, end=249, chunk_size=100))
        assert [len(c) for c in chunks] == [100, 100, 50]

    def test_range_past_end_stops_at_eof(self, video: Path):
        data = b"".join(iter_file(video, start=1000, end=5000))
        assert data == video.read_bytes()[1000:]
