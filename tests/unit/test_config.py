"""
Tests de la configuration (pydantic-settings, prefixe HOMEFLIX_).
"""

from pathlib import Path

import pytest

from homeflix.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        for name in ("HOMEFLIX_TMDB_API_KEY", "HOMEFLIX_MEDIA_BASE_PATH", "HOMEFLIX_PORT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.movies_root == Path("/mnt/nas/Homeflix/Movies")
        assert settings.series_root == Path("/mnt/nas/Homeflix/Series")
        assert settings.port == 3000
        assert settings.tmdb_language == "de-DE"
        assert settings.tmdb_enabled is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("HOMEFLIX_MEDIA_BASE_PATH", str(tmp_path))
        monkeypatch.setenv("HOMEFLIX_TMDB_API_KEY", "secret")
        monkeypatch.setenv("HOMEFLIX_PORT", "8080")

        settings = Settings(_env_file=None)

        assert settings.media_base_path == tmp_path
        assert settings.tmdb_enabled is True
        assert settings.port == 8080

    def test_extensions_normalized(self):
        settings = Settings(_env_file=None, media_extensions=".MKV, mp4,,.avi ")

        assert settings.extensions == frozenset({".mkv", ".mp4", ".avi"})

    def test_home_expanded(self):
        settings = Settings(_env_file=None, media_base_path="~/Homeflix")

        assert settings.media_base_path == Path.home() / "Homeflix"

    def test_invalid_concurrency_rejected(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, scan_concurrency=0)
