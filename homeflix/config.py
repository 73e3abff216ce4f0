"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe HOMEFLIX_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle au démarrage, mais obligatoire pour lancer un scan.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de homeflix/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe HOMEFLIX_.
    Exemple : HOMEFLIX_MEDIA_BASE_PATH=/mnt/nas/Homeflix

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="HOMEFLIX_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Médiathèque
    media_base_path: Path = Field(default=Path("/mnt/nas/Homeflix"))
    movies_dir: str = Field(default="Movies")
    series_dir: str = Field(default="Series")
    media_extensions: str = Field(default=".mp4,.mkv,.avi,.mov")

    # Base de données et fichiers locaux
    database_url: str = Field(default="sqlite:///data/media_catalog.db")
    assets_dir: Path = Field(default=Path("data"))
    cache_dir: Path = Field(default=Path(".cache/api"))

    # TMDB (clé OBLIGATOIRE pour le scan uniquement)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="de-DE")
    tmdb_include_adult: bool = Field(default=True)

    # Traitement
    scan_concurrency: int = Field(default=4, ge=1, le=32)

    # Serveur
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("data/app.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("media_base_path", "assets_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def movies_root(self) -> Path:
        """Répertoire racine des films."""
        return self.media_base_path / self.movies_dir

    @property
    def series_root(self) -> Path:
        """Répertoire racine des séries."""
        return self.media_base_path / self.series_dir

    @property
    def extensions(self) -> frozenset[str]:
        """
        Extensions acceptées, normalisées en minuscules avec le point initial.

        ".MKV, mp4" -> {".mkv", ".mp4"}
        """
        normalized = set()
        for ext in self.media_extensions.split(","):
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.add(ext if ext.startswith(".") else f".{ext}")
        return frozenset(normalized)
