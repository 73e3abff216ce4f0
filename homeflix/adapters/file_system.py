"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem : parcours recursif des racines
de la mediatheque avec filtrage par extension et agregation des erreurs.
"""

import os
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from homeflix.core.ports.file_system import IFileSystem, WalkResult


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Le parcours:
    - Accepte les extensions sans tenir compte de la casse
    - Ignore les liens symboliques (fichiers et dossiers) pour eviter les doublons
    - N'interrompt jamais le parcours sur une racine en erreur
    """

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def get_size(self, path: Path) -> int:
        """Recupere la taille du fichier en octets."""
        return path.stat().st_size

    def walk(self, roots: Iterable[Path], extensions: Iterable[str]) -> WalkResult:
        """
        Liste les fichiers des racines dont l'extension est acceptee.

        Une racine absente ou un sous-dossier illisible est enregistre
        dans WalkResult.errors sans interrompre les autres racines.

        Args:
            roots: Repertoires racine a parcourir
            extensions: Extensions acceptees (ex: {".mkv", ".mp4"})

        Returns:
            WalkResult avec les chemins absolus et les erreurs par racine
        """
        accepted = frozenset(ext.lower() for ext in extensions)
        result = WalkResult()

        for root in roots:
            root = Path(root).absolute()
            if not root.is_dir():
                logger.error(f"Media root does not exist: {root}")
                result.add_error(root, f"Directory does not exist: {root}")
                continue

            found = 0
            for path in self._iter_files(root, result):
                if path.suffix.lower() in accepted:
                    result.files.add(path)
                    found += 1
            logger.debug(f"{found} media files found under {root}")

        return result

    def _iter_files(self, root: Path, result: WalkResult) -> Iterable[Path]:
        """Parcourt une racine (os.walk) en enregistrant les dossiers illisibles."""

        def on_error(error: OSError) -> None:
            logger.error(f"Error scanning directory {error.filename}: {error.strerror}")
            result.add_error(root, f"{error.filename}: {error.strerror}")

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=False):
            current = Path(dirpath)
            # Ne pas descendre dans les dossiers lies
            dirnames[:] = [d for d in dirnames if not (current / d).is_symlink()]
            for name in filenames:
                path = current / name
                if path.is_symlink():
                    continue
                yield path
