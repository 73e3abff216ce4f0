"""
Interfaces ports pour le système de fichiers.

Interfaces abstraites (ports) définissant les contrats pour le parcours des
répertoires de la médiathèque.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class WalkResult:
    """
    Résultat du parcours de plusieurs répertoires racine.

    Attributs :
        files : Chemins absolus des fichiers retenus
        errors : Erreurs par répertoire racine (racine absente, dossier illisible)
    """

    files: set[Path] = field(default_factory=set)
    errors: dict[str, list[str]] = field(default_factory=dict)

    def add_error(self, root: Path, message: str) -> None:
        """Enregistre une erreur pour une racine."""
        self.errors.setdefault(str(root), []).append(message)


class IFileSystem(ABC):
    """
    Interface pour les opérations sur les fichiers de la médiathèque.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Vérifie si un chemin existe."""
        ...

    @abstractmethod
    def walk(self, roots: Iterable[Path], extensions: Iterable[str]) -> WalkResult:
        """
        Liste récursivement les fichiers des racines dont l'extension est acceptée.

        Args :
            roots : Répertoires racine à parcourir
            extensions : Extensions acceptées avec le point initial (insensible à la casse)

        Retourne :
            WalkResult avec les fichiers trouvés et les erreurs par racine
        """
        ...

    @abstractmethod
    def get_size(self, path: Path) -> int:
        """
        Récupère la taille du fichier en octets.

        Lève OSError si le fichier est inaccessible.
        """
        ...
