"""
Objet valeur pour les requetes HTTP partielles (Range).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ByteRange:
    """
    Plage d'octets inclusive [start, end] d'un fichier.

    Attributs:
        start: Premier octet servi
        end: Dernier octet servi (inclus)
        total: Taille totale du fichier
    """

    start: int
    end: int
    total: int

    @property
    def length(self) -> int:
        """Nombre d'octets de la plage."""
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        """Valeur du header Content-Range ("bytes 0-99/1000")."""
        return f"bytes {self.start}-{self.end}/{self.total}"
