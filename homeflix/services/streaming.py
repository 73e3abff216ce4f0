"""
Lecture partielle des fichiers video (requetes HTTP Range).

Formes acceptees pour le header Range:
    bytes=500-999   octets 500 a 999 inclus
    bytes=500-      de l'octet 500 a la fin
    bytes=-500      les 500 derniers octets

Seule la premiere plage d'un header multi-plages est servie. Un header
syntaxiquement invalide est ignore (fichier complet, RFC 7233).
"""

import re
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from homeflix.core.exceptions import RangeNotSatisfiableError
from homeflix.core.value_objects import ByteRange
from homeflix.utils.constants import STREAM_CHUNK_SIZE

_RANGE_PATTERN = re.compile(r"^\s*bytes\s*=\s*(\d*)\s*-\s*(\d*)\s*$", re.IGNORECASE)


def parse_range_header(header: Optional[str], file_size: int) -> Optional[ByteRange]:
    """
    Convertit un header Range en plage d'octets bornee au fichier.

    Args:
        header: Valeur brute du header Range (ou None)
        file_size: Taille du fichier en octets

    Returns:
        La plage a servir, ou None pour servir le fichier complet

    Raises:
        RangeNotSatisfiableError: Si la plage est hors du fichier
    """
    if not header:
        return None

    first = header.split(",", 1)[0]
    match = _RANGE_PATTERN.match(first)
    if not match:
        return None

    start_str, end_str = match.groups()
    if not start_str and not end_str:
        return None

    if not start_str:
        # Suffixe: les N derniers octets
        suffix = int(end_str)
        if suffix == 0 or file_size == 0:
            raise RangeNotSatisfiableError(header, file_size)
        start = max(file_size - suffix, 0)
        end = file_size - 1
    else:
        start = int(start_str)
        end = int(end_str) if end_str else file_size - 1
        end = min(end, file_size - 1)

    if start >= file_size or start > end:
        raise RangeNotSatisfiableError(header, file_size)

    return ByteRange(start=start, end=end, total=file_size)


def iter_file(
    path: Path,
    start: int = 0,
    end: Optional[int] = None,
    chunk_size: int = STREAM_CHUNK_SIZE,
) -> Iterator[bytes]:
    """
    Lit les octets [start, end] d'un fichier par blocs.

    Le fichier est ferme a la fin de la lecture ou a la fermeture du
    generateur (deconnexion du client).
    """
    with open(path, "rb") as f:
        f.seek(start)
        remaining = None if end is None else end - start + 1
        while remaining is None or remaining > 0:
            size = chunk_size if remaining is None else min(chunk_size, remaining)
            chunk = f.read(size)
            if not chunk:
                break
            if remaining is not None:
                remaining -= len(chunk)
            yield chunk
