"""
Fonctions utilitaires partagees dans le projet Homeflix.

Ce module centralise les fonctions reutilisees a travers le codebase :
- map_genres : conversion des IDs de genre TMDB en chaine de noms
- year_from_date : annee sur 4 caracteres depuis une date ISO
- sanitize_folder_name : nom de dossier sur pour les images telechargees
- clean_title : retrait des caracteres invisibles et espaces superflus
- utc_now : horodatage UTC avec fuseau (created_at, last_played)
- run_blocking : appel bloquant (disque, SQLite) deporte dans le pool de threads
"""

import asyncio
import re
import unicodedata
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from functools import partial
from typing import Optional, TypeVar

from homeflix.utils.constants import GENRE_MAP, GENRE_SEPARATOR

T = TypeVar("T")


def map_genres(genre_ids: Optional[Iterable[int]]) -> str:
    """
    Convertit une liste d'IDs de genre TMDB en noms separes par des virgules.

    Les IDs inconnus sont ignores (jamais d'erreur).

    Exemple :
        map_genres([28, 12, 99999]) -> "Action, Adventure"
    """
    if not genre_ids:
        return ""
    names = [GENRE_MAP[gid] for gid in genre_ids if gid in GENRE_MAP]
    return GENRE_SEPARATOR.join(names)


def split_genres(genre: Optional[str]) -> list[str]:
    """Decoupe une chaine de genres stockee en base en noms individuels."""
    if not genre:
        return []
    return [name.strip() for name in genre.split(",") if name.strip()]


def year_from_date(value: Optional[str]) -> str:
    """Retourne l'annee (4 caracteres) d'une date "YYYY-MM-DD", ou "" si absente."""
    if not value or len(value) < 4 or not value[:4].isdigit():
        return ""
    return value[:4]


_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_MULTI_UNDERSCORE = re.compile(r"_+")


def sanitize_folder_name(name: Optional[str]) -> str:
    """
    Nettoie un titre pour l'utiliser comme nom de dossier.

    "Breaking Bad: Pilot!" -> "breaking_bad_pilot"
    """
    sanitized = _NON_ALNUM.sub("_", name or "")
    sanitized = _MULTI_UNDERSCORE.sub("_", sanitized).strip("_").lower()
    return sanitized or "unknown"


def strip_invisible_chars(text: str) -> str:
    """
    Retire les caractères Unicode invisibles d'une chaîne.

    Supprime les caractères de contrôle et les marques directionnelles
    qui peuvent provenir des APIs (LRM, RLM, BOM, etc.).
    """
    return "".join(
        char for char in text if unicodedata.category(char) not in ("Cf", "Cc")
    )


def clean_title(title: Optional[str]) -> str:
    """Nettoie un titre : retire les caractères invisibles et les espaces superflus."""
    if not title:
        return ""
    return strip_invisible_chars(title).strip()


def utc_now() -> datetime:
    """Date et heure courantes en UTC, avec fuseau."""
    return datetime.now(timezone.utc)


async def run_blocking(func: Callable[..., T], *args) -> T:
    """Execute un appel bloquant dans le pool de threads de la boucle courante."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args))
