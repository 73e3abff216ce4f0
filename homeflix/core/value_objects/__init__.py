"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaType : Type de media (MOVIE, EPISODE, UNKNOWN)
- EpisodeLocation : Serie, saison et episode deduits d'un chemin
- ByteRange : Plage d'octets d'une requete de streaming partielle
"""

from homeflix.core.value_objects.byte_range import ByteRange
from homeflix.core.value_objects.media_type import EpisodeLocation, MediaType

__all__ = [
    "ByteRange",
    "EpisodeLocation",
    "MediaType",
]
