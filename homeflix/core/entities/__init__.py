"""
Business entities representing core domain concepts.

Exports:
- MediaItem: A cataloged movie or episode file
- Series: Parent metadata of a TV show
"""

from homeflix.core.entities.media import MediaItem, Series

__all__ = [
    "MediaItem",
    "Series",
]
