"""
Music library domain models.

Contains data structures for representing playable files.
"""

from typing import NamedTuple


class Track(NamedTuple):
    """Represents one playable media file.

    local_path is absolute and unique within a library scan. title is the
    display title derived from the file name; the engine's metadata title
    replaces it for display once the track is actually playing.
    """
    local_path: str
    title: str
