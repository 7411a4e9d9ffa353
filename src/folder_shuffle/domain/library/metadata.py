"""
Display-title helpers for playable files.
"""

from pathlib import Path
from typing import Iterable, Optional

from .models import Track


def strip_known_extensions(title: str, extensions: Iterable[str]) -> str:
    """Remove a trailing known media extension from a title.

    Engines usually report the file name as the title when a file carries no
    tags, so "Song.webm" should display as "Song". Matching is case-insensitive
    and only the final extension is removed.
    """
    lowered = title.lower()
    for ext in extensions:
        if ext and lowered.endswith(ext.lower()):
            return title[: -len(ext)]
    return title


def track_from_path(local_path: str, extensions: Iterable[str]) -> Track:
    """Build a Track whose title comes from the file name."""
    name = Path(local_path).name
    return Track(local_path=local_path, title=strip_known_extensions(name, extensions))


def get_display_title(
    title: Optional[str], location: Optional[str], extensions: Iterable[str]
) -> str:
    """Get a display-friendly title for the track the engine reports.

    Prefers the engine's metadata title, falls back to the file name of the
    location, and strips known extensions from whichever is used.
    """
    extensions = list(extensions)
    if title and title.strip():
        return strip_known_extensions(title.strip(), extensions).strip()
    if location:
        return strip_known_extensions(Path(location).name, extensions)
    return "<Unknown Track>"
