"""Terminal title updates."""

import sys
from typing import Optional, TextIO

from loguru import logger

from folder_shuffle.domain.playback.state import NowPlaying

# OSC 1: set icon name (the tab title in most terminal emulators)
TITLE_SEQUENCE = "\033]1;{title} \007"


def sanitize_title(title: str) -> str:
    """Drop control characters that would end the escape sequence early."""
    return "".join(ch for ch in title if ch.isprintable())


def set_terminal_title(title: str, stream: Optional[TextIO] = None) -> bool:
    """Set the terminal tab title. No-op when the stream is not a TTY.

    Returns:
        True if the escape sequence was written
    """
    stream = stream or sys.stdout
    try:
        if not stream.isatty():
            return False
        stream.write(TITLE_SEQUENCE.format(title=sanitize_title(title)))
        stream.flush()
    except (OSError, ValueError) as e:
        logger.warning(f"Could not set terminal title: {e}")
        return False
    return True


def update_title_for(now_playing: NowPlaying) -> None:
    """Event-router hook: show the now-playing title in the terminal tab."""
    set_terminal_title(now_playing.title or "")
