"""
Playback command handlers for folder-shuffle.

Handles: n (next), p (previous), t (toggle pause), r (remove and advance)

Each handler issues one asynchronous request through the session. Engine
errors are reported by the session and the reader keeps going.
"""

from folder_shuffle.core.output import log
from folder_shuffle.domain.playback.session import PlaybackSession


def handle_next_command(session: PlaybackSession) -> bool:
    """Handle n - skip to the next track in the queue."""
    if session.next():
        log("⏭ Next song", "debug")
        return True
    return False


def handle_previous_command(session: PlaybackSession) -> bool:
    """Handle p - go back to the previous track in the queue."""
    if session.previous():
        log("⏮ Previous song", "debug")
        return True
    return False


def handle_toggle_pause_command(session: PlaybackSession) -> bool:
    """Handle t - pause or resume playback."""
    return session.toggle_pause()


def handle_remove_command(session: PlaybackSession) -> bool:
    """Handle r - skip the current track and delete its file from disk."""
    return session.remove_current_and_advance() is not None
