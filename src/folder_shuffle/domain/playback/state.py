"""
Playback session state shared between the command reader thread and the
engine event thread.
"""

import threading
from typing import NamedTuple, Optional


class NowPlaying(NamedTuple):
    """Immutable snapshot of what the engine last reported as playing."""

    local_path: Optional[str] = None
    title: Optional[str] = None


class TerminationSignal:
    """One-shot completion marker the main thread waits on.

    fire() may be called any number of times; only the first call has an
    effect, later calls are no-ops.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()

    def fire(self) -> bool:
        """Fire the signal.

        Returns:
            True if this call fired it, False if it had already fired
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            return True

    def is_fired(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until fired or timeout. Returns True once fired."""
        return self._event.wait(timeout)


class SessionState:
    """Mutable state of one playback session.

    current_track_path is the last track the engine *confirmed* via a track
    change event, not the last one requested: next/previous are asynchronous.
    Only the event router writes it (set_now_playing); everyone else reads a
    NowPlaying snapshot.
    """

    def __init__(self, loop_mode: bool = True) -> None:
        self._lock = threading.Lock()
        self._now_playing = NowPlaying()
        self._loop_mode = loop_mode
        self.termination = TerminationSignal()

    @property
    def loop_mode(self) -> bool:
        # Set once at construction, never changed at runtime
        return self._loop_mode

    @property
    def current_track_path(self) -> Optional[str]:
        with self._lock:
            return self._now_playing.local_path

    @property
    def current_title(self) -> Optional[str]:
        with self._lock:
            return self._now_playing.title

    def snapshot(self) -> NowPlaying:
        """Get path and title together, consistent with each other."""
        with self._lock:
            return self._now_playing

    def set_now_playing(self, local_path: Optional[str], title: Optional[str]) -> NowPlaying:
        """Commit a confirmed track change. Returns the previous value."""
        with self._lock:
            previous = self._now_playing
            self._now_playing = NowPlaying(local_path=local_path, title=title)
            return previous

    @property
    def terminated(self) -> bool:
        return self.termination.is_fired()
