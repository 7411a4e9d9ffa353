"""
Playback engine capability surface.

The session and event router only talk to an engine through this protocol,
so tests can drive them with a fake and the libVLC adapter stays swappable.
"""

from enum import Enum
from typing import Callable, Iterable, Optional, Protocol, Sequence
from urllib.parse import unquote, urlparse


class EngineEvent(Enum):
    """Lifecycle events an engine can emit."""

    TRACK_CHANGED = "track_changed"  # engine started a new queue item
    QUEUE_FINISHED = "queue_finished"  # whole queue played once (no loop)
    STOPPED = "stopped"


EventCallback = Callable[[EngineEvent], None]


class PlaybackEngine(Protocol):
    """Commands and queries the core needs from a playback engine.

    Every method raises EngineError on failure. Callbacks registered with
    subscribe() may run on an engine-owned thread and must return quickly.
    """

    def initialize(self, options: Sequence[str]) -> None: ...

    def create_queue(self) -> None: ...

    def add_to_queue(self, path: str) -> None: ...

    def set_queue(self) -> None: ...

    def set_loop_mode(self, enabled: bool) -> None: ...

    def play(self) -> None: ...

    def stop(self) -> None: ...

    def next(self) -> None: ...

    def previous(self) -> None: ...

    def toggle_pause(self) -> None: ...

    def subscribe(self, kind: EngineEvent, callback: EventCallback) -> None: ...

    def unsubscribe(self, kinds: Iterable[EngineEvent]) -> None: ...

    def get_title(self) -> Optional[str]: ...

    def get_location(self) -> Optional[str]: ...

    def release_player(self) -> None: ...

    def release_queue(self) -> None: ...

    def close(self) -> None: ...


def mrl_to_path(location: Optional[str]) -> Optional[str]:
    """Convert a media locator (file:///a/b%20c.mp4) to a filesystem path.

    Plain paths pass through unchanged; non-file URLs are returned as-is.
    """
    if not location:
        return None
    parsed = urlparse(location)
    if parsed.scheme != "file":
        return location
    return unquote(parsed.path)
