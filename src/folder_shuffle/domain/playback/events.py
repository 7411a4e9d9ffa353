"""
Engine event routing.

Turns engine lifecycle events into SessionState updates. Handlers run on the
engine's event thread, so they only read metadata, commit state and fire
cheap best-effort side effects.

State machine per session: Running -> Terminated on QUEUE_FINISHED.
Terminated is absorbing; repeated QUEUE_FINISHED events are no-ops.
"""

from typing import Callable, Iterable, List, Optional

from loguru import logger

from folder_shuffle.core.output import log
from folder_shuffle.domain.library.metadata import get_display_title

from .engine import EngineEvent, PlaybackEngine
from .state import NowPlaying, SessionState

# Called with the committed NowPlaying after every confirmed track change
NowPlayingHook = Callable[[NowPlaying], None]

SUBSCRIBED_EVENTS = (
    EngineEvent.TRACK_CHANGED,
    EngineEvent.QUEUE_FINISHED,
    EngineEvent.STOPPED,
)


class EventRouter:
    """Sole writer of the session's now-playing state."""

    def __init__(
        self,
        engine: PlaybackEngine,
        state: SessionState,
        extensions: Iterable[str] = (),
        hooks: Optional[List[NowPlayingHook]] = None,
    ) -> None:
        self.engine = engine
        self.state = state
        self.extensions = list(extensions)
        self.hooks = list(hooks or [])
        self._attached: List[EngineEvent] = []

    def attach(self) -> None:
        """Subscribe to the engine's lifecycle events.

        Raises:
            EngineError: If the engine refuses a subscription
        """
        for kind in SUBSCRIBED_EVENTS:
            self.engine.subscribe(kind, self.handle)
            self._attached.append(kind)

    def detach(self) -> None:
        """Unsubscribe everything attach() registered."""
        if not self._attached:
            return
        kinds, self._attached = self._attached, []
        self.engine.unsubscribe(kinds)

    def handle(self, kind: EngineEvent) -> None:
        """Engine callback entry point."""
        if kind is EngineEvent.TRACK_CHANGED:
            self.on_track_changed()
        elif kind is EngineEvent.QUEUE_FINISHED:
            self.on_queue_finished()
        else:
            logger.debug(f"Event({kind}) ignored")

    def on_track_changed(self) -> Optional[NowPlaying]:
        """Commit the track the engine just started.

        Returns:
            The committed NowPlaying, or None if metadata could not be read
            (state is left untouched in that case)
        """
        try:
            title = self.engine.get_title()
            location = self.engine.get_location()
        except Exception as e:
            logger.warning(f"Could not read now-playing metadata: {e}")
            return None

        if not location:
            logger.warning("Track changed but the engine reported no location")
            return None

        display_title = get_display_title(title, location, self.extensions)
        now_playing = NowPlaying(local_path=location, title=display_title)
        self.state.set_now_playing(now_playing.local_path, now_playing.title)

        log(f"▶ Now playing: {display_title}")
        logger.debug(f"Now playing location: {location}")

        for hook in self.hooks:
            try:
                hook(now_playing)
            except Exception as e:
                logger.warning(f"Now-playing side effect {getattr(hook, '__name__', hook)} failed: {e}")

        return now_playing

    def on_queue_finished(self) -> bool:
        """Fire the termination signal once the queue has played through.

        Returns:
            True if this event fired the signal
        """
        if self.state.loop_mode:
            # Looping engines should never finish; terminate rather than hang
            logger.warning("Queue finished although loop mode is enabled")

        fired = self.state.termination.fire()
        if fired:
            log("Queue finished")
        else:
            logger.debug("Queue finished again after termination; ignoring")
        return fired
