"""
Playback session: the command side of the control loop.

The session only *requests* transitions from the engine. Which track is
playing is committed by the event router when the engine confirms it, so
nothing here writes SessionState.current_track_path.
"""

import os
import threading
from typing import TYPE_CHECKING, Optional, Sequence

from loguru import logger

from folder_shuffle.core.exceptions import EmptyQueueError, EngineError
from folder_shuffle.core.output import log
from folder_shuffle.domain.library.models import Track

from .engine import PlaybackEngine
from .state import SessionState

if TYPE_CHECKING:
    from .events import EventRouter


class PlaybackSession:
    """Owns the engine for one run of the player."""

    def __init__(self, engine: PlaybackEngine, state: Optional[SessionState] = None) -> None:
        self.engine = engine
        self.state = state if state is not None else SessionState()
        self.router: Optional["EventRouter"] = None
        self._shutdown_lock = threading.Lock()
        self._closed = False
        self._engine_used = False

    def attach_router(self, router: "EventRouter") -> None:
        """Register the event router.

        start() subscribes it before playback begins so the first track
        change is not missed; shutdown() detaches it before releasing.
        """
        self.router = router

    def start(
        self,
        queue: Sequence[Track],
        loop_mode: Optional[bool] = None,
        engine_options: Sequence[str] = (),
    ) -> None:
        """Initialize the engine, load the queue and begin playback.

        Args:
            queue: Shuffled tracks
            loop_mode: Loop the queue; defaults to the state's loop mode
            engine_options: Options passed to engine.initialize()

        Raises:
            EmptyQueueError: If queue is empty (no engine call is made)
            EngineError: If the engine fails to initialize or rejects any
                setup step
        """
        if not queue:
            raise EmptyQueueError(
                "No playable files found; nothing to play. "
                "Check the library path and supported formats."
            )

        if loop_mode is None:
            loop_mode = self.state.loop_mode

        self._engine_used = True
        self.engine.initialize(engine_options)
        if self.router is not None:
            self.router.attach()

        self.engine.create_queue()
        for track in queue:
            self.engine.add_to_queue(track.local_path)
        self.engine.set_queue()
        self.engine.set_loop_mode(loop_mode)
        self.engine.play()

        logger.info(f"Playback started: {len(queue)} tracks (loop={loop_mode})")

    def next(self) -> bool:
        """Request the next track. Returns False if the engine refused."""
        try:
            self.engine.next()
        except EngineError as e:
            log(f"Could not skip to next track: {e}", "error")
            return False
        logger.debug("Requested next track")
        return True

    def previous(self) -> bool:
        """Request the previous track. Returns False if the engine refused."""
        try:
            self.engine.previous()
        except EngineError as e:
            log(f"Could not go back to previous track: {e}", "error")
            return False
        logger.debug("Requested previous track")
        return True

    def toggle_pause(self) -> bool:
        """Request a play/pause toggle. Returns False if the engine refused."""
        try:
            self.engine.toggle_pause()
        except EngineError as e:
            log(f"Could not toggle pause: {e}", "error")
            return False
        log("⏯ Toggle pause")
        return True

    def remove_current_and_advance(self) -> Optional[str]:
        """Skip the current track and delete its file.

        The path is captured before next() is issued: once the engine
        advances, the event router may overwrite current_track_path at any
        moment, and deleting after that would remove the wrong file.

        Returns:
            The deleted path, or None if nothing was deleted
        """
        local_path = self.state.current_track_path
        if not local_path:
            log("Nothing is playing yet; nothing to remove", "warning")
            return None

        if not self.next():
            log(f"Not removing {local_path} because the skip failed", "warning")
            return None

        try:
            os.remove(local_path)
        except OSError as e:
            log(f"Could not remove {local_path}: {e}", "error")
            return None

        log(f"🗑 Removed {local_path}")
        return local_path

    def shutdown(self) -> None:
        """Release the engine: detach events, stop, player, media list, instance.

        The player references the media list, so the list is released only
        after the player. Safe to call more than once.
        """
        with self._shutdown_lock:
            if self._closed:
                return
            self._closed = True

        if not self._engine_used:
            return

        if self.router is not None:
            try:
                self.router.detach()
            except EngineError as e:
                logger.warning(f"Failed to detach event router: {e}")

        steps = (
            ("stop playback", self.engine.stop),
            ("release player", self.engine.release_player),
            ("release media list", self.engine.release_queue),
            ("close engine", self.engine.close),
        )
        for name, step in steps:
            try:
                step()
            except EngineError as e:
                logger.warning(f"Failed to {name}: {e}")

        logger.info("Playback session shut down")
