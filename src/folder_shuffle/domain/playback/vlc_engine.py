"""
libVLC playback engine (python-vlc MediaListPlayer).

Implements the PlaybackEngine protocol. libVLC delivers events on its own
thread; callbacks registered through subscribe() are invoked there.
"""

from typing import Dict, Iterable, Optional, Sequence

import vlc
from loguru import logger

from folder_shuffle.core.exceptions import EngineError

from .engine import EngineEvent, EventCallback, mrl_to_path

VLC_EVENTS = {
    EngineEvent.TRACK_CHANGED: vlc.EventType.MediaListPlayerNextItemSet,
    EngineEvent.QUEUE_FINISHED: vlc.EventType.MediaListPlayerPlayed,
    EngineEvent.STOPPED: vlc.EventType.MediaListPlayerStopped,
}


class VlcEngine:
    """Shuffle queue playback through a libVLC media list player."""

    def __init__(self) -> None:
        self.instance: Optional[vlc.Instance] = None
        self.list_player: Optional[vlc.MediaListPlayer] = None
        self.media_list: Optional[vlc.MediaList] = None
        self._callbacks: Dict[EngineEvent, EventCallback] = {}

    def _require_player(self) -> vlc.MediaListPlayer:
        if self.list_player is None:
            raise EngineError("VLC list player is not initialized")
        return self.list_player

    def initialize(self, options: Sequence[str]) -> None:
        """Create the libVLC instance and the list player."""
        try:
            self.instance = vlc.Instance(list(options))
        except Exception as e:
            raise EngineError(f"Failed to initialize libVLC: {e}") from e
        if self.instance is None:
            raise EngineError(f"Failed to initialize libVLC with options {list(options)}")

        self.list_player = self.instance.media_list_player_new()
        if self.list_player is None:
            raise EngineError("Failed to create VLC list player")

        logger.info(f"libVLC {vlc.libvlc_get_version().decode()} initialized")

    def create_queue(self) -> None:
        if self.instance is None:
            raise EngineError("libVLC is not initialized")
        self.media_list = self.instance.media_list_new()
        if self.media_list is None:
            raise EngineError("Failed to create VLC media list")

    def add_to_queue(self, path: str) -> None:
        if self.instance is None or self.media_list is None:
            raise EngineError("Media list is not created")

        media = self.instance.media_new_path(path)
        if media is None:
            raise EngineError(f"VLC could not open {path}")

        self.media_list.lock()
        try:
            result = self.media_list.add_media(media)
        finally:
            self.media_list.unlock()
            media.release()  # the list holds its own reference

        if result != 0:
            raise EngineError(f"VLC could not queue {path}")

    def set_queue(self) -> None:
        if self.media_list is None:
            raise EngineError("Media list is not created")
        self._require_player().set_media_list(self.media_list)

    def set_loop_mode(self, enabled: bool) -> None:
        mode = vlc.PlaybackMode.loop if enabled else vlc.PlaybackMode.default
        self._require_player().set_playback_mode(mode)

    def play(self) -> None:
        self._require_player().play()

    def stop(self) -> None:
        if self.list_player is not None:
            self.list_player.stop()

    def next(self) -> None:
        if self._require_player().next() != 0:
            raise EngineError("no next item in the queue")

    def previous(self) -> None:
        if self._require_player().previous() != 0:
            raise EngineError("no previous item in the queue")

    def toggle_pause(self) -> None:
        self._require_player().pause()

    def subscribe(self, kind: EngineEvent, callback: EventCallback) -> None:
        manager = self._require_player().event_manager()

        def _on_event(event, kind=kind):
            callback(kind)

        try:
            result = manager.event_attach(VLC_EVENTS[kind], _on_event)
        except Exception as e:
            raise EngineError(f"Failed to attach {kind.value} handler: {e}") from e
        if result:
            raise EngineError(f"Failed to attach {kind.value} handler (code {result})")

        self._callbacks[kind] = _on_event

    def unsubscribe(self, kinds: Iterable[EngineEvent]) -> None:
        if self.list_player is None:
            return
        manager = self.list_player.event_manager()
        for kind in kinds:
            if self._callbacks.pop(kind, None) is not None:
                manager.event_detach(VLC_EVENTS[kind])

    def _with_current_media(self, read):
        """Run read(media) against the currently playing media, releasing refs."""
        player = self._require_player().get_media_player()
        if player is None:
            raise EngineError("VLC list player has no media player")
        try:
            media = player.get_media()
            if media is None:
                raise EngineError("Nothing is loaded in the media player")
            try:
                return read(media)
            finally:
                media.release()
        finally:
            player.release()

    def get_title(self) -> Optional[str]:
        return self._with_current_media(lambda media: media.get_meta(vlc.Meta.Title))

    def get_location(self) -> Optional[str]:
        return mrl_to_path(self._with_current_media(lambda media: media.get_mrl()))

    def release_player(self) -> None:
        if self.list_player is not None:
            self.list_player.release()
            self.list_player = None

    def release_queue(self) -> None:
        if self.media_list is not None:
            self.media_list.release()
            self.media_list = None

    def close(self) -> None:
        if self.instance is not None:
            self.instance.release()
            self.instance = None
