"""Tests for EventRouter."""

import pytest

from folder_shuffle.core.exceptions import EngineError
from folder_shuffle.domain.library.models import Track
from folder_shuffle.domain.playback.engine import EngineEvent
from folder_shuffle.domain.playback.events import SUBSCRIBED_EVENTS, EventRouter
from folder_shuffle.domain.playback.session import PlaybackSession
from folder_shuffle.domain.playback.state import NowPlaying, SessionState


@pytest.fixture
def state() -> SessionState:
    return SessionState(loop_mode=False)


@pytest.fixture
def router(fake_engine, state) -> EventRouter:
    router = EventRouter(fake_engine, state, extensions=[".mp4", ".webm"])
    router.attach()
    return router


class TestAttach:
    """Tests for attach/detach."""

    def test_subscribes_all_events(self, router, fake_engine) -> None:
        assert set(fake_engine.callbacks) == set(SUBSCRIBED_EVENTS)

    def test_detach_unsubscribes(self, router, fake_engine) -> None:
        router.detach()
        assert fake_engine.callbacks == {}

    def test_detach_twice(self, router, fake_engine) -> None:
        router.detach()
        router.detach()
        assert fake_engine.count("unsubscribe") == 1


class TestTrackChanged:
    """Tests for TRACK_CHANGED handling."""

    def test_updates_state(self, router, fake_engine, state) -> None:
        fake_engine.now_playing("/music/Artist - Song.webm", "Artist - Song.webm")

        assert state.snapshot() == NowPlaying("/music/Artist - Song.webm", "Artist - Song")

    def test_tagged_title_kept(self, router, fake_engine, state) -> None:
        fake_engine.now_playing("/music/x.mp4", "Proper Title")
        assert state.current_title == "Proper Title"

    def test_metadata_failure_leaves_state(self, router, fake_engine, state) -> None:
        fake_engine.now_playing("/music/a.mp4", "a")
        fake_engine.metadata_error = EngineError("no media")

        fake_engine.emit(EngineEvent.TRACK_CHANGED)

        assert state.snapshot() == NowPlaying("/music/a.mp4", "a")

    def test_missing_location_leaves_state(self, router, fake_engine, state) -> None:
        fake_engine.now_playing(None, "title only")
        assert state.current_track_path is None

    def test_hooks_receive_now_playing(self, fake_engine, state) -> None:
        seen: list[NowPlaying] = []
        router = EventRouter(fake_engine, state, extensions=[".mp4"], hooks=[seen.append])
        router.attach()

        fake_engine.now_playing("/music/a.mp4")

        assert seen == [NowPlaying("/music/a.mp4", "a")]

    def test_hook_failure_is_ignored(self, fake_engine, state) -> None:
        def broken_hook(now_playing: NowPlaying) -> None:
            raise RuntimeError("notification daemon gone")

        seen: list[NowPlaying] = []
        router = EventRouter(
            fake_engine, state, extensions=[".mp4"], hooks=[broken_hook, seen.append]
        )
        router.attach()

        fake_engine.now_playing("/music/a.mp4")

        assert state.current_track_path == "/music/a.mp4"
        assert len(seen) == 1


class TestQueueFinished:
    """Tests for QUEUE_FINISHED handling."""

    def test_fires_termination(self, router, fake_engine, state) -> None:
        fake_engine.emit(EngineEvent.QUEUE_FINISHED)
        assert state.terminated

    def test_repeated_event_fires_once(self, router, state) -> None:
        assert router.on_queue_finished() is True
        assert router.on_queue_finished() is False
        assert state.terminated

    def test_fires_even_in_loop_mode(self, fake_engine) -> None:
        state = SessionState(loop_mode=True)
        router = EventRouter(fake_engine, state)
        router.attach()

        fake_engine.emit(EngineEvent.QUEUE_FINISHED)

        assert state.terminated

    def test_single_track_queue_terminates(self, fake_engine, state) -> None:
        """With loop off, one track plays and the session ends."""
        session = PlaybackSession(fake_engine, state)
        session.attach_router(EventRouter(fake_engine, state, extensions=[".mp4"]))
        session.start([Track("/music/only.mp4", "only")], loop_mode=False)

        fake_engine.now_playing("/music/only.mp4")
        fake_engine.emit(EngineEvent.QUEUE_FINISHED)

        assert state.current_track_path == "/music/only.mp4"
        assert state.termination.wait(1)


class TestOtherEvents:
    """Tests for events without a state effect."""

    def test_stopped_changes_nothing(self, router, fake_engine, state) -> None:
        fake_engine.now_playing("/music/a.mp4")

        fake_engine.emit(EngineEvent.STOPPED)

        assert state.current_track_path == "/music/a.mp4"
        assert not state.terminated
