"""Tests for shared session state and the termination signal."""

import threading

from folder_shuffle.domain.playback.state import NowPlaying, SessionState, TerminationSignal


class TestTerminationSignal:
    """Tests for TerminationSignal."""

    def test_not_fired_initially(self) -> None:
        signal = TerminationSignal()
        assert not signal.is_fired()
        assert not signal.wait(0)

    def test_fires_once(self) -> None:
        signal = TerminationSignal()

        assert signal.fire() is True
        assert signal.fire() is False
        assert signal.is_fired()
        assert signal.wait(0)

    def test_concurrent_fire_has_one_winner(self) -> None:
        signal = TerminationSignal()
        barrier = threading.Barrier(8)
        results: list[bool] = []
        results_lock = threading.Lock()

        def fire() -> None:
            barrier.wait()
            fired = signal.fire()
            with results_lock:
                results.append(fired)

        threads = [threading.Thread(target=fire) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(5)

        assert results.count(True) == 1
        assert results.count(False) == 7

    def test_wait_wakes_when_fired_from_other_thread(self) -> None:
        signal = TerminationSignal()
        timer = threading.Timer(0.05, signal.fire)
        timer.start()

        assert signal.wait(5)
        timer.join()


class TestSessionState:
    """Tests for SessionState."""

    def test_defaults(self) -> None:
        state = SessionState()

        assert state.loop_mode is True
        assert state.current_track_path is None
        assert state.current_title is None
        assert not state.terminated

    def test_set_now_playing_returns_previous(self) -> None:
        state = SessionState(loop_mode=False)

        first = state.set_now_playing("/m/a.mp4", "a")
        second = state.set_now_playing("/m/b.mp4", "b")

        assert first == NowPlaying()
        assert second == NowPlaying("/m/a.mp4", "a")
        assert state.snapshot() == NowPlaying("/m/b.mp4", "b")
        assert state.current_track_path == "/m/b.mp4"
        assert state.current_title == "b"

    def test_terminated_follows_signal(self) -> None:
        state = SessionState()
        state.termination.fire()
        assert state.terminated
