"""Shared fixtures: a recording playback engine and a blocking line feed."""

import queue
import threading
from typing import Iterable, Optional, Sequence

import pytest

from folder_shuffle.core.exceptions import EngineError
from folder_shuffle.domain.playback.engine import EngineEvent


class FakeEngine:
    """PlaybackEngine that records every command and lets tests emit events.

    Queries (get_title/get_location) are not recorded in ``calls`` so tests
    can assert on commands alone.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.callbacks: dict = {}
        self.title: Optional[str] = None
        self.location: Optional[str] = None
        self.metadata_error: Optional[Exception] = None
        self.failing: set[str] = set()
        self._cond = threading.Condition()

    def _record(self, name: str, *args) -> None:
        with self._cond:
            self.calls.append((name, *args))
            self._cond.notify_all()
        if name in self.failing:
            raise EngineError(f"{name} failed")

    def names(self) -> list[str]:
        with self._cond:
            return [call[0] for call in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)

    def wait_for(self, name: str, times: int = 1, timeout: float = 5.0) -> bool:
        """Block until the named command has been issued `times` times."""
        with self._cond:
            return self._cond.wait_for(
                lambda: [c[0] for c in self.calls].count(name) >= times, timeout
            )

    def emit(self, kind: EngineEvent) -> None:
        """Deliver an event the way an engine thread would."""
        callback = self.callbacks.get(kind)
        if callback is not None:
            callback(kind)

    def now_playing(self, location: str, title: Optional[str] = None) -> None:
        """Set current media and emit TRACK_CHANGED."""
        self.location = location
        self.title = title
        self.emit(EngineEvent.TRACK_CHANGED)

    # PlaybackEngine protocol

    def initialize(self, options: Sequence[str]) -> None:
        self._record("initialize", list(options))

    def create_queue(self) -> None:
        self._record("create_queue")

    def add_to_queue(self, path: str) -> None:
        self._record("add_to_queue", path)

    def set_queue(self) -> None:
        self._record("set_queue")

    def set_loop_mode(self, enabled: bool) -> None:
        self._record("set_loop_mode", enabled)

    def play(self) -> None:
        self._record("play")

    def stop(self) -> None:
        self._record("stop")

    def next(self) -> None:
        self._record("next")

    def previous(self) -> None:
        self._record("previous")

    def toggle_pause(self) -> None:
        self._record("toggle_pause")

    def subscribe(self, kind: EngineEvent, callback) -> None:
        self._record("subscribe", kind)
        self.callbacks[kind] = callback

    def unsubscribe(self, kinds: Iterable[EngineEvent]) -> None:
        kinds = list(kinds)
        self._record("unsubscribe", kinds)
        for kind in kinds:
            self.callbacks.pop(kind, None)

    def get_title(self) -> Optional[str]:
        if self.metadata_error is not None:
            raise self.metadata_error
        return self.title

    def get_location(self) -> Optional[str]:
        if self.metadata_error is not None:
            raise self.metadata_error
        return self.location

    def release_player(self) -> None:
        self._record("release_player")

    def release_queue(self) -> None:
        self._record("release_queue")

    def close(self) -> None:
        self._record("close")


class LineFeed:
    """Text stream whose readline() blocks until a test feeds a line."""

    def __init__(self) -> None:
        self._lines: queue.Queue = queue.Queue()

    def feed(self, line: str) -> None:
        self._lines.put(line)

    def close(self) -> None:
        self._lines.put("")

    def readline(self) -> str:
        return self._lines.get()


@pytest.fixture
def fake_engine() -> FakeEngine:
    """A fresh recording engine."""
    return FakeEngine()


@pytest.fixture
def line_feed() -> LineFeed:
    """A blocking command stream."""
    return LineFeed()


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path_factory, monkeypatch):
    """Keep config, data and log files out of the real home directory."""
    base = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(base / "data"))
    monkeypatch.delenv("FOLDER_SHUFFLE_LIBRARY_PATH", raising=False)
    monkeypatch.delenv("FOLDER_SHUFFLE_LOG_LEVEL", raising=False)
    return base
