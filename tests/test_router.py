"""Tests for command routing and the command reader thread."""

import io

import pytest

from folder_shuffle import router
from folder_shuffle.core.exceptions import InputClosedError
from folder_shuffle.domain.playback.session import PlaybackSession
from folder_shuffle.domain.playback.state import SessionState


@pytest.fixture
def session(fake_engine) -> PlaybackSession:
    return PlaybackSession(fake_engine, SessionState())


class TestDispatch:
    """Tests for dispatch."""

    @pytest.mark.parametrize(
        "line, command",
        [("n\n", "next"), ("p\n", "previous"), ("t\n", "toggle_pause")],
    )
    def test_issues_exactly_one_command(self, session, fake_engine, line, command) -> None:
        assert router.dispatch(session, line) is True
        assert fake_engine.names() == [command]

    def test_surrounding_whitespace_ignored(self, session, fake_engine) -> None:
        router.dispatch(session, "  n \n")
        assert fake_engine.names() == ["next"]

    def test_unknown_command_prints_help(self, session, fake_engine, capsys) -> None:
        assert router.dispatch(session, "zz\n") is False

        assert fake_engine.calls == []
        out = capsys.readouterr().out
        assert "Unsupported command" in out
        for name in router.COMMANDS:
            assert f"  {name}  " in out

    def test_empty_line_prints_help(self, session, fake_engine, capsys) -> None:
        assert router.dispatch(session, "\n") is False
        assert fake_engine.calls == []

    def test_remove_with_nothing_playing(self, session, fake_engine) -> None:
        """Recognized but refused: no skip and no delete."""
        assert router.dispatch(session, "r\n") is True
        assert fake_engine.calls == []


class TestCommandReader:
    """Tests for CommandReader."""

    def test_dispatches_lines(self, session, fake_engine, line_feed) -> None:
        reader = router.CommandReader(session, line_feed)
        reader.start()
        try:
            line_feed.feed("n\n")
            line_feed.feed("p\n")

            assert fake_engine.wait_for("previous")
            assert fake_engine.names() == ["next", "previous"]
        finally:
            reader.stop()
            line_feed.close()

    def test_end_of_stream_records_error(self, session, line_feed) -> None:
        reader = router.CommandReader(session, line_feed)
        reader.start()

        line_feed.close()

        assert reader.wait_stopped(5)
        assert isinstance(reader.error, InputClosedError)
        assert not reader.running

    def test_end_of_stream_does_not_terminate_session(self, session, line_feed) -> None:
        reader = router.CommandReader(session, line_feed)
        reader.start()

        line_feed.close()
        reader.wait_stopped(5)

        assert not session.state.terminated

    def test_unreadable_stream(self, session) -> None:
        stream = io.StringIO()
        stream.close()
        reader = router.CommandReader(session, stream)
        reader.start()

        assert reader.wait_stopped(5)
        assert isinstance(reader.error, InputClosedError)

    def test_stop_prevents_further_dispatch(self, session, fake_engine, line_feed) -> None:
        reader = router.CommandReader(session, line_feed)
        reader.start()
        reader.stop()

        line_feed.feed("n\n")

        assert reader.wait_stopped(5)
        assert fake_engine.calls == []
