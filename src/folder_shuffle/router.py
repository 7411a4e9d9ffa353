"""
Command routing for folder-shuffle.

Reads one command per line from the interactive input stream on a dedicated
thread and routes it to the playback command handlers. The reader never ends
the session; only the engine's end-of-queue event does.
"""

import threading
from typing import Callable, Dict, Optional, TextIO, Tuple

from loguru import logger

from folder_shuffle.commands import playback
from folder_shuffle.core.console import safe_print
from folder_shuffle.core.exceptions import InputClosedError
from folder_shuffle.domain.playback.session import PlaybackSession

CommandHandler = Callable[[PlaybackSession], bool]

COMMANDS: Dict[str, Tuple[str, CommandHandler]] = {
    "n": ("Next song", playback.handle_next_command),
    "p": ("Previous song", playback.handle_previous_command),
    "t": ("Pause or resume", playback.handle_toggle_pause_command),
    "r": ("Remove song (deletes the file)", playback.handle_remove_command),
}


def print_help() -> None:
    """Display the recognized commands."""
    lines = ["Unsupported command, possible commands:"]
    for name, (description, _) in COMMANDS.items():
        lines.append(f"  {name}  {description}")
    safe_print("\n".join(lines), style="yellow")


def dispatch(session: PlaybackSession, line: str) -> bool:
    """Route one input line to its handler.

    Args:
        session: Playback session the command acts on
        line: Raw input line (surrounding whitespace is ignored)

    Returns:
        True if the command was recognized (even if the engine refused it),
        False if help was printed instead
    """
    command = line.strip()
    entry = COMMANDS.get(command)
    if entry is None:
        logger.debug(f"Unsupported command: {command!r}")
        print_help()
        return False

    _, handler = entry
    logger.debug(f"Command: {command}")
    handler(session)
    return True


class CommandReader:
    """Reads commands from a stream on a background thread.

    A closed or unreadable stream stops the reader and is recorded in
    ``error`` for the main thread to raise; nothing is sent to the engine
    after that.
    """

    def __init__(self, session: PlaybackSession, stream: TextIO):
        self.session = session
        self.stream = stream
        self.error: Optional[InputClosedError] = None
        self.running = False
        self.thread: Optional[threading.Thread] = None
        self._stopped = threading.Event()

    def start(self) -> None:
        """Start the reader thread."""
        if self.running:
            return

        self.running = True
        self.thread = threading.Thread(
            target=self._run, name="command-reader", daemon=True
        )
        self.thread.start()

    def stop(self) -> None:
        """Stop dispatching further commands.

        A thread blocked in readline() cannot be interrupted; it is a daemon
        and exits with the process.
        """
        self.running = False

    def wait_stopped(self, timeout: Optional[float] = None) -> bool:
        """Block until the reader loop has exited."""
        return self._stopped.wait(timeout)

    def _run(self) -> None:
        try:
            while self.running:
                try:
                    line = self.stream.readline()
                except (OSError, ValueError) as e:
                    raise InputClosedError(f"Command input unreadable: {e}") from e

                if line == "":
                    raise InputClosedError("Command input closed (end of stream)")

                if not self.running:
                    break

                dispatch(self.session, line)
        except InputClosedError as e:
            logger.error(str(e))
            self.error = e
        except Exception as e:
            logger.exception("Command reader crashed")
            self.error = InputClosedError(f"Command reader crashed: {e}")
        finally:
            self.running = False
            self._stopped.set()
