"""
folder-shuffle - session orchestration

Startup (scan, shuffle, engine setup), the main wait on the termination
signal, and shutdown. Startup errors end the process with status 1.
"""

import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from loguru import logger

from folder_shuffle import notifications, router
from folder_shuffle.core import config
from folder_shuffle.core.console import safe_print
from folder_shuffle.core.exceptions import ConfigError, FolderShuffleError
from folder_shuffle.core.output import log, set_use_colors, setup_loguru
from folder_shuffle.domain import library
from folder_shuffle.domain import playback
from folder_shuffle.domain.playback.events import NowPlayingHook
from folder_shuffle.domain.playback.state import TerminationSignal
from folder_shuffle.ui import terminal

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

EngineFactory = Callable[[], playback.PlaybackEngine]


def create_vlc_engine() -> playback.PlaybackEngine:
    """Default engine factory; imports python-vlc only when playing for real."""
    from folder_shuffle.domain.playback.vlc_engine import VlcEngine

    return VlcEngine()


def setup_output(cfg: config.Config) -> None:
    """Configure file logging and terminal colors from the config.

    Raises:
        ConfigError: If the log directory or file cannot be set up
    """
    log_file = config.get_log_file_path(cfg)
    try:
        config.ensure_directories()
        setup_loguru(
            log_file,
            level=cfg.logging.level,
            max_file_size_mb=cfg.logging.max_file_size_mb,
            backup_count=cfg.logging.backup_count,
            console_output=cfg.logging.console_output,
        )
    except (OSError, TypeError, ValueError) as e:
        raise ConfigError(f"Cannot set up logging to {log_file}: {e}") from e
    set_use_colors(cfg.ui.use_colors)


def build_hooks(cfg: config.Config) -> list[NowPlayingHook]:
    """Side effects run after every confirmed track change."""
    hooks: list[NowPlayingHook] = []
    if cfg.ui.set_terminal_title:
        hooks.append(terminal.update_title_for)
    if cfg.notifications.enabled:
        hooks.append(
            notifications.make_now_playing_notifier(cfg.notifications.icon_path)
        )
    return hooks


def wait_for_completion(
    termination: TerminationSignal,
    reader: Optional[router.CommandReader],
    poll_interval: float = 0.25,
) -> None:
    """Block the main thread until the session terminates.

    Raises:
        InputClosedError: If the command reader died before termination
    """
    while not termination.wait(poll_interval):
        if reader is not None and reader.error is not None:
            raise reader.error


def run_session(
    cfg: config.Config,
    engine_factory: EngineFactory = create_vlc_engine,
    input_stream: Optional[TextIO] = None,
    poll_interval: float = 0.25,
) -> int:
    """Scan, shuffle and play until the queue finishes.

    Args:
        cfg: Effective configuration (file + CLI overrides)
        engine_factory: Builds the playback engine
        input_stream: Command stream (stdin by default)
        poll_interval: How often the main thread checks the reader

    Returns:
        Process exit code
    """
    library_root = Path(cfg.music.library_path).expanduser()

    if cfg.startup.wait_for_path:
        library.wait_for_library(library_root, interval=cfg.startup.retry_interval)

    tracks = library.scan_library(cfg.music)
    log(f"Found {len(tracks)} playable files in {library_root}")

    queue = playback.build_queue(tracks, seed=cfg.player.seed)

    state = playback.SessionState(loop_mode=cfg.player.loop)
    engine = engine_factory()
    session = playback.PlaybackSession(engine, state)
    reader: Optional[router.CommandReader] = None

    session.attach_router(
        playback.EventRouter(
            engine,
            state,
            extensions=cfg.music.supported_formats,
            hooks=build_hooks(cfg),
        )
    )

    try:
        session.start(queue, cfg.player.loop, engine_options=cfg.player.vlc_options)

        reader = router.CommandReader(session, input_stream or sys.stdin)
        reader.start()
        safe_print("Commands: n = next, p = previous, t = pause/resume, r = remove song")

        wait_for_completion(state.termination, reader, poll_interval)
        return EXIT_OK
    finally:
        if reader is not None:
            reader.stop()
        session.shutdown()


def run(
    cfg: config.Config,
    engine_factory: EngineFactory = create_vlc_engine,
    input_stream: Optional[TextIO] = None,
) -> int:
    """Run a session and turn fatal errors into an exit code."""
    try:
        cfg.validate()
        return run_session(cfg, engine_factory=engine_factory, input_stream=input_stream)
    except FolderShuffleError as e:
        logger.error(f"Fatal: {e}")
        safe_print(f"Error: {e}", style="bold red")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        log("Interrupted, shutting down")
        return EXIT_INTERRUPTED
