"""
Unified output system using Loguru.
Operator-facing messages go to the log file and to the terminal in one call.
"""

import sys
import threading
from pathlib import Path

from loguru import logger

from .console import safe_print

_use_colors = True
_use_colors_lock = threading.Lock()

LEVEL_STYLES = {
    "debug": "cyan",
    "info": None,
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
    "critical": "bold red",
}


def setup_loguru(
    log_file: Path,
    level: str = "INFO",
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    console_output: bool = False,
) -> None:
    """
    Configure loguru with a rotating file sink and an optional stderr sink.

    Args:
        log_file: Path to log file
        level: Minimum level for both sinks (DEBUG, INFO, WARNING, ERROR)
        max_file_size_mb: Rotate the file once it reaches this size
        backup_count: Number of rotated files to keep
        console_output: Also write log records to stderr (verbose mode)
    """
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        rotation=f"{max_file_size_mb} MB",
        retention=backup_count,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {thread.name} | {name}:{line} | {message}",
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    if console_output:
        logger.add(
            sys.stderr,
            level=level,
            format="<level>{level: <8}</level> | {message}",
            colorize=None,
        )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def set_use_colors(enabled: bool) -> None:
    """Enable or disable level colors for terminal output."""
    global _use_colors
    with _use_colors_lock:
        _use_colors = enabled


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND prints to the terminal.

    Use this instead of print() for user-facing messages that should also be logged.
    Safe to call from the engine event thread and the command reader thread.

    Args:
        message: User-facing message
        level: Log level (debug, info, success, warning, error)
    """
    log_func = getattr(logger.opt(depth=1), level)
    log_func(message)

    if level == "debug":
        return

    with _use_colors_lock:
        style = LEVEL_STYLES.get(level) if _use_colors else None
    safe_print(message, style=style)
