"""Shared Rich console for operator output.

The command reader, the engine event thread and the main thread all print
through one Console; Rich serializes writes on it.
"""

import threading
from typing import Optional

from rich.console import Console

_console: Optional[Console] = None
_console_lock = threading.Lock()


def get_console() -> Console:
    """Return the process-wide Console, creating it on first use."""
    global _console
    with _console_lock:
        if _console is None:
            _console = Console(highlight=False)
        return _console


def safe_print(message: str, style: Optional[str] = None) -> None:
    """Print a plain message, optionally styled.

    File names may contain square brackets, so Rich markup is never
    interpreted.
    """
    get_console().print(message, style=style, markup=False)
