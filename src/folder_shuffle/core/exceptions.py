"""Exception hierarchy for folder-shuffle.

Startup errors (scan, empty queue, engine init, closed input) propagate up to
``main.run`` and end the process. Runtime command errors are caught where they
happen and reported to the operator.
"""


class FolderShuffleError(Exception):
    """Base exception for folder-shuffle."""


class ConfigError(FolderShuffleError):
    """Invalid configuration values."""


class ScanError(FolderShuffleError):
    """Library root missing or unreadable, or an I/O error during the walk."""


class EmptyQueueError(FolderShuffleError):
    """A session was started without any playable tracks."""


class EngineError(FolderShuffleError):
    """The playback engine failed to initialize or rejected a command."""


class InputClosedError(FolderShuffleError):
    """The interactive command stream was closed or became unreadable."""
