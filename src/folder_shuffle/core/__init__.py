"""Shared infrastructure for folder-shuffle: config, output and errors.

Nothing in here imports from the domain or application modules.
"""

# Configuration
from .config import (
    Config,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    create_default_config,
    ensure_directories,
)

# Console
from .console import get_console, safe_print

# Errors
from .exceptions import (
    FolderShuffleError,
    ConfigError,
    ScanError,
    EmptyQueueError,
    EngineError,
    InputClosedError,
)

__all__ = [
    # Config
    "Config",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "create_default_config",
    "ensure_directories",
    # Console
    "get_console",
    "safe_print",
    # Errors
    "FolderShuffleError",
    "ConfigError",
    "ScanError",
    "EmptyQueueError",
    "EngineError",
    "InputClosedError",
]
