"""
Configuration management for folder-shuffle
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigError

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

# Expected TOML type of every known key, per table
FIELD_TYPES = {
    "music": {
        "library_path": str,
        "supported_formats": list,
        "ignore_prefixes": list,
        "include_hidden": bool,
    },
    "player": {"loop": bool, "seed": int, "vlc_options": list},
    "startup": {"wait_for_path": bool, "retry_interval": float},
    "ui": {"set_terminal_title": bool, "use_colors": bool},
    "notifications": {"enabled": bool, "icon_path": str},
    "logging": {
        "level": str,
        "log_file": str,
        "max_file_size_mb": int,
        "backup_count": int,
        "console_output": bool,
    },
}


@dataclass
class MusicConfig:
    """Configuration for the music library scan."""

    library_path: str = field(default_factory=lambda: str(Path.home() / "Music"))
    supported_formats: List[str] = field(default_factory=lambda: [".mp4", ".webm"])
    ignore_prefixes: List[str] = field(default_factory=lambda: ["._"])
    include_hidden: bool = False


@dataclass
class PlayerConfig:
    """Configuration for the playback engine."""

    loop: bool = True
    seed: Optional[int] = None
    vlc_options: List[str] = field(default_factory=lambda: ["--no-video", "--quiet"])


@dataclass
class StartupConfig:
    """Configuration for waiting on the library path at startup."""

    wait_for_path: bool = True
    retry_interval: float = 5.0


@dataclass
class UIConfig:
    """Configuration for terminal output."""

    set_terminal_title: bool = True
    use_colors: bool = True


@dataclass
class NotificationsConfig:
    """Configuration for desktop notifications."""

    enabled: bool = False
    icon_path: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    log_file: Optional[str] = None  # default: ~/.local/share/folder-shuffle/folder-shuffle.log
    max_file_size_mb: int = 10
    backup_count: int = 5
    console_output: bool = False


@dataclass
class Config:
    """Effective configuration, one dataclass per TOML table."""

    music: MusicConfig = field(default_factory=MusicConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    startup: StartupConfig = field(default_factory=StartupConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigError: If any value is out of range
        """
        issues = []

        if not self.music.supported_formats:
            issues.append("supported_formats must not be empty")
        for ext in self.music.supported_formats:
            if not ext.startswith("."):
                issues.append(f"extension {ext!r} must start with '.'")

        if self.startup.retry_interval <= 0:
            issues.append(
                f"retry_interval must be positive, got {self.startup.retry_interval}"
            )

        if self.logging.level.upper() not in VALID_LOG_LEVELS:
            issues.append(f"invalid log level: {self.logging.level}")

        if self.logging.max_file_size_mb <= 0:
            issues.append(
                f"max_file_size_mb must be positive, got {self.logging.max_file_size_mb}"
            )
        if self.logging.backup_count < 0:
            issues.append(
                f"backup_count must not be negative, got {self.logging.backup_count}"
            )

        if issues:
            raise ConfigError("Invalid configuration: " + "; ".join(issues))


def get_config_dir() -> Path:
    """Directory holding config.toml and an optional .env."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "folder-shuffle"
    return Path.home() / ".config" / "folder-shuffle"


def get_config_path() -> Path:
    """Locate config.toml: ./config.toml wins over the XDG config directory."""
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Directory for the log file."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "folder-shuffle"
    return Path.home() / ".local" / "share" / "folder-shuffle"


def get_log_file_path(config: Config) -> Path:
    """Get the log file path, honoring a custom [logging] log_file."""
    if config.logging.log_file:
        return Path(config.logging.log_file).expanduser()
    return get_data_dir() / "folder-shuffle.log"


def create_default_config() -> str:
    """Commented TOML written on first run; parses to the dataclass defaults."""
    return """
# folder-shuffle configuration

[music]
# Folder scanned (recursively) for playable files
library_path = "~/Music"

# Playable file extensions
supported_formats = [".mp4", ".webm"]

# File name prefixes to skip (macOS resource forks, etc.)
ignore_prefixes = ["._"]

# Include dot-files and dot-directories
include_hidden = false

[player]
# Loop the whole queue instead of exiting after the last track
loop = true

# Fixed shuffle seed (omit for a new order every run)
# seed = 42

# Options passed to libVLC
vlc_options = ["--no-video", "--quiet"]

[startup]
# Wait for the library path to appear (e.g. an external drive)
wait_for_path = true

# Seconds between checks
retry_interval = 5.0

[ui]
# Show the current track in the terminal tab title
set_terminal_title = true

# Color operator messages
use_colors = true

[notifications]
# Desktop notification on every track change
enabled = false

# Icon shown in notifications
# icon_path = "/usr/share/icons/hicolor/48x48/apps/vlc.png"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/folder-shuffle/folder-shuffle.log)
# log_file = "/path/to/folder-shuffle.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of rotated log files to keep
backup_count = 5

# Also write logs to stderr
console_output = false
""".strip()


def _apply_env_overrides(config: Config) -> None:
    """Override TOML values with FOLDER_SHUFFLE_* environment variables."""
    library_path = os.environ.get("FOLDER_SHUFFLE_LIBRARY_PATH")
    if library_path:
        config.music.library_path = str(Path(library_path).expanduser())

    log_level = os.environ.get("FOLDER_SHUFFLE_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()


def load_config(config_path: Optional[Path] = None) -> Config:
    """Read config.toml, writing a default one on first run.

    Environment variables override TOML values:
    - FOLDER_SHUFFLE_LIBRARY_PATH
    - FOLDER_SHUFFLE_LOG_LEVEL

    Args:
        config_path: Explicit config file; skips the lookup order when given

    Returns:
        Parsed configuration (defaults when the file is missing or malformed)

    Raises:
        ConfigError: If a value has the wrong type
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    explicit = config_path is not None
    config_path = config_path or get_config_path()

    if not config_path.exists():
        config = Config()
        if not explicit:
            try:
                config_path.parent.mkdir(parents=True, exist_ok=True)
                with open(config_path, "w", encoding="utf-8") as f:
                    f.write(create_default_config())
                print(f"Created default configuration at: {config_path}")
            except OSError as e:
                print(f"Could not write default configuration to {config_path}: {e}")
        else:
            print(f"Configuration file not found: {config_path}, using defaults.")
        _apply_env_overrides(config)
        return config

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        config = Config()
        _apply_env_overrides(config)
        return config

    config = Config()
    for section in fields(Config):
        section_data = toml_data.get(section.name)
        if isinstance(section_data, dict):
            merged = _merge_section(
                section.name, getattr(config, section.name), section_data
            )
            setattr(config, section.name, merged)

    _normalize(config)
    _apply_env_overrides(config)
    return config


def _coerce(table: str, key: str, value, expected: type):
    """Check one TOML value against its expected type.

    Integers are accepted where a float is expected. Booleans never count as
    numbers.
    """
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if expected in (int, float) and isinstance(value, bool):
        raise ConfigError(f"[{table}] {key} must be a number, got {value!r}")
    if not isinstance(value, expected):
        kind = "list" if expected is list else expected.__name__
        raise ConfigError(f"[{table}] {key} must be of type {kind}, got {value!r}")
    if expected is list and not all(isinstance(item, str) for item in value):
        raise ConfigError(f"[{table}] {key} must be a list of strings, got {value!r}")
    return value


def _merge_section(table: str, defaults, data: dict):
    """Copy a section dataclass with the keys found in the TOML table applied.

    Unknown keys are ignored so older config files keep loading.

    Raises:
        ConfigError: If a known key has the wrong type
    """
    expected = FIELD_TYPES[table]
    values = {
        key: _coerce(table, key, value, expected[key])
        for key, value in data.items()
        if key in expected
    }
    return replace(defaults, **values)


def _normalize(config: Config) -> None:
    """Expand ~ in paths and canonicalize extension and level case."""
    config.music.library_path = str(Path(config.music.library_path).expanduser())
    config.music.supported_formats = [
        ext.lower() for ext in config.music.supported_formats
    ]
    config.logging.level = config.logging.level.upper()

    if config.notifications.icon_path:
        config.notifications.icon_path = str(
            Path(config.notifications.icon_path).expanduser()
        )
    if config.logging.log_file:
        config.logging.log_file = str(Path(config.logging.log_file).expanduser())


def ensure_directories() -> None:
    """Create the config and data directories if they are missing."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
