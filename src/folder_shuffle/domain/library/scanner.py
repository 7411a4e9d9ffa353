"""
Music library scanning.

Walks the library root for playable files. A scan either returns the whole
library or raises; the queue and end-of-queue handling depend on the true
library size, so partial results are never handed downstream.
"""

import os
import stat
import time
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from folder_shuffle.core.config import MusicConfig
from folder_shuffle.core.exceptions import ScanError
from folder_shuffle.core.output import log

from .metadata import track_from_path
from .models import Track


def is_supported_format(local_path: Path, supported_formats: list[str]) -> bool:
    """Check if file format is supported."""
    return local_path.suffix.lower() in supported_formats


def is_ignored_name(name: str, ignore_prefixes: list[str], include_hidden: bool) -> bool:
    """Check if a file or directory name should be skipped.

    Names starting with a reserved prefix (e.g. "._" resource forks) are always
    skipped; dot-files are skipped unless include_hidden is set.
    """
    if any(prefix and name.startswith(prefix) for prefix in ignore_prefixes):
        return True
    return not include_hidden and name.startswith(".")


def _raise_walk_error(error: OSError) -> None:
    raise ScanError(f"Error scanning {error.filename}: {error.strerror or error}") from error


def scan_directory(directory: Path, music_config: MusicConfig) -> list[Track]:
    """Recursively scan a directory for playable files.

    Args:
        directory: Library root
        music_config: Extension and ignore-prefix settings

    Returns:
        Tracks sorted by path

    Raises:
        ScanError: If the root cannot be read or is not a directory, or any part of
            the walk fails
    """
    try:
        root_stat = directory.stat()
    except FileNotFoundError as e:
        raise ScanError(f"Library path does not exist: {directory}") from e
    except OSError as e:
        raise ScanError(f"Cannot access library path {directory}: {e}") from e
    if not stat.S_ISDIR(root_stat.st_mode):
        raise ScanError(f"Library path is not a directory: {directory}")

    supported = [ext.lower() for ext in music_config.supported_formats]
    found: list[str] = []

    for dirpath, dirnames, filenames in os.walk(directory, onerror=_raise_walk_error):
        # Prune in place so os.walk does not descend into skipped directories
        dirnames[:] = [
            d
            for d in dirnames
            if music_config.include_hidden or not d.startswith(".")
        ]

        for name in filenames:
            if is_ignored_name(
                name, music_config.ignore_prefixes, music_config.include_hidden
            ):
                continue

            local_path = Path(dirpath) / name
            if not is_supported_format(local_path, supported):
                continue

            logger.debug(f"[scan] Read {local_path}")
            found.append(str(local_path.absolute()))

    found.sort()
    return [track_from_path(path, supported) for path in found]


def scan_library(music_config: MusicConfig) -> list[Track]:
    """Scan the configured library root.

    Args:
        music_config: Music configuration

    Returns:
        List of Track objects
    """
    root = Path(music_config.library_path).expanduser()
    logger.info(f"Scanning library: {root}")

    tracks = scan_directory(root, music_config)

    logger.info(f"Library scan complete: {len(tracks)} tracks found in {root}")
    return tracks


def wait_for_library(
    path: Path,
    interval: float = 5.0,
    sleep: Callable[[float], None] = time.sleep,
    max_attempts: Optional[int] = None,
) -> None:
    """Block until the library root exists (e.g. an external drive is mounted).

    Args:
        path: Library root to wait for
        interval: Seconds between checks
        sleep: Sleep function (injectable for tests)
        max_attempts: Give up after this many failed checks (None = forever)

    Raises:
        ScanError: If stat fails for a reason other than the path missing, or
            max_attempts is exhausted
    """
    attempts = 0
    while True:
        try:
            path.stat()
            return
        except FileNotFoundError:
            attempts += 1
            if max_attempts is not None and attempts >= max_attempts:
                raise ScanError(
                    f"Library path {path} not available after {attempts} attempts"
                )
            log(f"Library path {path} not ready, retrying in {interval:g}s...", "warning")
            sleep(interval)
        except OSError as e:
            raise ScanError(f"Cannot access library path {path}: {e}") from e
