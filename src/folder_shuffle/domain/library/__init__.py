"""Library domain - playable file scanning and display titles.

This domain handles:
- Track data model
- Display titles derived from file names and engine metadata
- Library scanning and waiting for the library path
"""

# Models
from .models import Track

# Display titles
from .metadata import (
    strip_known_extensions,
    track_from_path,
    get_display_title,
)

# Library scanning
from .scanner import (
    is_supported_format,
    is_ignored_name,
    scan_directory,
    scan_library,
    wait_for_library,
)

__all__ = [
    # Models
    "Track",
    # Metadata
    "strip_known_extensions",
    "track_from_path",
    "get_display_title",
    # Scanner
    "is_supported_format",
    "is_ignored_name",
    "scan_directory",
    "scan_library",
    "wait_for_library",
]
