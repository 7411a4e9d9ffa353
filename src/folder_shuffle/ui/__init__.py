"""UI layer for folder-shuffle.

Contains:
- terminal: terminal title updates for the now-playing track
"""

__all__ = []
