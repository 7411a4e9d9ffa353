"""Playback domain - shuffle queue, engine control and event routing.

This domain handles:
- Queue randomization
- The playback engine capability surface (libVLC adapter in vlc_engine,
  imported lazily so the rest of the domain works without libVLC)
- Session state shared between the command and event threads
- Session commands and engine event routing
"""

# Queue
from .shuffle import build_queue

# Engine surface
from .engine import EngineEvent, PlaybackEngine, mrl_to_path

# State
from .state import NowPlaying, SessionState, TerminationSignal

# Session and events
from .session import PlaybackSession
from .events import EventRouter, SUBSCRIBED_EVENTS

__all__ = [
    # Queue
    "build_queue",
    # Engine
    "EngineEvent",
    "PlaybackEngine",
    "mrl_to_path",
    # State
    "NowPlaying",
    "SessionState",
    "TerminationSignal",
    # Session
    "PlaybackSession",
    "EventRouter",
    "SUBSCRIBED_EVENTS",
]
