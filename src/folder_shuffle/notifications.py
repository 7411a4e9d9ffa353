"""Desktop notification helpers for folder-shuffle."""

import shutil
import subprocess
import threading
from typing import Literal, Optional

from loguru import logger

from folder_shuffle.domain.playback.state import NowPlaying


def notify(
    title: str,
    message: str,
    icon_path: Optional[str] = None,
    urgency: Literal["low", "normal", "critical"] = "normal",
) -> bool:
    """
    Show a desktop notification using notify-send.

    Args:
        title: Notification title
        message: Notification message body
        icon_path: Optional icon file shown with the notification
        urgency: Urgency level ('low', 'normal', 'critical')

    Returns:
        True if notify-send accepted the notification

    Note:
        Notifications are best-effort: a missing notify-send or a failed
        call is logged and never raised.
    """
    if not shutil.which("notify-send"):
        logger.debug("notify-send not available; skipping notification")
        return False

    cmd = [
        "notify-send",
        "--urgency",
        urgency,
        "--app-name",
        "folder-shuffle",
    ]
    if icon_path:
        cmd.extend(["--icon", icon_path])
    cmd.extend([title, message])

    try:
        result = subprocess.run(
            cmd,
            check=False,
            timeout=2.0,
            capture_output=True,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.warning(f"Desktop notification failed: {e}")
        return False

    if result.returncode != 0:
        stderr = result.stderr.decode(errors="replace").strip() if result.stderr else ""
        logger.warning(f"notify-send exited with {result.returncode}: {stderr}")
        return False

    return True


def notify_in_background(
    title: str, message: str, icon_path: Optional[str] = None
) -> threading.Thread:
    """Run notify() on a daemon thread and return without waiting for it."""
    thread = threading.Thread(
        target=notify,
        args=(title, message),
        kwargs={"icon_path": icon_path},
        name="notify-send",
        daemon=True,
    )
    thread.start()
    return thread


def make_now_playing_notifier(icon_path: Optional[str] = None):
    """Build an event-router hook that announces each new track.

    The hook runs on the engine event thread, which must not block on
    notify-send.
    """

    def notify_now_playing(now_playing: NowPlaying) -> None:
        notify_in_background("Now playing", now_playing.title or "", icon_path=icon_path)

    return notify_now_playing
