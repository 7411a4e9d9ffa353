"""
Queue randomization.

Builds the play order by picking a uniformly random remaining track until the
pool is empty. Container iteration order (sets, dicts) is never used as a
source of randomness.
"""

import random
from typing import Optional, Sequence

from loguru import logger

from folder_shuffle.domain.library.models import Track


def build_queue(
    tracks: Sequence[Track],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> list[Track]:
    """Return a random permutation of tracks.

    Args:
        tracks: Scanned tracks (may be empty)
        rng: Random source; takes precedence over seed
        seed: Seed for a fresh random.Random when rng is not given

    Returns:
        Every input track exactly once, in random order. Empty input gives
        an empty queue; refusing to play it is the session's job.
    """
    if rng is None:
        rng = random.Random(seed)

    pool = list(tracks)
    queue: list[Track] = []

    while pool:
        k = rng.randrange(len(pool))
        track = pool[k]
        # Swap-remove: O(1), order of the remaining pool does not matter
        pool[k] = pool[-1]
        pool.pop()

        logger.debug(f"[random] {track.local_path}")
        queue.append(track)

    return queue
