"""Delta clock for frame timing."""

import time

from meshwalk.constants import MAX_DELTA_MS


class DeltaClock:
    """Tracks elapsed time between frames, in milliseconds."""

    def __init__(self):
        self._last_time = time.perf_counter()

    def get_delta(self) -> float:
        """Return milliseconds elapsed since last call, clamped to MAX_DELTA_MS."""
        now = time.perf_counter()
        dt = (now - self._last_time) * 1000.0
        self._last_time = now
        return min(dt, MAX_DELTA_MS)

    def reset(self) -> None:
        self._last_time = time.perf_counter()
