"""
ZGrid — grid/timer.py
Frame Timer: per-frame delta time and a rolling frames-per-second figure.
"""

from __future__ import annotations

import time
from typing import Callable

from grid.log_setup import get_logger

logger = get_logger(__name__)

FPS_SAMPLE_INTERVAL: float = 1.0  # seconds of wall time between fps samples


class FrameTimer:
    """
    Updated exactly once per flush.

    fps is resampled once per interval rather than every frame, so it can
    lag the real rate by up to one interval.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter, interval: float = FPS_SAMPLE_INTERVAL):
        if interval <= 0:
            raise ValueError(f"fps interval must be positive, got {interval}")
        self._clock = clock
        self._interval = interval
        self._last = clock()
        self._dt = 0.0
        self._fps = 0
        self._frames = 0
        self._elapsed = 0.0

    @property
    def dt(self) -> float:
        """Length of the last frame in seconds."""
        return self._dt

    @property
    def fps(self) -> int:
        """Frames per second as of the last sample (0 before the first one)."""
        return self._fps

    def update(self) -> None:
        now = self._clock()
        self._dt = max(now - self._last, 0.0)
        self._last = now
        self._frames += 1
        self._elapsed += self._dt
        if self._elapsed >= self._interval:
            self._fps = round(self._frames / self._elapsed)
            logger.debug("fps sample: %d frames in %.3fs -> %d fps", self._frames, self._elapsed, self._fps)
            self._frames = 0
            self._elapsed = 0.0
