"""
Frame clock based on ``time.perf_counter``.

Supplies the elapsed seconds the playback controller feeds to its engine on
every ``advance()``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Clock:
    """Monotonic clock reporting time between successive ``get_delta`` calls."""

    def __init__(
        self,
        auto_start: bool = True,
        timer: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize clock.

        Parameters
        ----------
        auto_start : bool
            Start on the first ``get_delta`` call if not started explicitly
        timer : Callable[[], float]
            Monotonic seconds source
        """
        self.auto_start = auto_start
        self._timer = timer
        self.running = False
        self.elapsed_time: float = 0.0
        self._start_time: float = 0.0
        self._old_time: float = 0.0

    def start(self) -> None:
        """(Re)start the clock; the next ``get_delta`` measures from now."""
        self._start_time = self._timer()
        self._old_time = self._start_time
        self.elapsed_time = 0.0
        self.running = True
        logger.debug("Clock started")

    def stop(self) -> None:
        self.get_elapsed_time()
        self.running = False

    def get_elapsed_time(self) -> float:
        """Seconds since ``start()``."""
        self.get_delta()
        return self.elapsed_time

    def get_delta(self) -> float:
        """Seconds since the previous call (0.0 right after starting)."""
        if self.auto_start and not self.running:
            self.start()
            return 0.0

        if not self.running:
            return 0.0

        now = self._timer()
        delta = now - self._old_time
        self._old_time = now
        self.elapsed_time += delta
        return delta
