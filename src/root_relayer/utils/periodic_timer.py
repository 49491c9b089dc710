"""
Fixed-period timer for the relay loop.
"""

import asyncio
import logging
from typing import Callable, Optional


class PeriodicTimer:
    """
    Fires at absolute instants ``start + n * interval``.

    The first tick fires immediately. A slow cycle does not push later ticks
    back; if one or more ticks were missed they collapse into a single
    immediate tick and the schedule continues at the next future multiple.
    """

    def __init__(self, interval: float, clock: Optional[Callable[[], float]] = None):
        """
        Initialize the timer.

        Args:
            interval: Seconds between tick instants
            clock: Monotonic clock; defaults to the running event loop's time()
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")

        self.interval = interval
        self._clock = clock
        self._start: Optional[float] = None
        self._next_tick = 0

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return asyncio.get_running_loop().time()

    @property
    def next_deadline(self) -> Optional[float]:
        """Clock value of the next scheduled tick, None before the first tick."""
        if self._start is None:
            return None
        return self._start + self._next_tick * self.interval

    async def tick(self) -> None:
        """Wait for the next tick instant."""
        now = self._now()
        if self._start is None:
            self._start = now

        deadline = self._start + self._next_tick * self.interval
        if deadline > now:
            await asyncio.sleep(deadline - now)
            self._next_tick += 1
            return

        # Deadline already passed: fire now and drop any other missed ticks
        elapsed_ticks = int((now - self._start) // self.interval)
        if (missed := elapsed_ticks - self._next_tick) > 0:
            self.logger.debug(f"Coalesced {missed} missed tick(s)")
        self._next_tick = elapsed_ticks + 1
