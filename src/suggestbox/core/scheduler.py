"""
Schedulers for time-based operators.

`AsyncioScheduler` runs timers on the running asyncio event loop and is what
the application uses. `VirtualScheduler` keeps its own clock that only moves
when told to, which makes debounce timing deterministic in tests and in
recorded-session replays.
"""

import asyncio
import heapq
import itertools
from typing import Callable

from suggestbox.logger import get_logger

logger = get_logger("scheduler")


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """
        Args:
            loop: Loop to schedule on. If None, the running loop is looked up
                  on every call, so the scheduler can be created before the
                  loop starts.
        """
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self._get_loop().time()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(delay, callback)


class VirtualTimer:
    """Timer handle of the virtual scheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualScheduler:
    """
    Scheduler with a manually advanced clock.

    Timers due at the same instant fire in the order they were scheduled.
    Timers scheduled by a callback fire within the same `advance_*` call if
    they fall due before the target time.

    Example:
        ```python
        scheduler = VirtualScheduler()
        scheduler.call_later(0.5, lambda: print("fired"))
        scheduler.advance_by(0.5)  # prints "fired"
        ```
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: list[tuple[float, int, VirtualTimer]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> VirtualTimer:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        timer = VirtualTimer(self._now + delay, callback)
        heapq.heappush(self._queue, (timer.due, next(self._sequence), timer))
        return timer

    def advance_to(self, when: float) -> int:
        """
        Move the clock forward to `when`, firing every timer due on the way.

        Returns:
            Number of callbacks that ran
        """
        if when < self._now:
            raise ValueError(f"Cannot move clock backwards ({when} < {self._now})")

        fired = 0
        while self._queue and self._queue[0][0] <= when:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            timer.callback()
            fired += 1

        self._now = when
        if fired:
            logger.debug(f"Virtual clock at {when:.3f}s after firing {fired} timer(s)")
        return fired

    def advance_by(self, seconds: float) -> int:
        return self.advance_to(self._now + seconds)

    @property
    def pending(self) -> int:
        """Number of timers that are scheduled and not cancelled."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)
