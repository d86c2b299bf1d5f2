"""Scheduler protocol."""

from typing import Callable, Protocol

__all__ = ["Scheduler", "TimerHandle"]


class TimerHandle(Protocol):
    """A pending timed callback."""

    def cancel(self) -> None:
        """Prevent the callback from running. Cancelling twice is harmless."""
        ...


class Scheduler(Protocol):
    """Clock and timer queue shared by every time-based operator.

    All timed work of the engine (the input debounce) is scheduled against one
    scheduler, so a single event loop or a virtual clock drives it.
    """

    def now(self) -> float:
        """Current time in seconds."""
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run `callback` once, `delay` seconds from now.

        Args:
            delay: Seconds to wait
            callback: Synchronous function to call

        Returns:
            Handle that can cancel the pending call
        """
        ...
