"""Stream primitives, combinators and schedulers used by the engine."""

from suggestbox.core.stream import (
    BehaviorSubject,
    CompositeSubscription,
    SerialSubscription,
    Stream,
    Subject,
    Subscription,
)
from suggestbox.core.scheduler import AsyncioScheduler, VirtualScheduler

__all__ = [
    "Stream",
    "Subject",
    "BehaviorSubject",
    "Subscription",
    "CompositeSubscription",
    "SerialSubscription",
    "AsyncioScheduler",
    "VirtualScheduler",
]
