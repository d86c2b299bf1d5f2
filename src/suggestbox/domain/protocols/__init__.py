"""Domain protocols - interfaces for the engine's external collaborators.

Using protocols keeps the engine independent from asyncio, the network
stack and the UI toolkit, and lets tests substitute virtual clocks and
scripted transports.
"""

from suggestbox.domain.protocols.scheduler import Scheduler, TimerHandle
from suggestbox.domain.protocols.transport import ResponseStream, Transport

__all__ = [
    "Scheduler",
    "TimerHandle",
    "ResponseStream",
    "Transport",
]
