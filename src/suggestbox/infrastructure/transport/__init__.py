"""Transport implementations: real HTTP and in-memory."""

from suggestbox.infrastructure.transport.http import HttpTransport
from suggestbox.infrastructure.transport.memory import (
    SAMPLE_TITLES,
    InMemoryTransport,
    prefix_lookup,
)
from suggestbox.infrastructure.transport.pending import PendingResponse

__all__ = [
    "HttpTransport",
    "InMemoryTransport",
    "PendingResponse",
    "SAMPLE_TITLES",
    "prefix_lookup",
]
