"""Event types for the event bus system.

Raw UI events arrive from the front end (the renderer/input collaborator),
network descriptors travel between the engine and the transport, and the
engine's own notifications go back out to drivers.
"""

import time
from dataclasses import dataclass, field
from typing import Any, ClassVar

__all__ = [
    "Event",
    "UIEvent",
    "TextInput",
    "KeyDown",
    "ItemMouseEnter",
    "ItemMouseDown",
    "ItemMouseUp",
    "FieldFocus",
    "FieldBlur",
    "Request",
    "Response",
    "SuppressionSignal",
    "SelectionCommitted",
]


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass(kw_only=True)
class UIEvent(Event):
    """Raw event coming from the input collaborator.

    Attributes:
        target: The element the event happened on (field, menu row, ...)
        source: The native toolkit event, kept so a driver can prevent its
                default action. Never inspected by the engine.
    """

    kind: ClassVar[str] = "event"

    target: Any = None
    """Element the event happened on."""
    source: Any = field(default=None, repr=False, compare=False)
    """Native toolkit event, if any."""


@dataclass(kw_only=True)
class TextInput(UIEvent):
    """The field's text changed."""

    kind: ClassVar[str] = "input"

    value: str
    """Field text after the change."""


@dataclass(kw_only=True)
class KeyDown(UIEvent):
    """A key was pressed in the field."""

    kind: ClassVar[str] = "keydown"

    keycode: int
    """Browser-style keycode (38 up, 40 down, 13 enter, 9 tab)."""


@dataclass(kw_only=True)
class ItemMouseEnter(UIEvent):
    """The pointer entered a suggestion row."""

    kind: ClassVar[str] = "mouseenter"

    index: int
    """Row index of the hovered suggestion."""


@dataclass(kw_only=True)
class ItemMouseDown(UIEvent):
    """A mouse button went down on a suggestion row."""

    kind: ClassVar[str] = "mousedown"


@dataclass(kw_only=True)
class ItemMouseUp(UIEvent):
    """A mouse button went up on a suggestion row."""

    kind: ClassVar[str] = "mouseup"


@dataclass(kw_only=True)
class FieldFocus(UIEvent):
    """The search field gained focus."""

    kind: ClassVar[str] = "focus"


@dataclass(kw_only=True)
class FieldBlur(UIEvent):
    """The search field lost focus."""

    kind: ClassVar[str] = "blur"


@dataclass(frozen=True)
class Request:
    """Outgoing lookup: a fixed endpoint plus the URL-encoded query."""

    url: str


@dataclass(frozen=True)
class Response:
    """Transport reply for one request.

    Attributes:
        request_url: URL of the request this answers
        body: Decoded payload, `[echoed_query, [items...], ...]` for opensearch
    """

    request_url: str
    body: Any


@dataclass(frozen=True)
class SuppressionSignal:
    """Instruction to prevent the default action of a raw event."""

    event: UIEvent

    @property
    def refocus(self) -> bool:
        """Blur suppression also requires focusing the original target again."""
        return self.event.kind == FieldBlur.kind


@dataclass(frozen=True)
class SelectionCommitted:
    """One-shot notification that the user committed a suggestion."""

    value: str
