"""Event system for the combo box.

Example:
    ```python
    from suggestbox.domain.events import EventBus, FieldFocus, TextInput

    bus = EventBus()
    bus.publish(FieldFocus())
    bus.publish(TextInput(value="lo"))
    ```
"""

from .bus import EventBus
from .types import (
    Event,
    FieldBlur,
    FieldFocus,
    ItemMouseDown,
    ItemMouseEnter,
    ItemMouseUp,
    KeyDown,
    Request,
    Response,
    SelectionCommitted,
    SuppressionSignal,
    TextInput,
    UIEvent,
)

__all__ = [
    "EventBus",
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
