"""
SearchField - the combo box's text input.

The field does no suggestion logic itself: it translates Textual events into
raw UI events and publishes them to the engine.
"""

from typing import Callable

from textual import events
from textual.widgets import Input

from suggestbox.application.classifier import DOWN_KEYCODE, ENTER_KEYCODE, TAB_KEYCODE, UP_KEYCODE
from suggestbox.domain.events import Event, FieldBlur, FieldFocus, KeyDown, TextInput
from suggestbox.logger import get_logger

logger = get_logger("search_field")

KEYCODES = {
    "up": UP_KEYCODE,
    "down": DOWN_KEYCODE,
    "enter": ENTER_KEYCODE,
    "tab": TAB_KEYCODE,
}


class SearchField(Input):
    """Input publishing text changes, keys and focus changes as raw events."""

    BORDER_TITLE = "Query"

    def __init__(self, publish: Callable[[Event], None], **kwargs):
        """
        Args:
            publish: Raw event sink (usually `ComboBoxEngine.publish`)
        """
        super().__init__(placeholder="Start typing to search...", **kwargs)
        self._publish = publish

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input is not self:
            return
        self._publish(TextInput(target=self, value=event.value, source=event))

    def on_key(self, event: events.Key) -> None:
        # Runs before Input's own key handling, so a suppression signal can still stop it.
        self._publish(KeyDown(target=self, keycode=KEYCODES.get(event.key, 0), source=event))

    def on_focus(self, event: events.Focus) -> None:
        self._publish(FieldFocus(target=self, source=event))

    def on_blur(self, event: events.Blur) -> None:
        self._publish(FieldBlur(target=self, source=event))

    def inject_text(self, text: str) -> None:
        """Overwrite the displayed text without reporting it as user input."""
        with self.prevent(Input.Changed):
            self.value = text
        self.cursor_position = len(text)
        logger.debug(f"Injected field text {text!r}")
