"""
SuggestionMenu - the drop-down list under the search field.
"""

from dataclasses import dataclass
from typing import Callable

from rich.text import Text
from textual import events
from textual.widget import Widget

from suggestbox.domain.events import Event, ItemMouseDown, ItemMouseEnter, ItemMouseUp
from suggestbox.domain.state import ComboState
from suggestbox.presentation.render import render_menu


@dataclass(frozen=True)
class MenuItemRef:
    """Identity of a menu row, used as the target of row mouse events."""

    index: int


class SuggestionMenu(Widget):
    """Renders the current suggestions and reports row hover and clicks.

    Rows are plain lines of one rendered `Text`, so the row under the pointer
    is the event's `y` offset. Hover is reported once per row entered, like a
    DOM mouseenter.
    """

    DEFAULT_CSS = """
    SuggestionMenu {
        height: auto;
        max-height: 12;
        width: 1fr;
        display: none;
    }

    SuggestionMenu.-open {
        display: block;
    }
    """

    def __init__(self, publish: Callable[[Event], None], **kwargs):
        super().__init__(**kwargs)
        self._publish = publish
        self._state = ComboState()
        self._hover: int | None = None

    @property
    def suggestions(self) -> tuple[str, ...]:
        return self._state.suggestions

    @property
    def highlighted(self) -> int | None:
        return self._state.highlighted

    def show_state(self, state: ComboState) -> None:
        if state.suggestions != self._state.suggestions:
            self._hover = None
        self._state = state
        self.set_class(bool(state.suggestions), "-open")
        self.refresh(layout=True)

    def render(self) -> Text:
        return render_menu(self._state, self.size.width or None)

    def _row_at(self, y: int) -> int | None:
        if 0 <= y < len(self._state.suggestions):
            return y
        return None

    def on_mouse_move(self, event: events.MouseMove) -> None:
        row = self._row_at(event.y)
        if row == self._hover:
            return
        self._hover = row
        if row is not None:
            self._publish(ItemMouseEnter(target=MenuItemRef(row), index=row, source=event))

    def on_leave(self, event: events.Leave) -> None:
        self._hover = None

    def on_mouse_down(self, event: events.MouseDown) -> None:
        row = self._row_at(event.y)
        if row is not None:
            self._publish(ItemMouseDown(target=MenuItemRef(row), source=event))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        row = self._row_at(event.y)
        if row is not None:
            self._publish(ItemMouseUp(target=MenuItemRef(row), source=event))
