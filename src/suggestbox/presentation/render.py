"""
Render directives derived from state snapshots.

The engine only produces `ComboState`; everything the front end draws is
computed here as plain values so it can be checked without a terminal.
"""

from dataclasses import dataclass
from typing import Iterator

from rich.style import Style
from rich.text import Text

from suggestbox.domain.state import ComboState

HIGHLIGHT_COLOR = "#8FE8B4"
MENU_BACKGROUND = "white"
MENU_FOREGROUND = "black"


@dataclass(frozen=True)
class FieldDirective:
    """Instruction for the search field.

    `text` is None when the field must be left as the user typed it;
    otherwise the field's displayed text is overwritten with it.
    """

    text: str | None = None

    @property
    def overwrites(self) -> bool:
        return self.text is not None


@dataclass(frozen=True)
class MenuRow:
    index: int
    label: str
    highlighted: bool


def field_directive(state: ComboState) -> FieldDirective:
    return FieldDirective(state.selected)


def menu_rows(state: ComboState) -> Iterator[MenuRow]:
    for index, label in enumerate(state.suggestions):
        yield MenuRow(index=index, label=label, highlighted=index == state.highlighted)


def render_menu(state: ComboState, width: int | None = None) -> Text:
    """Menu body: one line per suggestion, the highlighted one in light green."""
    text = Text(no_wrap=True, overflow="ellipsis")
    base = Style(color=MENU_FOREGROUND, bgcolor=MENU_BACKGROUND)
    highlight = Style(color=MENU_FOREGROUND, bgcolor=HIGHLIGHT_COLOR, bold=True)
    for row in menu_rows(state):
        if row.index:
            text.append("\n")
        label = f" {row.label}"
        if width is not None:
            label = label.ljust(width)
        text.append(label, style=highlight if row.highlighted else base)
    return text
