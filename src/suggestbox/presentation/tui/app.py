"""
SuggestBoxApp - Textual front end for the combo box engine.

The app is both collaborators the engine needs: the renderer (applies state
snapshots to the widgets) and the input driver (carries out suppression
signals on the native Textual events).
"""

from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, Label, Static

from suggestbox.application.engine import ComboBoxEngine
from suggestbox.domain.events import SelectionCommitted, SuppressionSignal
from suggestbox.domain.state import ComboState
from suggestbox.logger import get_logger
from suggestbox.presentation.render import field_directive
from suggestbox.presentation.widgets import SearchField, SuggestionMenu

logger = get_logger("suggestbox_tui")


class SuggestBoxApp(App):
    """
    The terminal combo box.

    Layout:
    ┌───────────────────────────────────────────┐
    │                 Header                    │
    ├───────────────────────────────────────────┤
    │ Query:      [search field               ] │
    │             [suggestion menu (optional) ] │
    │ Some field: [plain input                ] │
    │ status line                               │
    ├───────────────────────────────────────────┤
    │                 Footer                    │
    └───────────────────────────────────────────┘
    """

    TITLE = "suggestbox"
    SUB_TITLE = "Search suggestions as you type"

    CSS = """
    #container {
        background: $panel;
        padding: 1;
        height: auto;
    }

    .section {
        height: auto;
        margin-bottom: 1;
    }

    .field-label {
        width: 14;
        content-align: right middle;
        padding: 1 1 0 0;
    }

    #combo-box {
        width: 60;
        height: auto;
    }

    #other {
        width: 60;
    }

    #menu {
        background: white;
        color: black;
    }

    #status {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+c", "quit", "Quit", priority=True, show=False),
    ]

    def __init__(self, engine: ComboBoxEngine, transport: Any | None = None):
        """
        Args:
            engine: The combo box engine (not yet started)
            transport: The engine's transport, closed on exit if it has `aclose()`
        """
        super().__init__()
        self.engine = engine
        self.transport = transport
        self.selections: list[str] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="container"):
            with Horizontal(classes="section"):
                yield Label("Query:", classes="field-label")
                with Vertical(id="combo-box"):
                    yield SearchField(self.engine.publish, id="query")
                    yield SuggestionMenu(self.engine.publish, id="menu")
            with Horizontal(classes="section"):
                yield Label("Some field:", classes="field-label")
                yield Input(id="other")
            yield Static(id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.engine.start(
            on_state=self._render_state,
            on_suppress=self._apply_suppression,
            on_selection=self._on_selection,
        )
        self.query_one(SearchField).focus()
        logger.info("suggestbox TUI mounted and ready")

    async def on_unmount(self) -> None:
        self.engine.stop()
        aclose = getattr(self.transport, "aclose", None)
        if aclose is not None:
            await aclose()

    def _render_state(self, state: ComboState) -> None:
        directive = field_directive(state)
        if directive.overwrites:
            self.query_one(SearchField).inject_text(directive.text)
        self.query_one(SuggestionMenu).show_state(state)
        self.query_one("#status", Static).update(
            f"{self.engine.phase.value} | epoch {self.engine.reducer.epoch} | "
            f"{len(state.suggestions)} suggestion(s)"
        )

    def _apply_suppression(self, signal: SuppressionSignal) -> None:
        source = signal.event.source
        if source is not None:
            source.prevent_default()
            source.stop()
        if signal.refocus and signal.event.target is not None:
            self.call_after_refresh(signal.event.target.focus)
        logger.debug(f"Suppressed default {signal.event.kind}")

    def _on_selection(self, selection: SelectionCommitted) -> None:
        self.selections.append(selection.value)
        self.notify(f"Selected {selection.value}", timeout=2)
