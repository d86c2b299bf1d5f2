"""Shared fixtures for suggestbox tests."""

from urllib.parse import quote

import pytest

from suggestbox.application.engine import ComboBoxEngine
from suggestbox.core.scheduler import VirtualScheduler
from suggestbox.domain.events import (
    EventBus,
    FieldBlur,
    FieldFocus,
    ItemMouseDown,
    ItemMouseEnter,
    ItemMouseUp,
    KeyDown,
    TextInput,
)
from suggestbox.infrastructure.transport import InMemoryTransport

ENDPOINT = "https://example.test/w/api.php?action=opensearch&format=json&search="

UP, DOWN, ENTER, TAB = 38, 40, 13, 9

FIELD = object()


class EngineHarness:
    """Drives a started engine with raw events on a virtual clock.

    Everything the engine hands to its drivers is recorded in `log` as
    ("state", snapshot), ("signal", suppression) or ("selection", value).
    """

    def __init__(self, engine: ComboBoxEngine, scheduler: VirtualScheduler, transport: InMemoryTransport):
        self.engine = engine
        self.scheduler = scheduler
        self.transport = transport
        self.log: list[tuple[str, object]] = []
        self.states = []
        self.signals = []
        self.selections = []

    def _on_state(self, state) -> None:
        self.states.append(state)
        self.log.append(("state", state))

    def _on_signal(self, signal) -> None:
        self.signals.append(signal)
        self.log.append(("signal", signal))

    def _on_selection(self, selection) -> None:
        self.selections.append(selection.value)
        self.log.append(("selection", selection.value))

    def start(self) -> None:
        self.engine.start(
            on_state=self._on_state,
            on_suppress=self._on_signal,
            on_selection=self._on_selection,
        )

    @property
    def state(self):
        return self.engine.state

    def url(self, query: str) -> str:
        return ENDPOINT + quote(query, safe="")

    def focus(self) -> None:
        self.engine.publish(FieldFocus(target=FIELD))

    def blur(self) -> FieldBlur:
        event = FieldBlur(target=FIELD)
        self.engine.publish(event)
        return event

    def type(self, text: str) -> None:
        self.engine.publish(TextInput(target=FIELD, value=text))

    def press(self, keycode: int) -> KeyDown:
        event = KeyDown(target=FIELD, keycode=keycode)
        self.engine.publish(event)
        return event

    def hover(self, index: int) -> None:
        self.engine.publish(ItemMouseEnter(target=("row", index), index=index))

    def mouse_down(self, index: int) -> None:
        self.engine.publish(ItemMouseDown(target=("row", index)))

    def mouse_up(self, index: int) -> None:
        self.engine.publish(ItemMouseUp(target=("row", index)))

    def search(self, text: str) -> None:
        """Type `text` and let the debounce fire."""
        self.type(text)
        self.scheduler.advance_by(0.5)

    def respond(self, query: str, items: list[str]) -> None:
        self.transport.respond(self.url(query), items)

    def show(self, query: str, items: list[str]) -> None:
        """Focus, search and answer, leaving `items` on screen."""
        self.focus()
        self.search(query)
        self.respond(query, items)


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport(endpoint=ENDPOINT)


@pytest.fixture
def harness(scheduler, transport):
    engine = ComboBoxEngine(transport, scheduler, endpoint=ENDPOINT, debounce_seconds=0.5)
    harness = EngineHarness(engine, scheduler, transport)
    harness.start()
    yield harness
    engine.stop()
