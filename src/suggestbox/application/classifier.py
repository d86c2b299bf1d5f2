"""
EventClassifier - turns raw UI events into named action streams.

The classifier never holds state of its own: each output is a stream
composed from the event bus with the free combinators of
`suggestbox.core.operators`. The only timed piece is the input debounce.
"""

from dataclasses import dataclass

from suggestbox.core.operators import (
    between,
    debounce,
    filter_stream,
    flat_map_latest,
    map_stream,
    merge,
    not_between,
)
from suggestbox.core.stream import Stream
from suggestbox.domain.actions import (
    Action,
    Navigate,
    Quit,
    SearchQuery,
    SelectHighlighted,
    SetHighlight,
    WantSuggestions,
)
from suggestbox.domain.events import (
    EventBus,
    FieldBlur,
    FieldFocus,
    ItemMouseDown,
    ItemMouseEnter,
    ItemMouseUp,
    KeyDown,
    TextInput,
    UIEvent,
)
from suggestbox.domain.protocols import Scheduler
from suggestbox.logger import get_logger

logger = get_logger("classifier")

UP_KEYCODE = 38
DOWN_KEYCODE = 40
ENTER_KEYCODE = 13
TAB_KEYCODE = 9

DEFAULT_DEBOUNCE_SECONDS = 0.5

_NAVIGATION_DELTAS = {UP_KEYCODE: -1, DOWN_KEYCODE: +1}


@dataclass(frozen=True)
class Intents:
    """Classified action streams.

    Attributes:
        search: Debounced, focused, non-empty field text
        move_highlight: Up/Down arrow keys
        set_highlight: Pointer entering a suggestion row
        keep_focus_on_input: Raw events whose default may have to be suppressed
                             (blur during a row click, Enter, Tab)
        select_highlighted: Enter, Tab or a row click
        wants_suggestions: True on focus, False on blur
        quit_autocomplete: Field cleared or focus moved elsewhere
    """

    search: Stream[SearchQuery]
    move_highlight: Stream[Navigate]
    set_highlight: Stream[SetHighlight]
    keep_focus_on_input: Stream[UIEvent]
    select_highlighted: Stream[SelectHighlighted]
    wants_suggestions: Stream[WantSuggestions]
    quit_autocomplete: Stream[Quit]

    def modifications(self) -> Stream[Action]:
        """The actions that modify state within an epoch, merged in arrival order."""
        return merge(
            self.move_highlight,
            self.set_highlight,
            self.select_highlighted,
            self.quit_autocomplete,
        )


class EventClassifier:
    """Classifies raw UI event streams into `Intents`."""

    def __init__(
        self,
        bus: EventBus,
        scheduler: Scheduler,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        """
        Args:
            bus: Event bus the front end publishes raw events on
            scheduler: Clock for the input debounce
            debounce_seconds: Quiet period before a text change becomes a search
        """
        if debounce_seconds <= 0:
            raise ValueError(f"debounce_seconds must be positive, got {debounce_seconds}")
        self._bus = bus
        self._scheduler = scheduler
        self._debounce_seconds = debounce_seconds

    def classify(self) -> Intents:
        logger.debug(f"Classifying raw events (debounce={self._debounce_seconds}s)")
        bus = self._bus
        input_events = bus.as_stream(TextInput)
        keydown = bus.as_stream(KeyDown)
        item_hover = bus.as_stream(ItemMouseEnter)
        item_mouse_down = bus.as_stream(ItemMouseDown)
        item_mouse_up = bus.as_stream(ItemMouseUp)
        focus = bus.as_stream(FieldFocus)
        blur = bus.as_stream(FieldBlur)

        enter_pressed = filter_stream(keydown, lambda event: event.keycode == ENTER_KEYCODE)
        tab_pressed = filter_stream(keydown, lambda event: event.keycode == TAB_KEYCODE)
        clear_field = filter_stream(input_events, lambda event: len(event.value) == 0)
        blur_to_item = between(blur, item_mouse_down, item_mouse_up)
        blur_elsewhere = not_between(blur, item_mouse_down, item_mouse_up)
        item_click = flat_map_latest(
            item_mouse_down,
            lambda down: filter_stream(item_mouse_up, lambda up: up.target == down.target),
        )

        search_text = map_stream(
            between(debounce(input_events, self._debounce_seconds, self._scheduler), focus, blur),
            lambda event: event.value,
        )

        return Intents(
            search=map_stream(filter_stream(search_text, lambda text: len(text) > 0), SearchQuery),
            move_highlight=map_stream(
                filter_stream(keydown, lambda event: event.keycode in _NAVIGATION_DELTAS),
                lambda event: Navigate(_NAVIGATION_DELTAS[event.keycode]),
            ),
            set_highlight=map_stream(item_hover, lambda event: SetHighlight(event.index)),
            keep_focus_on_input=merge(blur_to_item, enter_pressed, tab_pressed),
            select_highlighted=map_stream(
                merge(item_click, enter_pressed, tab_pressed),
                lambda _: SelectHighlighted(),
            ),
            wants_suggestions=merge(
                map_stream(focus, lambda _: WantSuggestions(True)),
                map_stream(blur, lambda _: WantSuggestions(False)),
            ),
            quit_autocomplete=map_stream(merge(clear_field, blur_elsewhere), lambda _: Quit()),
        )
