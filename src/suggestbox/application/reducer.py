"""
StateReducer - folds suggestion lists and actions into state snapshots.

Each accepted suggestion list starts a new epoch: a fresh base state and a
new subscription to the action streams. Starting an epoch disposes the
previous epoch's subscription, so no action can reach a list it was not
aimed at.
"""

from typing import Sequence

from suggestbox.application.classifier import Intents
from suggestbox.core.operators import (
    flat_map,
    flat_map_latest,
    map_stream,
    of,
    scan,
    start_with,
    with_latest_from,
)
from suggestbox.core.stream import BehaviorSubject, CompositeSubscription, Stream, Subject, Subscription
from suggestbox.domain.actions import (
    Action,
    Navigate,
    Quit,
    SearchQuery,
    SelectHighlighted,
    SetHighlight,
    WantSuggestions,
)
from suggestbox.domain.events import SelectionCommitted
from suggestbox.domain.state import ComboPhase, ComboState, phase_of
from suggestbox.logger import get_logger

logger = get_logger("reducer")


def _navigate(state: ComboState, delta: int) -> ComboState:
    count = len(state.suggestions)
    if count == 0:
        return state
    if state.highlighted is None:
        return state.update(highlighted=min(delta, 0) % count)
    return state.update(highlighted=(state.highlighted + delta) % count)


def _set_highlight(state: ComboState, index: int) -> ComboState:
    if not 0 <= index < len(state.suggestions):
        logger.debug(f"Ignoring highlight {index} outside {len(state.suggestions)} suggestion(s)")
        return state
    return state.update(highlighted=index)


def _select(state: ComboState, commit: bool) -> ComboState:
    if commit and state.highlighted_value is not None:
        return state.update(
            selected=state.highlighted_value,
            suggestions=(),
            highlighted=None,
        )
    return state.update(selected=None)


def apply_action(state: ComboState, action: Action) -> ComboState:
    """
    Apply one action to a snapshot, returning the next snapshot.

    `WantSuggestions` and `SearchQuery` are not state modifications (they
    feed suggestion acceptance and the query dispatcher); applying them
    returns the state unchanged.

    Raises:
        TypeError: If `action` is not a known action type
    """
    if isinstance(action, Navigate):
        return _navigate(state, action.delta)
    if isinstance(action, SetHighlight):
        return _set_highlight(state, action.index)
    if isinstance(action, SelectHighlighted):
        return _select(state, action.commit)
    if isinstance(action, Quit):
        return state.update(suggestions=(), highlighted=None)
    if isinstance(action, (WantSuggestions, SearchQuery)):
        return state
    raise TypeError(f"Unknown action: {action!r}")


def expand(action: Action) -> Sequence[Action]:
    """
    Split an action into the updates it produces.

    A selection is a pulse: the committing update, immediately followed by a
    reset, so a renderer sees the committed value for exactly one snapshot.
    """
    if isinstance(action, SelectHighlighted) and action.commit:
        return (action, SelectHighlighted(commit=False))
    return (action,)


class StateReducer:
    """
    Owns the current state and the current epoch.

    The reducer does nothing until `start()`; from then on every snapshot is
    pushed to `states`, which replays the latest snapshot to new subscribers.

    Example:
        ```python
        reducer = StateReducer(correlator.suggestions(), intents)
        reducer.states.subscribe(render)
        reducer.start()
        ```
    """

    def __init__(self, suggestions: Stream[Sequence[str]], intents: Intents):
        """
        Args:
            suggestions: Correlated suggestion lists
            intents: Classified action streams
        """
        self._suggestions = suggestions
        self._intents = intents
        self._store: BehaviorSubject[ComboState] = BehaviorSubject(ComboState(), name="state")
        self._selections: Subject[SelectionCommitted] = Subject(name="selections")
        self._subscription: Subscription | None = None
        self._epoch = 0
        self._focused = False

    @property
    def states(self) -> Stream[ComboState]:
        """Snapshots in order; subscribers receive the current one immediately."""
        return self._store

    @property
    def selections(self) -> Stream[SelectionCommitted]:
        """One notification per committed selection, emitted right after the committing snapshot."""
        return self._selections

    @property
    def current(self) -> ComboState:
        return self._store.value

    @property
    def epoch(self) -> int:
        """Number of suggestion lists accepted since start (0 for the initial empty list)."""
        return self._epoch

    @property
    def focused(self) -> bool:
        return self._focused

    @property
    def phase(self) -> ComboPhase:
        return phase_of(self.current, self._focused)

    @property
    def is_running(self) -> bool:
        return self._subscription is not None and not self._subscription.closed

    def _accept(self, suggestions: Sequence[str], wanted: WantSuggestions) -> Sequence[str]:
        if not wanted.wanted:
            logger.debug(f"Field not focused; accepting {len(suggestions)} suggestion(s) as empty")
            return ()
        return suggestions

    def _begin_epoch(self, base: ComboState) -> Stream[ComboState]:
        self._epoch += 1
        logger.debug(f"Epoch {self._epoch} started with {len(base.suggestions)} suggestion(s)")
        steps = flat_map(self._intents.modifications(), lambda action: of(*expand(action)))
        return start_with(scan(steps, apply_action, base), base)

    def _track_focus(self, wanted: WantSuggestions) -> None:
        self._focused = wanted.wanted

    def _publish(self, state: ComboState) -> None:
        self._store.emit(state)
        if state.selected is not None:
            logger.info(f"Selection committed: {state.selected!r}")
            self._selections.emit(SelectionCommitted(state.selected))

    def start(self) -> None:
        """Connect to the suggestion and action streams.

        The initial empty state is epoch 0; every accepted list opens the next one.
        """
        if self.is_running:
            logger.warning("StateReducer already running")
            return

        self._epoch = -1
        accepted = with_latest_from(self._suggestions, self._intents.wants_suggestions, self._accept)
        bases = start_with(map_stream(accepted, ComboState.fresh), ComboState())
        snapshots = flat_map_latest(bases, self._begin_epoch)

        subscription = CompositeSubscription()
        subscription.add(self._intents.wants_suggestions.subscribe(self._track_focus))
        subscription.add(snapshots.subscribe(self._publish))
        self._subscription = subscription
        logger.info("StateReducer started")

    def stop(self) -> None:
        """Dispose the current epoch and stop listening. The last snapshot stays readable."""
        if not self.is_running:
            return
        self._subscription.dispose()
        self._subscription = None
        logger.info(f"StateReducer stopped after {self._epoch} epoch(s)")
