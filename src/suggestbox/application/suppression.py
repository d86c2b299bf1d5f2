"""
SuppressionFilter - decides which keep-focus events lose their default action.
"""

from suggestbox.core.operators import filter_stream, with_latest_from
from suggestbox.core.stream import Stream
from suggestbox.domain.events import SuppressionSignal, UIEvent
from suggestbox.domain.state import ComboState
from suggestbox.logger import get_logger

logger = get_logger("suppression")


def should_suppress(state: ComboState) -> bool:
    """Menu interaction takes precedence only while a suggestion is highlighted."""
    return bool(state.suggestions) and state.has_highlight


class SuppressionFilter:
    """
    Pairs each keep-focus event with the latest state snapshot.

    The filter must be subscribed before the reducer connects, so that for a
    single raw event (Enter, say) it reads the state as it was before the
    reducer applied the same event.
    """

    def __init__(self, keep_focus_on_input: Stream[UIEvent], states: Stream[ComboState]):
        """
        Args:
            keep_focus_on_input: Classified keep-focus events
            states: State snapshots; must replay the current one on subscribe
        """
        self._keep_focus_on_input = keep_focus_on_input
        self._states = states

    def _decide(self, event: UIEvent, state: ComboState) -> SuppressionSignal | None:
        if should_suppress(state):
            logger.debug(f"Suppressing default {event.kind} (highlighted={state.highlighted})")
            return SuppressionSignal(event)
        logger.debug(f"Letting default {event.kind} through")
        return None

    def signals(self) -> Stream[SuppressionSignal]:
        decisions = with_latest_from(self._keep_focus_on_input, self._states, self._decide)
        return filter_stream(decisions, lambda signal: signal is not None)
