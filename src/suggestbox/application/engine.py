"""
ComboBoxEngine - wires the classifier, dispatcher, correlator, reducer and
suppression filter into one running pipeline.

Data flow:
    raw events -> EventClassifier -> intents
    intents.search -> QueryDispatcher -> transport.send
    transport.responses -> ResponseCorrelator -> StateReducer <- intents
    intents.keep_focus_on_input + states -> SuppressionFilter -> drivers
"""

from typing import Callable

from suggestbox.application.classifier import DEFAULT_DEBOUNCE_SECONDS, EventClassifier, Intents
from suggestbox.application.correlator import ResponseCorrelator
from suggestbox.application.dispatcher import QueryDispatcher
from suggestbox.application.reducer import StateReducer
from suggestbox.application.suppression import SuppressionFilter
from suggestbox.core.stream import CompositeSubscription, Stream
from suggestbox.domain.events import (
    Event,
    EventBus,
    Request,
    SelectionCommitted,
    SuppressionSignal,
)
from suggestbox.domain.protocols import Scheduler, Transport
from suggestbox.domain.state import ComboPhase, ComboState
from suggestbox.logger import get_logger

logger = get_logger("engine")

StateSink = Callable[[ComboState], None]
SuppressionSink = Callable[[SuppressionSignal], None]
SelectionSink = Callable[[SelectionCommitted], None]


class ComboBoxEngine:
    """
    The running combo box.

    Example:
        ```python
        engine = ComboBoxEngine(transport, AsyncioScheduler(), endpoint=BASE_URL)
        engine.start(on_state=render, on_suppress=prevent_default)
        engine.publish(FieldFocus())
        engine.publish(TextInput(value="lo"))
        ```

    Lifecycle:
        1. Create the engine with its collaborators
        2. Call `start()` with the driver callbacks
        3. Publish raw events
        4. Call `stop()` to tear down every subscription
    """

    def __init__(
        self,
        transport: Transport,
        scheduler: Scheduler,
        *,
        endpoint: str,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        bus: EventBus | None = None,
    ):
        """
        Args:
            transport: Network collaborator
            scheduler: Clock for the input debounce
            endpoint: Base URL the encoded query is appended to
            debounce_seconds: Quiet period before a text change becomes a search
            bus: Event bus for raw events. If None, a new EventBus is created.
        """
        self.bus = bus or EventBus()
        self.transport = transport
        self.endpoint = endpoint

        self.intents: Intents = EventClassifier(self.bus, scheduler, debounce_seconds).classify()
        self.dispatcher = QueryDispatcher(self.intents.search, endpoint)
        self.correlator = ResponseCorrelator(transport.responses, endpoint)
        self.reducer = StateReducer(self.correlator.suggestions(), self.intents)
        self.suppression = SuppressionFilter(self.intents.keep_focus_on_input, self.reducer.states)

        self._subscription: CompositeSubscription | None = None

    @property
    def states(self) -> Stream[ComboState]:
        return self.reducer.states

    @property
    def selections(self) -> Stream[SelectionCommitted]:
        return self.reducer.selections

    @property
    def state(self) -> ComboState:
        return self.reducer.current

    @property
    def phase(self) -> ComboPhase:
        return self.reducer.phase

    @property
    def is_running(self) -> bool:
        return self._subscription is not None

    def _send(self, request: Request) -> None:
        logger.debug(f"Sending request {request.url}")
        self.transport.send(request)

    def start(
        self,
        *,
        on_state: StateSink | None = None,
        on_suppress: SuppressionSink | None = None,
        on_selection: SelectionSink | None = None,
    ) -> None:
        """
        Connect the pipeline and the driver callbacks.

        Connection order is fixed: suppression first, then state, then
        requests. For a raw event that both needs a suppression decision and
        changes state (Enter, Tab), the decision therefore sees the state from
        before that event.

        Args:
            on_state: Renderer; receives the current snapshot immediately, then every new one
            on_suppress: Input driver; must prevent the referenced event's default
            on_selection: Optional one-shot selection notifications
        """
        if self.is_running:
            logger.warning("ComboBoxEngine already running")
            return

        subscription = CompositeSubscription()
        if on_suppress is not None:
            subscription.add(self.suppression.signals().subscribe(on_suppress))
        if on_state is not None:
            subscription.add(self.states.subscribe(on_state))
        if on_selection is not None:
            subscription.add(self.selections.subscribe(on_selection))
        self.reducer.start()
        subscription.on_dispose(self.reducer.stop)
        subscription.add(self.dispatcher.requests().subscribe(self._send))
        self._subscription = subscription
        logger.info(f"ComboBoxEngine started (endpoint={self.endpoint})")

    def stop(self) -> None:
        """Dispose every subscription, cancelling a pending debounce."""
        if self._subscription is None:
            return
        subscription, self._subscription = self._subscription, None
        subscription.dispose()
        logger.info("ComboBoxEngine stopped")

    def publish(self, event: Event) -> None:
        """Feed one raw event; all reactions complete before this returns."""
        self.bus.publish(event)
