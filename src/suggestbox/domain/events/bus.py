"""Event bus implementation for decoupled event-driven communication.

The EventBus is the single entry point for raw UI events. The front end
publishes them; the engine's classifier subscribes to each event type as a
stream.

Event Handler Contract:
    Event handlers MUST be synchronous (non-async) functions. This is enforced
    at subscription time. All reactions to one published event run to
    completion, in subscription order, before `publish()` returns.
"""

import inspect
from typing import Callable, Type, TypeVar

from suggestbox.core.stream import Stream, Subscription
from suggestbox.logger import get_logger

from .types import Event

logger = get_logger("events.bus")

T = TypeVar("T", bound=Event)

# Type alias for event handlers - must be synchronous
EventHandler = Callable[[Event], None]


class EventBus:
    """Event bus for publishing and subscribing to events.

    Example:
        ```python
        bus = EventBus()
        bus.subscribe(KeyDown, lambda event: print(event.keycode))
        bus.publish(KeyDown(keycode=40))
        ```

    Thread safety:
        This implementation is NOT thread-safe. It assumes all operations
        happen within the same event loop.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: dict[Type[Event], list[Callable[[Event], None]]] = {}
        """Registry of event handlers by event type."""

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: The exact type of event to subscribe to
            handler: Synchronous callback receiving the event instance

        Raises:
            TypeError: If handler is an async function (coroutine function)
        """
        if inspect.iscoroutinefunction(handler):
            raise TypeError(
                f"Event handlers must be synchronous functions. "
                f"Handler {handler.__name__} is an async function (coroutine function). "
                f"To perform async work, schedule it using asyncio.create_task() instead."
            )

        handlers = self._handlers.setdefault(event_type, [])

        # Avoid duplicate subscriptions of the same handler
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed handler for {event_type.__name__}")
        else:
            logger.debug(f"Handler already subscribed for {event_type.__name__}, skipping")

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Unsubscribe a handler from events of a specific type.

        If the handler was not subscribed, this is a no-op.
        """
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Unsubscribed handler for {event_type.__name__}")
            except ValueError:
                logger.debug(f"Handler not found in subscriptions for {event_type.__name__}")

    def publish(self, event: Event) -> None:
        """
        Publish an event to all subscribed handlers.

        Handlers are called synchronously in the order they were subscribed,
        over a snapshot of the handler list: handlers added during the dispatch
        wait for the next event.

        Error Handling:
            If a handler raises an exception, it is logged and does not prevent
            other handlers from being called.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])

        if not handlers:
            logger.debug(f"No handlers subscribed for {event_type.__name__}")
            return

        logger.debug(f"Publishing {event_type.__name__} to {len(handlers)} handler(s)")

        for handler in list(handlers):
            try:
                handler(event)
            except Exception as e:
                logger.opt(exception=True).error(f"Error in event handler for {event_type.__name__}: {e}")

    def as_stream(self, event_type: Type[T]) -> Stream[T]:
        """
        Expose one event type as a stream.

        Each subscription to the returned stream registers its own bus handler
        and removes it on dispose. A handler removed in the middle of a
        dispatch is not called for the rest of that dispatch.
        """

        def subscribe(observer: Callable[[T], None]) -> Subscription:
            subscription = Subscription()

            def handler(event: T) -> None:
                if not subscription.closed:
                    observer(event)

            self.subscribe(event_type, handler)
            subscription.on_dispose(lambda: self.unsubscribe(event_type, handler))
            return subscription

        return Stream(subscribe)

    def clear(self) -> None:
        """
        Clear all event subscriptions.

        This is useful for cleanup or testing scenarios.
        """
        self._handlers.clear()
        logger.debug("Event bus cleared")

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        """Check if there are any subscribers for a specific event type."""
        return len(self._handlers.get(event_type, [])) > 0
