"""
Push-based event streams.

A `Stream` is defined by its subscribe function: subscribing runs that
function with an observer and returns a `Subscription` that undoes it.
Streams built by the operators in `suggestbox.core.operators` are cold (each
subscriber gets its own operator state) and usually sit on top of hot
sources: a `Subject`, or an event type exposed by the event bus.

There is no error or completion channel. Exceptions raised by an observer
propagate to whoever emitted the value.
"""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]


class Subscription:
    """Handle returned by `Stream.subscribe()`.

    `dispose()` is idempotent; callbacks registered after disposal run
    immediately.
    """

    def __init__(self, dispose: Callable[[], None] | None = None):
        self._callbacks: list[Callable[[], None]] = [dispose] if dispose else []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def on_dispose(self, callback: Callable[[], None]) -> None:
        if self._closed:
            callback()
        else:
            self._callbacks.append(callback)

    def dispose(self) -> None:
        if self._closed:
            return
        self._closed = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()


class CompositeSubscription(Subscription):
    """Disposes a group of subscriptions together, in the order they were added.

    Children that are already closed when added are not kept.
    """

    def __init__(self, *subscriptions: Subscription):
        super().__init__()
        self._children: list[Subscription] = list(subscriptions)
        self.on_dispose(self._dispose_children)

    def add(self, subscription: Subscription) -> None:
        if subscription.closed:
            return
        if self.closed:
            subscription.dispose()
        else:
            self._children.append(subscription)

    def _dispose_children(self) -> None:
        children, self._children = self._children, []
        for child in children:
            child.dispose()

    def __len__(self) -> int:
        return len(self._children)


class SerialSubscription(Subscription):
    """Holds one inner subscription at a time; replacing it disposes the previous one."""

    def __init__(self):
        super().__init__()
        self._current: Subscription | None = None
        self.on_dispose(self._dispose_current)

    @property
    def current(self) -> Subscription | None:
        return self._current

    def set(self, subscription: Subscription) -> None:
        if self.closed:
            subscription.dispose()
            return
        previous, self._current = self._current, subscription
        if previous is not None:
            previous.dispose()

    def _dispose_current(self) -> None:
        current, self._current = self._current, None
        if current is not None:
            current.dispose()


class Stream(Generic[T]):
    """A source of values that observers can subscribe to."""

    def __init__(self, subscribe: Callable[[Observer[T]], Subscription]):
        self._subscribe = subscribe

    def subscribe(self, observer: Observer[T]) -> Subscription:
        return self._subscribe(observer)


class Subject(Stream[T]):
    """Hot multicast stream fed with `emit()`.

    Observers are called in subscription order over a snapshot of the
    observer list; an observer disposed in the middle of an emission is not
    called for the rest of it.
    """

    def __init__(self, name: str = "subject"):
        super().__init__(self._attach)
        self.name = name
        self._entries: list[tuple[Subscription, Observer[T]]] = []

    def _attach(self, observer: Observer[T]) -> Subscription:
        subscription = Subscription()
        entry = (subscription, observer)
        self._entries.append(entry)
        subscription.on_dispose(lambda: self._entries.remove(entry))
        return subscription

    def emit(self, value: T) -> None:
        for subscription, observer in list(self._entries):
            if not subscription.closed:
                observer(value)

    @property
    def has_observers(self) -> bool:
        return bool(self._entries)


class BehaviorSubject(Subject[T]):
    """Subject that holds a current value and replays it to new subscribers."""

    def __init__(self, initial: T, name: str = "behavior"):
        super().__init__(name)
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def _attach(self, observer: Observer[T]) -> Subscription:
        subscription = super()._attach(observer)
        observer(self._value)
        return subscription

    def emit(self, value: T) -> None:
        self._value = value
        super().emit(value)
