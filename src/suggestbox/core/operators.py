"""
Stream combinators.

Every combinator is a free function taking its source stream(s) as
arguments and returning a new cold `Stream`. Nothing here patches methods
onto `Stream`, so the windowing and timing logic can be exercised in
isolation with plain `Subject`s.
"""

from typing import Callable, TypeVar

from suggestbox.core.stream import (
    CompositeSubscription,
    Observer,
    SerialSubscription,
    Stream,
    Subscription,
)
from suggestbox.domain.protocols.scheduler import Scheduler, TimerHandle

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
A = TypeVar("A")

__all__ = [
    "of",
    "map_stream",
    "filter_stream",
    "merge",
    "start_with",
    "scan",
    "flat_map",
    "switch_latest",
    "flat_map_latest",
    "with_latest_from",
    "debounce",
    "between",
    "not_between",
    "collect",
]


def of(*values: T) -> Stream[T]:
    """Emit the given values synchronously on subscribe.

    The returned subscription is already disposed: nothing more will follow.
    """

    def subscribe(observer: Observer[T]) -> Subscription:
        subscription = Subscription()
        for value in values:
            observer(value)
        subscription.dispose()
        return subscription

    return Stream(subscribe)


def map_stream(source: Stream[T], fn: Callable[[T], U]) -> Stream[U]:
    def subscribe(observer: Observer[U]) -> Subscription:
        return source.subscribe(lambda value: observer(fn(value)))

    return Stream(subscribe)


def filter_stream(source: Stream[T], predicate: Callable[[T], bool]) -> Stream[T]:
    def subscribe(observer: Observer[T]) -> Subscription:
        def on_value(value: T) -> None:
            if predicate(value):
                observer(value)

        return source.subscribe(on_value)

    return Stream(subscribe)


def merge(*sources: Stream[T]) -> Stream[T]:
    """Interleave several streams; values keep their arrival order."""

    def subscribe(observer: Observer[T]) -> Subscription:
        return CompositeSubscription(*(source.subscribe(observer) for source in sources))

    return Stream(subscribe)


def start_with(source: Stream[T], *values: T) -> Stream[T]:
    """Emit `values` on subscribe, then everything from `source`."""

    def subscribe(observer: Observer[T]) -> Subscription:
        for value in values:
            observer(value)
        return source.subscribe(observer)

    return Stream(subscribe)


def scan(source: Stream[T], accumulator: Callable[[A, T], A], seed: A) -> Stream[A]:
    """Emit each intermediate accumulation. The seed itself is not emitted."""

    def subscribe(observer: Observer[A]) -> Subscription:
        acc = seed

        def on_value(value: T) -> None:
            nonlocal acc
            acc = accumulator(acc, value)
            observer(acc)

        return source.subscribe(on_value)

    return Stream(subscribe)


def flat_map(source: Stream[T], fn: Callable[[T], Stream[U]]) -> Stream[U]:
    """Subscribe to every inner stream and merge their values."""

    def subscribe(observer: Observer[U]) -> Subscription:
        group = CompositeSubscription()
        group.add(source.subscribe(lambda value: group.add(fn(value).subscribe(observer))))
        return group

    return Stream(subscribe)


def switch_latest(source: Stream[Stream[T]]) -> Stream[T]:
    """Mirror only the most recent inner stream.

    When a new inner stream arrives, the previous inner subscription is
    disposed before the new one is made, so late values of an older inner
    stream are never observed.
    """

    def subscribe(observer: Observer[T]) -> Subscription:
        inner = SerialSubscription()

        def on_inner(stream: Stream[T]) -> None:
            previous = inner.current
            if previous is not None:
                previous.dispose()
            inner.set(stream.subscribe(observer))

        outer = source.subscribe(on_inner)
        return CompositeSubscription(outer, inner)

    return Stream(subscribe)


def flat_map_latest(source: Stream[T], fn: Callable[[T], Stream[U]]) -> Stream[U]:
    return switch_latest(map_stream(source, fn))


def with_latest_from(
    source: Stream[T], other: Stream[U], combine: Callable[[T, U], V]
) -> Stream[V]:
    """Combine each source value with the latest value of `other`.

    Source values arriving before `other` has emitted are dropped.
    """

    def subscribe(observer: Observer[V]) -> Subscription:
        latest: list[U] = []

        def on_other(value: U) -> None:
            latest[:] = [value]

        def on_value(value: T) -> None:
            if latest:
                observer(combine(value, latest[0]))

        other_subscription = other.subscribe(on_other)
        return CompositeSubscription(other_subscription, source.subscribe(on_value))

    return Stream(subscribe)


def debounce(source: Stream[T], delay: float, scheduler: Scheduler) -> Stream[T]:
    """Emit the latest value once `delay` seconds pass without a newer one."""

    def subscribe(observer: Observer[T]) -> Subscription:
        pending: TimerHandle | None = None

        def cancel_pending() -> None:
            nonlocal pending
            if pending is not None:
                pending.cancel()
                pending = None

        def on_value(value: T) -> None:
            nonlocal pending
            cancel_pending()

            def fire() -> None:
                nonlocal pending
                pending = None
                observer(value)

            pending = scheduler.call_later(delay, fire)

        upstream = source.subscribe(on_value)
        subscription = CompositeSubscription(upstream)
        subscription.on_dispose(cancel_pending)
        return subscription

    return Stream(subscribe)


def _window_gate(source: Stream[T], opening: Stream, closing: Stream, inside: bool) -> Stream[T]:
    def subscribe(observer: Observer[T]) -> Subscription:
        is_open = False

        def on_open(_) -> None:
            nonlocal is_open
            is_open = True

        def on_close(_) -> None:
            nonlocal is_open
            is_open = False

        def on_value(value: T) -> None:
            if is_open == inside:
                observer(value)

        return CompositeSubscription(
            opening.subscribe(on_open),
            closing.subscribe(on_close),
            source.subscribe(on_value),
        )

    return Stream(subscribe)


def between(source: Stream[T], opening: Stream, closing: Stream) -> Stream[T]:
    """Pass source values that follow an `opening` value with no `closing` value since."""
    return _window_gate(source, opening, closing, inside=True)


def not_between(source: Stream[T], opening: Stream, closing: Stream) -> Stream[T]:
    """Pass source values outside every opening/closing window, including before the first opening."""
    return _window_gate(source, opening, closing, inside=False)


def collect(stream: Stream[T], sink: list[T] | None = None) -> tuple[list[T], Subscription]:
    """Subscribe and append every value to a list. Handy for drivers and tests."""
    values: list[T] = [] if sink is None else sink
    return values, stream.subscribe(values.append)
