"""
Observable State Cells and Event Streams.

Small single-writer publish/subscribe primitives used to hand state from
the controllers to consumers:

    - EventStream: fan-out of discrete values, no current value
    - StateCell: holds a current value, replays it to new subscribers

The owner keeps the writable object and gives consumers a read-only view
(`readonly()`), so each piece of state has exactly one writer. All calls
happen on the event loop thread; no locking is done here.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Callback = Callable[[T], None]


class StreamClosedError(RuntimeError):
    """Raised when emitting on a completed stream."""


class Subscription:
    """Handle returned by subscribe(); call unsubscribe() to detach."""

    def __init__(self, detach: Callable[[], None]) -> None:
        self._detach: Optional[Callable[[], None]] = detach

    @property
    def closed(self) -> bool:
        return self._detach is None

    def unsubscribe(self) -> None:
        if self._detach is not None:
            detach, self._detach = self._detach, None
            detach()


class EventStream(Generic[T]):
    """Delivers each emitted value to the subscribers present at emit time."""

    def __init__(self, name: str = "stream") -> None:
        self.name = name
        self._subscribers: List[Callback[T]] = []
        self._completed = False

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callback[T]) -> Subscription:
        if self._completed:
            return Subscription(lambda: None)
        self._subscribers.append(callback)
        return Subscription(lambda: self._remove(callback))

    def emit(self, value: T) -> None:
        if self._completed:
            raise StreamClosedError(f"{self.name} is completed")
        for callback in list(self._subscribers):
            callback(value)

    def complete(self) -> None:
        """Drop all subscribers; later emits raise StreamClosedError."""
        if not self._completed:
            logger.debug(f"{self.name} completed with {len(self._subscribers)} subscribers")
        self._completed = True
        self._subscribers.clear()

    def readonly(self) -> "ReadOnlyStream[T]":
        return ReadOnlyStream(self)

    def _remove(self, callback: Callback[T]) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass  # already dropped by complete()


class StateCell(EventStream[T]):
    """An EventStream that remembers its latest value."""

    def __init__(self, initial: T, name: str = "cell") -> None:
        super().__init__(name)
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, callback: Callback[T]) -> Subscription:
        subscription = super().subscribe(callback)
        if not self._completed:
            callback(self._value)
        return subscription

    def set(self, value: T) -> None:
        if self._completed:
            raise StreamClosedError(f"{self.name} is completed")
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

    def emit(self, value: T) -> None:
        self.set(value)

    def update(self, func: Callable[[T], T]) -> None:
        self.set(func(self._value))

    def readonly(self) -> "ReadOnlyCell[T]":
        return ReadOnlyCell(self)


class ReadOnlyStream(Generic[T]):
    """Consumer-side view of an EventStream."""

    def __init__(self, source: EventStream[T]) -> None:
        self._source = source

    @property
    def completed(self) -> bool:
        return self._source.completed

    def subscribe(self, callback: Callback[T]) -> Subscription:
        return self._source.subscribe(callback)


class ReadOnlyCell(ReadOnlyStream[T]):
    """Consumer-side view of a StateCell."""

    _source: StateCell[T]

    @property
    def value(self) -> T:
        return self._source.value
