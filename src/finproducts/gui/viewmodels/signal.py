"""Pure Python signal system — no Qt dependency.

Provides ``Signal`` for observer-pattern callbacks, ``ObservableProperty``
for data-binding in ViewModels and ``StateStream`` for stores whose
subscribers must start from the current value.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, AsyncIterator, Callable, Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Signal:
    """Pure Python signal — does not depend on Qt.

    Exceptions raised by individual handlers are caught and logged so that one
    failing handler does not prevent subsequent handlers from executing.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception as exc:
                _logger.error("Signal handler %r failed: %s", handler, exc)

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)


class ObservableProperty:
    """Observable property — ViewModel data-binding foundation.

    Emits ``changed(new_value, old_value)`` whenever the value is set to a
    different object.
    """

    def __init__(self, initial_value: Any = None) -> None:
        self._value = initial_value
        self.changed = Signal()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._value != new_value:
            old_value = self._value
            self._value = new_value
            self.changed.emit(new_value, old_value)


class StreamSubscription:
    """Handle returned by :meth:`StateStream.subscribe`."""

    def __init__(self, stream: StateStream, handler: Callable[[Any], None]) -> None:
        self._stream = stream
        self.handler = handler
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._stream._remove(self)


class StateStream(Generic[T]):
    """Latest-value channel.

    A new subscriber immediately receives the current value, then every
    later emission in order.  Values are treated as immutable snapshots.
    """

    def __init__(self, initial_value: T) -> None:
        self._value = initial_value
        self._subscriptions: list[StreamSubscription] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    def emit(self, value: T) -> None:
        self._value = value
        with self._lock:
            subscriptions = list(self._subscriptions)
        for sub in subscriptions:
            self._deliver(sub, value)

    def subscribe(self, handler: Callable[[T], None]) -> StreamSubscription:
        sub = StreamSubscription(self, handler)
        with self._lock:
            self._subscriptions.append(sub)
        self._deliver(sub, self._value)
        return sub

    async def changes(self) -> AsyncIterator[T]:
        """Yield the current value, then each change, until the consumer stops.

        Every call starts a fresh sequence; closing the iterator releases its
        subscription.
        """
        queue: asyncio.Queue[T] = asyncio.Queue()
        sub = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            sub.cancel()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def _remove(self, sub: StreamSubscription) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(sub)
            except ValueError:
                pass

    @staticmethod
    def _deliver(sub: StreamSubscription, value: Any) -> None:
        if not sub.active:
            return
        try:
            sub.handler(value)
        except Exception as exc:
            _logger.error("Stream subscriber %r failed: %s", sub.handler, exc)
