"""BaseViewModel — pure Python, no Qt dependency.

Provides subscription lifecycle management so that concrete ViewModels can
subscribe to ``EventBus`` events and store streams and have them released
deterministically via ``dispose()`` or a ``with`` block.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, Type

from finproducts.events.bus import EventBus, Subscription
from finproducts.gui.viewmodels.signal import StateStream, StreamSubscription


class _Cancellable(Protocol):
    def cancel(self) -> None: ...


class BaseViewModel:
    """ViewModel base class — pure Python, no Qt dependency."""

    def __init__(self) -> None:
        self._subscriptions: list[_Cancellable] = []
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def subscribe_event(
        self,
        event_bus: EventBus,
        event_type: Type,
        handler: Callable,
    ) -> Subscription:
        """Subscribe to an event type and track the subscription."""
        sub = event_bus.subscribe(event_type, handler)
        self._subscriptions.append(sub)
        return sub

    def subscribe_stream(
        self,
        stream: StateStream,
        handler: Callable[[Any], None],
    ) -> StreamSubscription:
        """Subscribe to a store stream and track the subscription.

        The handler runs once immediately with the current snapshot.
        """
        sub = stream.subscribe(handler)
        self._subscriptions.append(sub)
        return sub

    def dispose(self) -> None:
        """Cancel all tracked subscriptions."""
        self._disposed = True
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
