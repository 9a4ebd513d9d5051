from .bus import Event, EventBus, Subscription
from .product_events import (
    ProductCreatedEvent,
    ProductDeletedEvent,
    ProductsLoadedEvent,
    ProductUpdatedEvent,
)

__all__ = [
    "Event",
    "EventBus",
    "ProductCreatedEvent",
    "ProductDeletedEvent",
    "ProductsLoadedEvent",
    "ProductUpdatedEvent",
    "Subscription",
]
