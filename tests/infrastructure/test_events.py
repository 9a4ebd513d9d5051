from dataclasses import dataclass

from finproducts.events import ProductDeletedEvent, ProductsLoadedEvent
from finproducts.events.bus import Event, EventBus


@dataclass(kw_only=True)
class SimpleEvent(Event):
    payload: str = ""


def test_sync_subscribe_publish():
    bus = EventBus()
    received = []

    def handler(event: SimpleEvent):
        received.append(event.payload)

    bus.subscribe(SimpleEvent, handler)
    bus.publish(SimpleEvent(payload="hello"))

    assert received == ["hello"]


def test_multiple_handlers_in_subscription_order():
    bus = EventBus()
    order = []

    bus.subscribe(SimpleEvent, lambda e: order.append(1))
    bus.subscribe(SimpleEvent, lambda e: order.append(2))
    bus.publish(SimpleEvent())

    assert order == [1, 2]


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(SimpleEvent, broken)
    bus.subscribe(SimpleEvent, lambda e: received.append(e))
    bus.publish(SimpleEvent())

    assert len(received) == 1


def test_unsubscribe_and_cancel():
    bus = EventBus()
    received = []

    first = bus.subscribe(SimpleEvent, received.append)
    second = bus.subscribe(SimpleEvent, received.append)
    assert bus.subscriber_count(SimpleEvent) == 2

    bus.unsubscribe(first)
    second.cancel()
    bus.publish(SimpleEvent())

    assert received == []
    assert bus.subscriber_count(SimpleEvent) == 0


def test_events_are_dispatched_by_exact_type():
    bus = EventBus()
    loaded = []
    bus.subscribe(ProductsLoadedEvent, loaded.append)

    bus.publish(ProductDeletedEvent(product_id="p-1"))
    bus.publish(ProductsLoadedEvent(products=[], generation=4))

    assert [e.generation for e in loaded] == [4]
    assert loaded[0].event_id
