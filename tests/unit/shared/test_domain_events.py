"""Unit tests for domain event primitives and the in-memory bus."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.events import OrderAccepted, OrderRejected
from modules.orders.models import Order
from modules.orders.repositories.django_repository import _serialize_event_payload
from shared.domain.events import event_from_payload
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


class RecordingHandler:
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


def test_event_name_is_class_name():
    event = OrderRejected(aggregate_id=uuid4(), reason="sem estoque")
    assert event.event_name == "OrderRejected"


def test_event_rebuilt_from_outbox_payload():
    original = OrderAccepted(
        aggregate_id=uuid4(),
        reseller_id=str(uuid4()),
        new_status="aceito",
        estimated_delivery_date="2030-01-15",
    )
    payload = _serialize_event_payload(original)

    rebuilt = event_from_payload("OrderAccepted", payload)

    assert rebuilt == original


def test_unknown_event_type_raises():
    with pytest.raises(KeyError):
        event_from_payload("NoSuchEvent", {})


def test_bus_dispatches_by_event_class():
    bus = InMemoryEventBus()
    handler = RecordingHandler()
    bus.subscribe(OrderAccepted, handler)
    bus.subscribe(OrderAccepted, handler)

    accepted = OrderAccepted(aggregate_id=uuid4())
    bus.publish(accepted)
    bus.publish(OrderRejected(aggregate_id=uuid4()))

    assert handler.events == [accepted]
    assert bus.handlers_for(OrderAccepted) == [handler]


def test_mixin_collects_and_clears_events():
    order = Order()
    event = OrderRejected(aggregate_id=order.id)
    order.add_domain_event(event)
    assert order.domain_events == [event]

    order.clear_domain_events()
    assert order.domain_events == []
