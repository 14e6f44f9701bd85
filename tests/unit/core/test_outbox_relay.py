"""Unit tests for the outbox model and the relay task."""

from __future__ import annotations

from unittest.mock import patch
from uuid import uuid4

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.core.tasks import MAX_RELAY_ATTEMPTS, relay_outbox_events
from modules.orders.events import OrderRejected
from modules.orders.repositories.django_repository import _serialize_event_payload

pytestmark = pytest.mark.unit


def _outbox(**kwargs) -> OutboxEvent:
    event = OrderRejected(aggregate_id=uuid4(), reseller_id="r-1", reason="x")
    defaults = {
        "event_type": event.event_name,
        "aggregate_id": str(event.aggregate_id),
        "payload": _serialize_event_payload(event),
        "topic": "orders",
    }
    defaults.update(kwargs)
    return OutboxEvent.objects.create(**defaults)


def test_pending_events_are_published():
    outbox = _outbox()

    with patch("modules.core.tasks.event_bus") as bus:
        result = relay_outbox_events()

    assert result == {"published": 1, "failed": 0}
    [published] = [call.args[0] for call in bus.publish.call_args_list]
    assert isinstance(published, OrderRejected)
    assert published.reason == "x"

    outbox.refresh_from_db()
    assert outbox.status == EventStatus.PUBLISHED
    assert outbox.processed_at is not None


def test_handler_failure_marks_event_failed():
    outbox = _outbox()

    with patch("modules.core.tasks.event_bus") as bus:
        bus.publish.side_effect = RuntimeError("handler down")
        result = relay_outbox_events()

    assert result == {"published": 0, "failed": 1}
    outbox.refresh_from_db()
    assert outbox.status == EventStatus.FAILED
    assert outbox.error_message == "handler down"
    assert outbox.retry_count == 1


def test_exhausted_events_are_not_retried():
    _outbox(status=EventStatus.FAILED, retry_count=MAX_RELAY_ATTEMPTS)
    _outbox(status=EventStatus.PUBLISHED)

    with patch("modules.core.tasks.event_bus") as bus:
        result = relay_outbox_events()

    assert result == {"published": 0, "failed": 0}
    bus.publish.assert_not_called()


def test_unregistered_event_type_fails():
    outbox = _outbox(event_type="Unknown")

    result = relay_outbox_events()

    assert result["failed"] == 1
    outbox.refresh_from_db()
    assert outbox.status == EventStatus.FAILED
