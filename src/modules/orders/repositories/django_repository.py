"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
``save`` writes pending domain events to the outbox in the same
transaction as the order row.

Concurrency control on workflow changes uses ``select_for_update()``
on the order row.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, QuerySet

from modules.core.models import OutboxEvent
from modules.orders.constants import COMPLETED_STATES
from modules.orders.models import Order, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

OUTBOX_TOPIC = "orders"


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _base_queryset(self) -> QuerySet[Order]:
        return Order.objects.select_related("customer", "reseller").prefetch_related(
            "items__package", "status_history"
        )

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._base_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_reseller(self, reseller_id: UUID, id: str) -> Optional[Order]:
        try:
            return self._base_queryset().filter(id=id, reseller_id=reseller_id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, reseller_id: UUID, id: str) -> Optional[Order]:
        """Lock the order row; items (with package) are prefetched.

        Must be called inside a transaction.
        """
        try:
            return (
                Order.objects.select_for_update(of=("self",))
                .select_related("customer")
                .prefetch_related("items__package")
                .filter(id=id, reseller_id=reseller_id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        queryset = self._base_queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def queryset_for_reseller(self, reseller_id: UUID) -> QuerySet[Order]:
        return (
            Order.objects.select_related("customer")
            .prefetch_related("items__package")
            .filter(reseller_id=reseller_id)
        )

    def list_completed(self, reseller_id: UUID) -> List[Order]:
        queryset = (
            Order.objects.select_related("customer")
            .filter(reseller_id=reseller_id, fulfillment_status__in=COMPLETED_STATES)
            .order_by(F("delivered_at").desc(nulls_last=True), "-created_at")
        )
        return list(queryset)

    def count_for_reseller(self, reseller_id: UUID) -> int:
        return Order.objects.filter(reseller_id=reseller_id).count()

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist the order and its pending domain events (outbox)."""
        entity.save()

        events = entity.domain_events
        for event in events:
            OutboxEvent.objects.create(
                event_type=event.event_name,
                aggregate_id=str(event.aggregate_id),
                payload=_serialize_event_payload(event),
                topic=OUTBOX_TOPIC,
            )
        entity.clear_domain_events()

        logger.info("order.saved", order_id=str(entity.id), event_count=len(events))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        order = self.get_by_id(id)
        if not order:
            return False
        order.delete()
        logger.info("order.deleted", order_id=str(id))
        return True

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_history(
        self,
        order_id: UUID,
        new_status: str,
        old_status: Optional[str] = None,
        notes: str = "",
        user_id: Optional[int] = None,
    ) -> OrderStatusHistory:
        history = OrderStatusHistory.objects.create(
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            notes=notes,
            user_id=user_id,
        )
        logger.info(
            "order.history_added",
            order_id=str(order_id),
            old_status=old_status,
            new_status=new_status,
        )
        return history


def _serialize_event_payload(event: Any) -> Dict[str, Any]:
    data = asdict(event)
    normalized = _normalize_for_json(data)
    return json.loads(json.dumps(normalized))


def _normalize_for_json(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, list):
        return [_normalize_for_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize_for_json(val) for key, val in value.items()}
    return value
