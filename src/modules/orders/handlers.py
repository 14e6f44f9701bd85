"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import OrderAccepted, OrderRejected, OrderStatusChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderAcceptedHandler(IEventHandler[OrderAccepted]):
    def handle(self, event: OrderAccepted) -> None:
        logger.info(
            "order.event.accepted",
            order_id=str(event.aggregate_id),
            reseller_id=event.reseller_id,
            new_status=event.new_status,
            estimated_delivery_date=event.estimated_delivery_date,
        )


class OrderRejectedHandler(IEventHandler[OrderRejected]):
    def handle(self, event: OrderRejected) -> None:
        logger.info(
            "order.event.rejected",
            order_id=str(event.aggregate_id),
            reseller_id=event.reseller_id,
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "order.event.status_changed",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


order_accepted_handler = OrderAcceptedHandler()
order_rejected_handler = OrderRejectedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
