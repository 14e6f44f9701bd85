"""Order service layer (Use Cases).

Drives the reseller side of the order workflow: stock pre-check,
acceptance, rejection and fulfillment advancement.  All write operations
are atomic; the service defines the unit-of-work boundary.

Rules enforced:
- Only pending orders can be accepted or rejected.
- Acceptance decrements stock for every line item or for none of them.
- Acceptance registers the buyer as a customer of the reseller; failing
  to do so never blocks the acceptance.
- Accepted orders move only along their own branch (pickup or delivery).
- Entering ``retirado`` or ``entregue`` stamps ``delivered_at``.
- Rejection never touches inventory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional

import structlog
from django.db import DatabaseError, transaction
from django.utils import timezone

from modules.orders.constants import (
    ACCEPTED_STATE_MESSAGES,
    DEFAULT_REJECTION_REASON,
    DELIVERY_STAMP_STATES,
    FulfillmentStatus,
)
from modules.orders.dtos import OrderDecisionResult, StockCheckResult
from modules.orders.events import OrderAccepted, OrderRejected, OrderStatusChanged
from modules.orders.exceptions import (
    InsufficientStock,
    InvalidOrderStatus,
    OrderNotFound,
)
from modules.products.stock_status import label_for_quantity

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.customers.services import CustomerService
    from modules.orders.dtos import AcceptOrderDTO, AdvanceStatusDTO, RejectOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.models import InventoryItem
    from modules.products.repositories.interfaces import IInventoryRepository
    from modules.resellers.context import ResellerContext

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for the reseller order workflow.

    Receives repositories and the customer service via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        inventory_repository: IInventoryRepository,
        customer_service: CustomerService,
    ) -> None:
        self._order_repo = order_repository
        self._inventory_repo = inventory_repository
        self._customer_service = customer_service

    # ------------------------------------------------------------------
    # Stock check
    # ------------------------------------------------------------------

    def check_stock(self, ctx: ResellerContext, order_id: str) -> StockCheckResult:
        """Report the line items the reseller's stock cannot cover.

        Read-only and safe to repeat.  A product is listed once, in
        line-item order, when the reseller has no row for it or holds
        fewer units than the order requests for it.

        Raises:
            OrderNotFound: the order does not exist for this reseller.
        """
        order = self.get_order(ctx, order_id)
        inventory: Dict[str, Optional[InventoryItem]] = {}
        for item in order.items.all():
            if item.product not in inventory:
                inventory[item.product] = self._inventory_repo.get_by_product(
                    ctx.reseller_id, item.product
                )

        return StockCheckResult(
            insufficient_products=_shortfalls(
                order, {k: v.quantity for k, v in inventory.items() if v}
            )
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def accept_order(
        self, ctx: ResellerContext, order_id: str, dto: AcceptOrderDTO
    ) -> OrderDecisionResult:
        """Accept a pending order and reserve its stock.

        Steps (one transaction):
        1. Lock the order row; it must be pending.
        2. Lock the matching inventory rows (product order) and re-check
           stock; any shortfall aborts before anything is written.
        3. Register the buyer as a customer (savepoint, failure logged).
        4. Decrement each row and relabel it from its new quantity.
        5. Move to ``preparando_pedido`` (pickup) or ``aceito`` (delivery),
           store the estimated date, record history and ``OrderAccepted``.

        Raises:
            OrderNotFound: the order does not exist for this reseller.
            InvalidOrderStatus: the order is no longer pending.
            InsufficientStock: some products cannot be covered.
        """
        log = logger.bind(reseller_id=str(ctx.reseller_id), order_id=str(order_id))

        order = self._lock_pending_order(ctx, order_id, log)
        items = list(order.items.all())

        # 2. Lock inventory and re-check under the lock
        rows = self._inventory_repo.lock_by_products(
            ctx.reseller_id, sorted({item.product for item in items})
        )
        shortfalls = _shortfalls(order, {p: row.quantity for p, row in rows.items()})
        if shortfalls:
            log.warning("order.insufficient_stock", products=shortfalls)
            raise InsufficientStock(shortfalls)

        # 3. Customer link
        self._register_customer(ctx, order, log)

        # 4. Decrement stock
        for item in items:
            row = rows[item.product]
            row.quantity -= item.quantity
            row.status = label_for_quantity(row.quantity)
            self._inventory_repo.save(row)
            log.info(
                "order.stock_reserved",
                product=item.product,
                quantity=item.quantity,
                remaining=row.quantity,
                status=row.status,
            )

        # 5. Transition
        old_status = order.fulfillment_status
        new_status = order.acceptance_status
        order.fulfillment_status = new_status
        order.estimated_delivery_date = dto.estimated_date
        order.add_domain_event(
            OrderAccepted(
                aggregate_id=order.id,
                reseller_id=str(ctx.reseller_id),
                new_status=new_status,
                estimated_delivery_date=dto.estimated_date.isoformat(),
            )
        )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            new_status=new_status,
            old_status=old_status,
            notes="Pedido aceito",
            user_id=ctx.user_id,
        )

        log.info("order.accepted", new_status=new_status)
        message = (
            f"Pedido {order.number} foi aceito e está "
            f"{ACCEPTED_STATE_MESSAGES[new_status]}."
        )
        return OrderDecisionResult(
            order=self.get_order(ctx, order_id), message=message
        )

    @transaction.atomic
    def reject_order(
        self, ctx: ResellerContext, order_id: str, dto: RejectOrderDTO
    ) -> OrderDecisionResult:
        """Refuse a pending order.  Inventory is never touched.

        Raises:
            OrderNotFound: the order does not exist for this reseller.
            InvalidOrderStatus: the order is no longer pending.
        """
        log = logger.bind(reseller_id=str(ctx.reseller_id), order_id=str(order_id))

        order = self._lock_pending_order(ctx, order_id, log)
        reason = dto.reason or DEFAULT_REJECTION_REASON

        old_status = order.fulfillment_status
        order.fulfillment_status = FulfillmentStatus.CANCELLED
        order.reseller_notes = reason
        order.add_domain_event(
            OrderRejected(
                aggregate_id=order.id,
                reseller_id=str(ctx.reseller_id),
                reason=reason,
            )
        )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            new_status=FulfillmentStatus.CANCELLED,
            old_status=old_status,
            notes=reason,
            user_id=ctx.user_id,
        )

        log.info("order.rejected")
        return OrderDecisionResult(
            order=self.get_order(ctx, order_id),
            message=f"Pedido {order.number} foi recusado.",
        )

    @transaction.atomic
    def advance_status(
        self, ctx: ResellerContext, order_id: str, dto: AdvanceStatusDTO
    ) -> OrderDecisionResult:
        """Move an accepted order to one of its offered next states.

        Raises:
            OrderNotFound: the order does not exist for this reseller.
            InvalidOrderStatus: the target is not offered from the current
                state (pending, terminal, or other branch).
        """
        order = self._order_repo.get_for_update(ctx.reseller_id, order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        log = logger.bind(
            reseller_id=str(ctx.reseller_id),
            order_id=str(order_id),
            current_status=order.fulfillment_status,
            new_status=dto.new_status,
        )

        if not order.can_transition_to(dto.new_status):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Não é possível alterar o pedido de "
                f"{order.fulfillment_status} para {dto.new_status}."
            )

        old_status = order.fulfillment_status
        order.fulfillment_status = dto.new_status
        if dto.new_status in DELIVERY_STAMP_STATES:
            order.delivered_at = timezone.now()
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                reseller_id=str(ctx.reseller_id),
                old_status=old_status,
                new_status=dto.new_status,
            )
        )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            new_status=dto.new_status,
            old_status=old_status,
            user_id=ctx.user_id,
        )

        log.info("order.status_updated")
        return OrderDecisionResult(
            order=self.get_order(ctx, order_id),
            message="O status do pedido foi atualizado com sucesso.",
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, ctx: ResellerContext, order_id: str) -> Order:
        """Retrieve one of the reseller's orders.

        Raises:
            OrderNotFound: the order does not exist for this reseller.
        """
        order = self._order_repo.get_for_reseller(ctx.reseller_id, order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, ctx: ResellerContext) -> QuerySet:
        """Base queryset of the reseller's orders; views apply filters."""
        return self._order_repo.queryset_for_reseller(ctx.reseller_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lock_pending_order(self, ctx: ResellerContext, order_id: str, log) -> Order:
        order = self._order_repo.get_for_update(ctx.reseller_id, order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        if not order.is_pending:
            log.warning("order.not_pending", current_status=order.fulfillment_status)
            raise InvalidOrderStatus(
                f"O pedido {order.number} não está aguardando aceite "
                f"(status atual: {order.fulfillment_status})."
            )
        return order

    def _register_customer(self, ctx: ResellerContext, order: Order, log) -> None:
        try:
            with transaction.atomic():
                _, created = self._customer_service.register_if_absent(
                    ctx.reseller_id, order.customer
                )
        except DatabaseError:
            log.exception("order.customer_link_failed", user_id=order.customer_id)
            return
        if created:
            log.info("order.customer_linked", user_id=order.customer_id)


def _shortfalls(order: Order, available: Dict[str, int]) -> List[str]:
    """Products whose stock is below what a line item asks for.

    Requests for the same product are summed, so two lines of 3 units
    need 6 units in stock.
    """
    requested: Dict[str, int] = {}
    for item in order.items.all():
        requested[item.product] = requested.get(item.product, 0) + item.quantity

    return [
        product
        for product, quantity in requested.items()
        if available.get(product) is None or available[product] < quantity
    ]
