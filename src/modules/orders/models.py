"""Order, OrderItem and OrderStatusHistory models.

Orders are created by the customer-facing ordering system; this service
only moves them through the fulfillment workflow:

- pending (``aguardando_preparacao`` / ``aguardando_aceite``) orders are
  accepted or rejected;
- accepted orders advance along the pickup or the delivery branch,
  chosen by ``delivery_kind``;
- ``retirado``, ``entregue`` and ``cancelado`` are terminal.

``shipping_fee`` is a copy of the reseller's fee at ordering time.
``OrderItem.unit_price`` is a snapshot of the price paid per unit.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    DELIVERY_TRANSITIONS,
    ORDER_NUMBER_MAX_RETRIES,
    PENDING_STATES,
    PICKUP_TRANSITIONS,
    TERMINAL_STATES,
    DeliveryKind,
    FulfillmentStatus,
    PaymentStatus,
)
from shared.domain.events import DomainEventMixin


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    ``number`` is the human-readable identifier shown to resellers and
    customers; it is generated on first save when not supplied.
    """

    number: models.CharField = models.CharField(max_length=20, unique=True)
    reseller: models.ForeignKey = models.ForeignKey(
        "resellers.Reseller",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    customer: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    shipping_fee: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    payment_method: models.CharField = models.CharField(
        max_length=30, blank=True, default=""
    )
    delivery_kind: models.CharField = models.CharField(
        max_length=20,
        default=DeliveryKind.DELIVERY,
    )
    payment_status: models.CharField = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    fulfillment_status: models.CharField = models.CharField(
        max_length=30,
        choices=FulfillmentStatus.choices,
        default=FulfillmentStatus.AWAITING_ACCEPTANCE,
    )
    estimated_delivery_date: models.DateField = models.DateField(
        null=True, blank=True
    )
    delivered_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    reseller_notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "pedidos"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["reseller", "fulfillment_status"],
                name="pedidos_reseller_status_idx",
            ),
            models.Index(fields=["-created_at"], name="pedidos_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Workflow helpers
    # ------------------------------------------------------------------

    @property
    def is_pickup(self) -> bool:
        return (self.delivery_kind or "").strip().lower() == DeliveryKind.PICKUP

    @property
    def is_pending(self) -> bool:
        return self.fulfillment_status in PENDING_STATES

    @property
    def is_terminal(self) -> bool:
        return self.fulfillment_status in TERMINAL_STATES

    @property
    def acceptance_status(self) -> str:
        """State an accepted order enters, decided by its delivery kind."""
        if self.is_pickup:
            return FulfillmentStatus.PREPARING
        return FulfillmentStatus.ACCEPTED

    @property
    def allowed_transitions(self) -> list[str]:
        """Next states offered for an accepted, non-terminal order.

        Pickup orders only use the pickup table and delivery orders only
        the delivery table; pending and terminal orders get nothing.
        """
        table = PICKUP_TRANSITIONS if self.is_pickup else DELIVERY_TRANSITIONS
        return [str(s) for s in table.get(self.fulfillment_status, ())]

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.allowed_transitions

    @property
    def customer_name(self) -> str:
        user = self.customer
        full_name = f"{user.first_name} {user.last_name}".strip()
        return full_name or user.get_username()

    @property
    def items_total(self) -> Decimal:
        return sum((item.subtotal for item in self.items.all()), Decimal("0.00"))

    # ------------------------------------------------------------------
    # Order number generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_number() -> str:
        """Generate a human-readable order number: ``PED-YYMMDD-XXXX``."""
        now = timezone.now()
        suffix = secrets.token_hex(2).upper()
        return f"PED-{now:%y%m%d}-{suffix}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.number:
            for _ in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.generate_number()
                if not Order.objects.filter(number=candidate).exists():
                    self.number = candidate
                    break
            else:
                raise RuntimeError(
                    f"Failed to generate unique order number after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.number} ({self.fulfillment_status})"


class OrderItem(BaseModel):
    """Line item: a quantity of one catalog package.

    Matched against the reseller's inventory by the package description.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    package: models.ForeignKey = models.ForeignKey(
        "products.Package",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )

    class Meta:
        db_table = "pedido_itens"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="pedido_itens_quantity_positive",
            ),
        ]

    @property
    def product(self) -> str:
        return self.package.description

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.unit_price

    def __str__(self) -> str:
        return f"{self.package} x{self.quantity}"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail of fulfillment status changes.

    ``user`` is the reseller's user who made the change; ``None`` means
    the change was made by the system.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=30,
        choices=FulfillmentStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=30,
        choices=FulfillmentStatus.choices,
    )
    user: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "pedido_status_historico"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["order", "-created_at"],
                name="psh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order} : {self.old_status} -> {self.new_status}"
