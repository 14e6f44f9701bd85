"""Reseller (revendedor) model.

A reseller is the account operating the dashboard: it owns an inventory,
receives orders and keeps its own customer list.  Every reseller is bound
to exactly one platform user.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Reseller(BaseModel):
    """Reseller account linked 1:1 to a platform user.

    ``shipping_fee`` is the flat delivery fee the reseller charges; it is
    copied onto each order by the ordering system, so changing it never
    alters existing orders.
    """

    user: models.OneToOneField = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reseller",
    )
    store_name: models.CharField = models.CharField(
        max_length=255, blank=True, default=""
    )
    shipping_fee: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        db_table = "revendedores"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(shipping_fee__gte=0),
                name="revendedores_shipping_fee_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return self.store_name or self.user.get_username()
