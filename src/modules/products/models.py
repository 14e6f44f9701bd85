"""Package catalog and per-reseller inventory models.

- ``Package`` (pacotes): catalog entry; its ``price`` is the floor any
  reseller may charge for it.
- ``InventoryItem`` (revendedor_estoque): a reseller's stock of one
  package.  ``product`` repeats the package description and is the key
  used to match order line items against stock.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.products.constants import DEFAULT_PACKAGE_COLOR


class Package(BaseModel):
    description = models.CharField(max_length=255)
    color = models.CharField(max_length=20, blank=True, default=DEFAULT_PACKAGE_COLOR)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        db_table = "pacotes"
        ordering = ["description"]
        indexes = [
            models.Index(fields=["description"], name="pacotes_description_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="pacotes_price_positive",
            ),
        ]

    def __str__(self) -> str:
        return self.description


class InventoryItem(BaseModel):
    """Stock of one package held by one reseller.

    ``status`` may be blank, in which case the displayed label is derived
    from ``quantity``.  A non-blank label is shown as stored.
    """

    reseller = models.ForeignKey(
        "resellers.Reseller",
        on_delete=models.CASCADE,
        related_name="inventory_items",
    )
    package = models.ForeignKey(
        "products.Package",
        on_delete=models.PROTECT,
        related_name="inventory_items",
    )
    product = models.CharField(max_length=255)
    quantity = models.IntegerField(default=0)
    status = models.CharField(max_length=50, blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        db_table = "revendedor_estoque"
        ordering = ["product"]
        constraints = [
            models.UniqueConstraint(
                fields=["reseller", "product"],
                name="revendedor_estoque_reseller_product_uniq",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="revendedor_estoque_price_positive",
            ),
        ]

    @property
    def color(self) -> str:
        return self.package.color or DEFAULT_PACKAGE_COLOR

    def __str__(self) -> str:
        return f"{self.product} x{self.quantity}"
