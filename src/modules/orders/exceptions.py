"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from typing import List


class OrderNotFound(Exception):
    """The order does not exist or belongs to another reseller."""


class InvalidOrderStatus(Exception):
    """The order's current fulfillment status does not allow the operation."""


class InsufficientStock(Exception):
    """One or more line items cannot be covered by the reseller's stock.

    ``products`` lists the offending product descriptions, each once, in
    line-item order.
    """

    def __init__(self, products: List[str]) -> None:
        self.products = list(products)
        super().__init__(
            "Estoque insuficiente para: " + ", ".join(self.products) + "."
        )
