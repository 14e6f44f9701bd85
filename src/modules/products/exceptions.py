"""Inventory domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class PackageNotFound(Exception):
    """The catalog package does not exist."""


class InventoryItemNotFound(Exception):
    """The inventory row does not exist or belongs to another reseller."""


class InventoryItemAlreadyExists(Exception):
    """The reseller already stocks this product; adjust it instead."""


class PriceBelowFloor(Exception):
    """The resale price is below the package's catalog price."""

    def __init__(self, message: str, floor: object = None) -> None:
        super().__init__(message)
        self.floor = floor
