"""Inventory DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``AddInventoryItemDTO``: stock a catalog package.
- ``AdjustStockDTO``: set a new absolute quantity.
- ``UpdateInventoryItemDTO``: change the resale price and/or the label.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


def _positive_price(v: Decimal) -> Decimal:
    if v <= 0:
        raise ValueError("Preço deve ser um número válido e maior que 0.")
    return v


def _non_negative_quantity(v: int) -> int:
    if v < 0:
        raise ValueError("Quantidade deve ser um número válido e maior ou igual a 0.")
    return v


class AddInventoryItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    package_id: UUID
    quantity: int
    price: Decimal

    @field_validator("quantity")
    @classmethod
    def quantity_must_not_be_negative(cls, v: int) -> int:
        return _non_negative_quantity(v)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        return _positive_price(v)


class AdjustStockDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_not_be_negative(cls, v: int) -> int:
        return _non_negative_quantity(v)


class UpdateInventoryItemDTO(BaseModel):
    """Partial update; only supplied fields change.

    ``status`` is an explicit label override and is stored as given.
    """

    model_config = ConfigDict(frozen=True)

    price: Optional[Decimal] = None
    status: Optional[str] = None

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is None:
            return v
        return _positive_price(v)

    @field_validator("status")
    @classmethod
    def strip_status(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip()
