"""Reseller DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, field_validator


class UpdateShippingFeeDTO(BaseModel):
    """Input for changing the reseller's flat shipping fee."""

    model_config = ConfigDict(frozen=True)

    shipping_fee: Decimal

    @field_validator("shipping_fee")
    @classmethod
    def fee_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("O frete não pode ser negativo.")
        return v.quantize(Decimal("0.01"))


class RecentSaleDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_number: str
    customer_name: str
    total_amount: Decimal


class MonthlyRevenueDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str
    total: int


class DashboardSummaryDTO(BaseModel):
    """Figures shown on the dashboard home page.

    ``low_stock_items`` counts rows whose stock status has warning severity;
    ``revenue`` and ``monthly_revenue`` only consider completed orders.
    """

    model_config = ConfigDict(frozen=True)

    total_units: int
    product_count: int
    low_stock_items: int
    customer_count: int
    order_count: int
    revenue: Decimal
    recent_sales: List[RecentSaleDTO]
    monthly_revenue: List[MonthlyRevenueDTO]
