"""Reseller service layer.

Profile settings (shipping fee) and the dashboard summary.  The summary
only reads; figures come from the inventory, customer and order
repositories of the reseller in context.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction
from django.utils import timezone

from modules.products.stock_status import Severity, stock_status
from modules.resellers.dtos import (
    DashboardSummaryDTO,
    MonthlyRevenueDTO,
    RecentSaleDTO,
)
from modules.resellers.exceptions import ResellerNotFound

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IInventoryRepository
    from modules.resellers.context import ResellerContext
    from modules.resellers.dtos import UpdateShippingFeeDTO
    from modules.resellers.models import Reseller
    from modules.resellers.repositories.interfaces import IResellerRepository

logger = structlog.get_logger(__name__)

MONTH_LABELS = (
    "Jan",
    "Fev",
    "Mar",
    "Abr",
    "Mai",
    "Jun",
    "Jul",
    "Ago",
    "Set",
    "Out",
    "Nov",
    "Dez",
)

RECENT_SALES_LIMIT = 5


class ResellerService:
    """Application service for reseller settings and dashboard figures."""

    def __init__(
        self,
        reseller_repository: IResellerRepository,
        inventory_repository: IInventoryRepository,
        customer_repository: ICustomerRepository,
        order_repository: IOrderRepository,
    ) -> None:
        self._reseller_repo = reseller_repository
        self._inventory_repo = inventory_repository
        self._customer_repo = customer_repository
        self._order_repo = order_repository

    def get_profile(self, ctx: ResellerContext) -> Reseller:
        reseller = self._reseller_repo.get_by_id(str(ctx.reseller_id))
        if not reseller:
            raise ResellerNotFound(f"Reseller {ctx.reseller_id} not found.")
        return reseller

    @transaction.atomic
    def update_shipping_fee(
        self, ctx: ResellerContext, dto: UpdateShippingFeeDTO
    ) -> Reseller:
        """Change the flat shipping fee.  Existing orders keep their own copy."""
        reseller = self.get_profile(ctx)
        old_fee = reseller.shipping_fee
        reseller.shipping_fee = dto.shipping_fee
        self._reseller_repo.save(reseller)
        logger.info(
            "reseller.shipping_fee_updated",
            reseller_id=str(ctx.reseller_id),
            old_fee=str(old_fee),
            new_fee=str(dto.shipping_fee),
        )
        return reseller

    def dashboard_summary(self, ctx: ResellerContext) -> DashboardSummaryDTO:
        """Figures for the reseller dashboard.

        ``low_stock_items`` counts rows whose stock status has warning
        severity: a stored label containing "baixo", or, for rows with no
        stored label, a quantity between 1 and ``LOW_STOCK_THRESHOLD``.
        """
        items = self._inventory_repo.list_for_reseller(ctx.reseller_id)
        total_units = sum(item.quantity for item in items)
        low_stock = sum(
            1
            for item in items
            if stock_status(item.status, item.quantity).severity == Severity.WARNING
        )

        completed = self._order_repo.list_completed(ctx.reseller_id)
        revenue = sum((order.total_amount for order in completed), Decimal("0.00"))

        recent_sales = [
            RecentSaleDTO(
                order_number=order.number,
                customer_name=order.customer_name,
                total_amount=order.total_amount,
            )
            for order in completed[:RECENT_SALES_LIMIT]
        ]

        return DashboardSummaryDTO(
            total_units=total_units,
            product_count=len(items),
            low_stock_items=low_stock,
            customer_count=self._customer_repo.count_for_reseller(ctx.reseller_id),
            order_count=self._order_repo.count_for_reseller(ctx.reseller_id),
            revenue=revenue,
            recent_sales=recent_sales,
            monthly_revenue=self._monthly_revenue(completed),
        )

    def _monthly_revenue(self, completed: List) -> List[MonthlyRevenueDTO]:
        """Completed revenue of the current year, one bucket per month."""
        year = timezone.localdate().year
        totals = [Decimal("0.00")] * 12
        for order in completed:
            if order.delivered_at is None:
                continue
            delivered = timezone.localtime(order.delivered_at)
            if delivered.year != year:
                continue
            totals[delivered.month - 1] += order.total_amount

        return [
            MonthlyRevenueDTO(
                month=label,
                total=int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
            )
            for label, total in zip(MONTH_LABELS, totals)
        ]
