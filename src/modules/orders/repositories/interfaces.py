"""Order repository interface.

Extends ``IRepository[Order]`` with reseller-scoped look-ups, row
locking and status history tracking.  Every look-up taking a
``reseller_id`` returns ``None`` for orders of other resellers.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.orders.models import Order, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes OrderItem children and
    OrderStatusHistory records.
    """

    @abstractmethod
    def get_for_reseller(self, reseller_id: UUID, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched items, customer and history."""

    @abstractmethod
    def get_for_update(self, reseller_id: UUID, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def queryset_for_reseller(self, reseller_id: UUID) -> QuerySet[Any]:
        """Base queryset of the reseller's orders, for list filtering."""

    @abstractmethod
    def list_completed(self, reseller_id: UUID) -> List[Order]:
        """Completed orders, most recently delivered first."""

    @abstractmethod
    def count_for_reseller(self, reseller_id: UUID) -> int:
        """Number of orders received by the reseller."""

    @abstractmethod
    def add_history(
        self,
        order_id: UUID,
        new_status: str,
        old_status: Optional[str] = None,
        notes: str = "",
        user_id: Optional[int] = None,
    ) -> OrderStatusHistory:
        """Record a status change in the order's audit trail."""
