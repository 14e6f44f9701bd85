"""Customer repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for reseller customer links."""

    @abstractmethod
    def get_by_reseller_and_user(
        self, reseller_id: UUID, user_id: int
    ) -> Optional[Customer]:
        """Retrieve the link between a reseller and a platform user."""

    @abstractmethod
    def get_for_reseller(self, reseller_id: UUID, id: str) -> Optional[Customer]:
        """Retrieve a link only if it belongs to the reseller."""

    @abstractmethod
    def list_for_reseller(
        self, reseller_id: UUID, search: Optional[str] = None
    ) -> List[Customer]:
        """List the reseller's customers; ``search`` matches the name."""

    @abstractmethod
    def count_for_reseller(self, reseller_id: UUID) -> int:
        """Number of customers linked to the reseller."""
