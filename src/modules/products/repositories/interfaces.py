"""Catalog and inventory repository interfaces."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import InventoryItem, Package


class IPackageRepository(IRepository["Package"]):
    @abstractmethod
    def list_catalog(self) -> List[Package]:
        """One package per distinct description, ordered by description."""


class IInventoryRepository(IRepository["InventoryItem"]):
    @abstractmethod
    def get_for_reseller(self, reseller_id: UUID, id: str) -> Optional[InventoryItem]:
        """Retrieve an inventory row only if it belongs to the reseller."""

    @abstractmethod
    def get_by_product(
        self, reseller_id: UUID, product: str
    ) -> Optional[InventoryItem]:
        """Retrieve the reseller's row for a product description."""

    @abstractmethod
    def list_for_reseller(
        self, reseller_id: UUID, search: Optional[str] = None
    ) -> List[InventoryItem]:
        """List the reseller's rows; ``search`` matches product or label."""

    @abstractmethod
    def lock_by_products(
        self, reseller_id: UUID, products: Iterable[str]
    ) -> Dict[str, InventoryItem]:
        """Lock (SELECT FOR UPDATE) the reseller's rows for the given products.

        Rows are locked in product order.  Products without a row are
        absent from the result.
        """
