"""Inventory service layer (Use Cases).

Every operation acts on the inventory of the reseller in context; rows
of other resellers are reported as not found.

Rules enforced here:
- A package can be stocked once per reseller.
- Quantities are never negative.
- The resale price is positive and not below the package price.
- Quantity changes rewrite the stored label from the new quantity; an
  explicit label update is stored as given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.products.exceptions import (
    InventoryItemAlreadyExists,
    InventoryItemNotFound,
    PackageNotFound,
    PriceBelowFloor,
)
from modules.products.constants import StockLabel
from modules.products.models import InventoryItem
from modules.products.stock_status import label_for_quantity

if TYPE_CHECKING:
    from decimal import Decimal

    from modules.products.dtos import (
        AddInventoryItemDTO,
        AdjustStockDTO,
        UpdateInventoryItemDTO,
    )
    from modules.products.models import Package
    from modules.products.repositories.interfaces import (
        IInventoryRepository,
        IPackageRepository,
    )
    from modules.resellers.context import ResellerContext

logger = structlog.get_logger(__name__)


class InventoryService:
    """Application service for the reseller inventory.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        package_repository: IPackageRepository,
        inventory_repository: IInventoryRepository,
    ) -> None:
        self._package_repo = package_repository
        self._inventory_repo = inventory_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_product(
        self, ctx: ResellerContext, dto: AddInventoryItemDTO
    ) -> InventoryItem:
        """Stock a catalog package for the reseller.

        Raises:
            PackageNotFound: the package does not exist.
            InventoryItemAlreadyExists: the reseller already stocks it.
            PriceBelowFloor: the price is below the package price.
        """
        log = logger.bind(
            reseller_id=str(ctx.reseller_id), package_id=str(dto.package_id)
        )

        package = self._package_repo.get_by_id(str(dto.package_id))
        if not package:
            raise PackageNotFound(f"Package {dto.package_id} not found.")

        if self._inventory_repo.get_by_product(ctx.reseller_id, package.description):
            log.warning("inventory.duplicate_product", product=package.description)
            raise InventoryItemAlreadyExists(
                "Este produto já está no seu estoque. "
                "Use a opção 'Ajustar Estoque' para modificar a quantidade."
            )

        self._check_price_floor(package, dto.price)

        item = InventoryItem(
            reseller_id=ctx.reseller_id,
            package=package,
            product=package.description,
            quantity=dto.quantity,
            price=dto.price,
            status=(
                StockLabel.IN_STOCK.value
                if dto.quantity > 0
                else StockLabel.OUT_OF_STOCK.value
            ),
        )
        item = self._inventory_repo.save(item)
        log.info(
            "inventory.product_added", item_id=str(item.id), quantity=item.quantity
        )
        return item

    @transaction.atomic
    def adjust_stock(
        self, ctx: ResellerContext, item_id: str, dto: AdjustStockDTO
    ) -> InventoryItem:
        """Set a new absolute quantity and relabel the row.

        Raises:
            InventoryItemNotFound: the row does not exist for this reseller.
        """
        item = self._get_item(ctx, item_id)
        old_quantity = item.quantity

        item.quantity = dto.quantity
        item.status = label_for_quantity(dto.quantity)
        item = self._inventory_repo.save(item)

        logger.info(
            "inventory.stock_adjusted",
            reseller_id=str(ctx.reseller_id),
            item_id=str(item.id),
            old_quantity=old_quantity,
            new_quantity=item.quantity,
            status=item.status,
        )
        return item

    @transaction.atomic
    def update_item(
        self, ctx: ResellerContext, item_id: str, dto: UpdateInventoryItemDTO
    ) -> InventoryItem:
        """Change the resale price and/or the stored label.

        Raises:
            InventoryItemNotFound: the row does not exist for this reseller.
            PriceBelowFloor: the new price is below the package price.
        """
        item = self._get_item(ctx, item_id)

        if dto.price is not None:
            self._check_price_floor(item.package, dto.price)
            item.price = dto.price
        if dto.status is not None:
            item.status = dto.status

        item = self._inventory_repo.save(item)
        logger.info(
            "inventory.item_updated",
            reseller_id=str(ctx.reseller_id),
            item_id=str(item.id),
            price=str(item.price),
            status=item.status,
        )
        return item

    @transaction.atomic
    def delete_item(self, ctx: ResellerContext, item_id: str) -> None:
        """Remove a row from the reseller's inventory.

        Raises:
            InventoryItemNotFound: the row does not exist for this reseller.
        """
        item = self._get_item(ctx, item_id)
        self._inventory_repo.delete(str(item.id))
        logger.info(
            "inventory.item_deleted",
            reseller_id=str(ctx.reseller_id),
            item_id=str(item_id),
            product=item.product,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_items(
        self, ctx: ResellerContext, search: Optional[str] = None
    ) -> List[InventoryItem]:
        return self._inventory_repo.list_for_reseller(ctx.reseller_id, search)

    def get_item(self, ctx: ResellerContext, item_id: str) -> InventoryItem:
        return self._get_item(ctx, item_id)

    def list_catalog(self) -> List[Package]:
        return self._package_repo.list_catalog()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_item(self, ctx: ResellerContext, item_id: str) -> InventoryItem:
        item = self._inventory_repo.get_for_reseller(ctx.reseller_id, item_id)
        if not item:
            raise InventoryItemNotFound(f"Inventory item {item_id} not found.")
        return item

    @staticmethod
    def _check_price_floor(package: Package, price: Decimal) -> None:
        if price < package.price:
            raise PriceBelowFloor(
                f"O preço deve ser no mínimo R$ {package.price:.2f}",
                floor=package.price,
            )
