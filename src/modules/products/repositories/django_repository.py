"""Django ORM implementation of the catalog and inventory repositories.

Methods return ``None`` instead of raising for missing rows; the Service
Layer decides how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q

from modules.products.models import InventoryItem, Package
from modules.products.repositories.interfaces import (
    IInventoryRepository,
    IPackageRepository,
)

logger = structlog.get_logger(__name__)


class PackageDjangoRepository(IPackageRepository):
    def get_by_id(self, id: str) -> Optional[Package]:
        try:
            return Package.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Package]:
        queryset = Package.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_catalog(self) -> List[Package]:
        catalog: Dict[str, Package] = {}
        for package in Package.objects.order_by("description", "created_at"):
            catalog.setdefault(package.description, package)
        return list(catalog.values())

    @transaction.atomic
    def save(self, entity: Package) -> Package:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        package = self.get_by_id(id)
        if not package:
            return False
        package.delete()
        return True


class InventoryDjangoRepository(IInventoryRepository):
    """Concrete inventory repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[InventoryItem]:
        try:
            return InventoryItem.objects.select_related("package").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_reseller(self, reseller_id: UUID, id: str) -> Optional[InventoryItem]:
        try:
            return (
                InventoryItem.objects.select_related("package")
                .filter(id=id, reseller_id=reseller_id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_by_product(
        self, reseller_id: UUID, product: str
    ) -> Optional[InventoryItem]:
        return InventoryItem.objects.filter(
            reseller_id=reseller_id, product=product
        ).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[InventoryItem]:
        queryset = InventoryItem.objects.select_related("package")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_for_reseller(
        self, reseller_id: UUID, search: Optional[str] = None
    ) -> List[InventoryItem]:
        queryset = InventoryItem.objects.select_related("package").filter(
            reseller_id=reseller_id
        )
        if search:
            queryset = queryset.filter(
                Q(product__icontains=search) | Q(status__icontains=search)
            )
        return list(queryset.order_by("product"))

    def lock_by_products(
        self, reseller_id: UUID, products: Iterable[str]
    ) -> Dict[str, InventoryItem]:
        rows = (
            InventoryItem.objects.select_for_update()
            .filter(reseller_id=reseller_id, product__in=set(products))
            .order_by("product")
        )
        return {row.product: row for row in rows}

    @transaction.atomic
    def save(self, entity: InventoryItem) -> InventoryItem:
        entity.save()
        logger.info(
            "inventory.saved",
            item_id=str(entity.id),
            quantity=entity.quantity,
            status=entity.status,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        item = self.get_by_id(id)
        if not item:
            return False
        item.delete()
        logger.info("inventory.deleted", item_id=str(id))
        return True
