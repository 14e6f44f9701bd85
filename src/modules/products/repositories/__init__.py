"""Catalog and inventory repositories package."""

from modules.products.repositories.django_repository import (
    InventoryDjangoRepository,
    PackageDjangoRepository,
)
from modules.products.repositories.interfaces import (
    IInventoryRepository,
    IPackageRepository,
)

__all__ = [
    "IInventoryRepository",
    "IPackageRepository",
    "InventoryDjangoRepository",
    "PackageDjangoRepository",
]
