"""Catalog and inventory URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.products.views import InventoryViewSet, PackageViewSet

router = DefaultRouter(trailing_slash=True)
router.register("packages", PackageViewSet, basename="package")
router.register("inventory", InventoryViewSet, basename="inventory")

urlpatterns = router.urls
