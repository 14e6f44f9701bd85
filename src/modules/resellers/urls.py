"""Reseller URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.resellers.views import ResellerViewSet

router = DefaultRouter(trailing_slash=True)
router.register("resellers", ResellerViewSet, basename="reseller")

urlpatterns = router.urls
