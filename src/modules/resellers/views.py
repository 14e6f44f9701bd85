"""Reseller API views.

Profile, shipping fee and dashboard summary of the authenticated
reseller.  All endpoints act on the reseller resolved from the
request user; there is no way to address another reseller.
"""

from __future__ import annotations

import structlog
from django.db import DatabaseError
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.products.repositories.django_repository import (
    InventoryDjangoRepository,
)
from modules.resellers.context import ResellerContextMixin
from modules.resellers.dtos import UpdateShippingFeeDTO
from modules.resellers.repositories.django_repository import ResellerDjangoRepository
from modules.resellers.serializers import (
    DashboardSummarySerializer,
    ResellerSerializer,
    UpdateShippingFeeSerializer,
)
from modules.resellers.services import ResellerService

logger = structlog.get_logger(__name__)


class ResellerViewSet(ResellerContextMixin, GenericViewSet):
    """Endpoints under ``/api/v1/resellers/``."""

    serializer_class = ResellerSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ResellerService(
            reseller_repository=ResellerDjangoRepository(),
            inventory_repository=InventoryDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            order_repository=OrderDjangoRepository(),
        )

    @action(detail=False, methods=["get"])
    def me(self, request: Request) -> Response:
        """GET /api/v1/resellers/me/"""
        ctx = self.get_reseller_context()
        reseller = self._service.get_profile(ctx)
        return Response(ResellerSerializer(reseller).data)

    @action(detail=False, methods=["put", "patch"], url_path="me/shipping-fee")
    def shipping_fee(self, request: Request) -> Response:
        """PUT/PATCH /api/v1/resellers/me/shipping-fee/"""
        ctx = self.get_reseller_context()

        serializer = UpdateShippingFeeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = UpdateShippingFeeDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            reseller = self._service.update_shipping_fee(ctx, dto)
        except DatabaseError:
            logger.exception(
                "reseller.shipping_fee_failed", reseller_id=str(ctx.reseller_id)
            )
            return Response(
                {"detail": "Não foi possível atualizar o frete."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return Response(ResellerSerializer(reseller).data)

    @action(detail=False, methods=["get"])
    def dashboard(self, request: Request) -> Response:
        """GET /api/v1/resellers/dashboard/"""
        ctx = self.get_reseller_context()
        summary = self._service.dashboard_summary(ctx)
        return Response(DashboardSummarySerializer(summary.model_dump()).data)
