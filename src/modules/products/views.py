"""Inventory API views.

Exposes ``InventoryService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
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

from modules.core.pagination import StandardResultsSetPagination
from modules.products.dtos import (
    AddInventoryItemDTO,
    AdjustStockDTO,
    UpdateInventoryItemDTO,
)
from modules.products.exceptions import (
    InventoryItemAlreadyExists,
    InventoryItemNotFound,
    PackageNotFound,
    PriceBelowFloor,
)
from modules.products.repositories.django_repository import (
    InventoryDjangoRepository,
    PackageDjangoRepository,
)
from modules.products.serializers import (
    AddInventoryItemSerializer,
    AdjustStockSerializer,
    InventoryItemSerializer,
    PackageSerializer,
    UpdateInventoryItemSerializer,
)
from modules.products.services import InventoryService
from modules.resellers.context import ResellerContextMixin

logger = structlog.get_logger(__name__)

ITEM_NOT_FOUND = "Produto não encontrado no estoque."


def _item_not_found() -> Response:
    return Response({"detail": ITEM_NOT_FOUND}, status=status.HTTP_404_NOT_FOUND)


def _build_service() -> InventoryService:
    return InventoryService(
        package_repository=PackageDjangoRepository(),
        inventory_repository=InventoryDjangoRepository(),
    )


class PackageViewSet(GenericViewSet):
    """GET /api/v1/packages/ : catalog the reseller can stock from."""

    serializer_class = PackageSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def list(self, request: Request) -> Response:
        packages = self._service.list_catalog()
        return Response(PackageSerializer(packages, many=True).data)


class InventoryViewSet(ResellerContextMixin, GenericViewSet):
    """Inventory of the authenticated reseller (``/api/v1/inventory/``)."""

    serializer_class = InventoryItemSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/inventory/?search=

        ``search`` matches the product description or the stored label.
        """
        ctx = self.get_reseller_context()
        items = self._service.list_items(ctx, request.query_params.get("search"))

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(items, request)
        serializer = InventoryItemSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/inventory/{pk}/"""
        ctx = self.get_reseller_context()
        try:
            item = self._service.get_item(ctx, str(pk))
        except InventoryItemNotFound:
            return _item_not_found()
        return Response(InventoryItemSerializer(item).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/inventory/"""
        ctx = self.get_reseller_context()

        serializer = AddInventoryItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = AddInventoryItemDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            item = self._service.add_product(ctx, dto)
        except PackageNotFound:
            return Response(
                {"detail": "Pacote não encontrado."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except InventoryItemAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        except PriceBelowFloor as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError:
            logger.exception("inventory.add_failed", reseller_id=str(ctx.reseller_id))
            return Response(
                {"detail": "Não foi possível adicionar o produto."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return Response(
            InventoryItemSerializer(item).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/inventory/{pk}/ : price and/or label override."""
        ctx = self.get_reseller_context()

        serializer = UpdateInventoryItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = UpdateInventoryItemDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            item = self._service.update_item(ctx, str(pk), dto)
        except InventoryItemNotFound:
            return _item_not_found()
        except PriceBelowFloor as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError:
            logger.exception("inventory.update_failed", item_id=str(pk))
            return Response(
                {"detail": "Não foi possível atualizar o produto."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return Response(InventoryItemSerializer(item).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/inventory/{pk}/"""
        ctx = self.get_reseller_context()
        try:
            self._service.delete_item(ctx, str(pk))
        except InventoryItemNotFound:
            return _item_not_found()
        except DatabaseError:
            logger.exception("inventory.delete_failed", item_id=str(pk))
            return Response(
                {"detail": "Não foi possível remover o produto."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Adjust (dedicated action)
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def adjust(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/inventory/{pk}/adjust/ : set a new absolute quantity."""
        ctx = self.get_reseller_context()

        serializer = AdjustStockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = AdjustStockDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            item = self._service.adjust_stock(ctx, str(pk), dto)
        except InventoryItemNotFound:
            return _item_not_found()
        except DatabaseError:
            logger.exception("inventory.adjust_failed", item_id=str(pk))
            return Response(
                {"detail": "Não foi possível ajustar o estoque."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return Response(InventoryItemSerializer(item).data)
