"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; data-layer failures are logged in full and
answered with a generic message.
"""

from __future__ import annotations

import structlog
from django.db import DatabaseError
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.orders.dtos import AcceptOrderDTO, AdvanceStatusDTO, RejectOrderDTO
from modules.orders.exceptions import (
    InsufficientStock,
    InvalidOrderStatus,
    OrderNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    AcceptOrderSerializer,
    AdvanceStatusSerializer,
    OrderDecisionSerializer,
    OrderListSerializer,
    OrderSerializer,
    RejectOrderSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import InventoryDjangoRepository
from modules.resellers.context import ResellerContextMixin

logger = structlog.get_logger(__name__)

ORDER_NOT_FOUND = "Pedido não encontrado."


def _order_not_found() -> Response:
    return Response({"detail": ORDER_NOT_FOUND}, status=status.HTTP_404_NOT_FOUND)


def _unavailable(message: str) -> Response:
    return Response({"detail": message}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


class OrderViewSet(ResellerContextMixin, GenericViewSet):
    """ViewSet for the reseller's orders.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``; orders are never created,
    edited or deleted through this API.
    """

    queryset = Order.objects.none()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            inventory_repository=InventoryDjangoRepository(),
            customer_service=CustomerService(repository=CustomerDjangoRepository()),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Define escopos de throttling por ação."""
        throttle_scope: str | None
        if self.action in {"accept", "reject", "advance"}:
            throttle_scope = "order_decision"
        elif self.action in {"list", "retrieve", "stock_check"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Order.objects.none()
        return self._service.list_orders(self.get_reseller_context())

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (stage, status, delivery kind, date range, search) is
        handled by ``OrderFilter``.  Results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        ctx = self.get_reseller_context()
        try:
            order = self._service.get_order(ctx, str(pk))
        except OrderNotFound:
            return _order_not_found()
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Stock check
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get"], url_path="stock-check")
    def stock_check(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/stock-check/"""
        ctx = self.get_reseller_context()
        try:
            result = self._service.check_stock(ctx, str(pk))
        except OrderNotFound:
            return _order_not_found()
        return Response(result.model_dump())

    # ------------------------------------------------------------------
    # Accept / Reject
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def accept(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/accept/

        Reserves stock and moves the order to its first fulfillment state.
        """
        ctx = self.get_reseller_context()

        serializer = AcceptOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = AcceptOrderDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response(
                {"detail": exc.errors()[0]["msg"]},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = self._service.accept_order(ctx, str(pk), dto)
        except OrderNotFound:
            return _order_not_found()
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except InsufficientStock as exc:
            return Response(
                {
                    "detail": "Não é possível aceitar o pedido devido à falta "
                    "de estoque.",
                    "insufficient_products": exc.products,
                },
                status=status.HTTP_409_CONFLICT,
            )
        except DatabaseError:
            logger.exception("order.accept_failed", order_id=str(pk))
            return _unavailable("Não foi possível aceitar o pedido.")

        return Response(OrderDecisionSerializer(result).data)

    @action(detail=True, methods=["post"])
    def reject(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/reject/"""
        ctx = self.get_reseller_context()

        serializer = RejectOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = RejectOrderDTO(**serializer.validated_data)

        try:
            result = self._service.reject_order(ctx, str(pk), dto)
        except OrderNotFound:
            return _order_not_found()
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError:
            logger.exception("order.reject_failed", order_id=str(pk))
            return _unavailable("Não foi possível recusar o pedido.")

        return Response(OrderDecisionSerializer(result).data)

    # ------------------------------------------------------------------
    # Advance
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def advance(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/advance/

        ``status`` must be one of the order's ``allowed_transitions``.
        """
        ctx = self.get_reseller_context()

        serializer = AdvanceStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = AdvanceStatusDTO(new_status=serializer.validated_data["status"])
        except PydanticValidationError as exc:
            return Response(
                {"detail": exc.errors()[0]["msg"]},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = self._service.advance_status(ctx, str(pk), dto)
        except OrderNotFound:
            return _order_not_found()
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError:
            logger.exception("order.advance_failed", order_id=str(pk))
            return _unavailable("Não foi possível atualizar o status do pedido.")

        return Response(OrderDecisionSerializer(result).data)
