"""Customer API views.

Read-only: customers of the authenticated reseller.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.customers.exceptions import CustomerNotFound
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService
from modules.resellers.context import ResellerContextMixin


class CustomerViewSet(ResellerContextMixin, GenericViewSet):
    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/?search="""
        ctx = self.get_reseller_context()
        customers = self._service.list_customers(
            ctx, request.query_params.get("search")
        )

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(customers, request)
        serializer = CustomerSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        ctx = self.get_reseller_context()
        try:
            customer = self._service.get_customer(ctx, str(pk))
        except CustomerNotFound:
            return Response(
                {"detail": "Cliente não encontrado."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(CustomerSerializer(customer).data)
