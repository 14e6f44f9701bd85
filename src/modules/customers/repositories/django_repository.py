"""Django ORM implementation of the Customer repository.

Methods return ``None`` instead of raising for missing rows; the Service
Layer decides how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Customer]:
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_reseller_and_user(
        self, reseller_id: UUID, user_id: int
    ) -> Optional[Customer]:
        return Customer.objects.filter(reseller_id=reseller_id, user_id=user_id).first()

    def get_for_reseller(self, reseller_id: UUID, id: str) -> Optional[Customer]:
        try:
            return Customer.objects.filter(id=id, reseller_id=reseller_id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_for_reseller(
        self, reseller_id: UUID, search: Optional[str] = None
    ) -> List[Customer]:
        queryset = Customer.objects.filter(reseller_id=reseller_id)
        if search:
            queryset = queryset.filter(name__icontains=search)
        return list(queryset.order_by("name"))

    def count_for_reseller(self, reseller_id: UUID) -> int:
        return Customer.objects.filter(reseller_id=reseller_id).count()

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        entity.save()
        logger.info(
            "customer.saved",
            customer_id=str(entity.id),
            reseller_id=str(entity.reseller_id),
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        customer = self.get_by_id(id)
        if not customer:
            return False
        customer.delete()
        logger.info("customer.deleted", customer_id=str(id))
        return True
