"""Django ORM implementation of the Reseller repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.resellers.models import Reseller
from modules.resellers.repositories.interfaces import IResellerRepository

logger = structlog.get_logger(__name__)


class ResellerDjangoRepository(IResellerRepository):
    """Concrete Reseller repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Reseller]:
        try:
            return Reseller.objects.select_related("user").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_user_id(self, user_id: int) -> Optional[Reseller]:
        return Reseller.objects.select_related("user").filter(user_id=user_id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Reseller]:
        queryset = Reseller.objects.select_related("user")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Reseller) -> Reseller:
        entity.save()
        logger.info("reseller.saved", reseller_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        reseller = self.get_by_id(id)
        if not reseller:
            return False
        reseller.delete()
        logger.info("reseller.deleted", reseller_id=str(id))
        return True
