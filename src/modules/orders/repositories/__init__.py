"""Order repositories package (Django ORM + outbox)."""

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.repositories.interfaces import IOrderRepository

__all__ = ["IOrderRepository", "OrderDjangoRepository"]
