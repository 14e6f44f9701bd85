"""Reseller repositories package."""

from modules.resellers.repositories.django_repository import ResellerDjangoRepository
from modules.resellers.repositories.interfaces import IResellerRepository

__all__ = ["IResellerRepository", "ResellerDjangoRepository"]
