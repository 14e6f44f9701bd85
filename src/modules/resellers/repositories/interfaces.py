"""Reseller repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.resellers.models import Reseller


class IResellerRepository(IRepository["Reseller"]):
    """Repository contract for the Reseller aggregate."""

    @abstractmethod
    def get_by_user_id(self, user_id: int) -> Optional[Reseller]:
        """Retrieve the reseller bound to a platform user."""
