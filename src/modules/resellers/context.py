"""Explicit reseller context for every dashboard workflow.

Each use case receives a ``ResellerContext`` instead of looking up the
"current reseller" on its own.  Views build it from the authenticated
user through ``resolve_reseller_context``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

import structlog
from rest_framework import status
from rest_framework.response import Response

from modules.resellers.exceptions import ResellerNotFound

if TYPE_CHECKING:
    from modules.resellers.models import Reseller
    from modules.resellers.repositories.interfaces import IResellerRepository

logger = structlog.get_logger(__name__)

RESELLER_NOT_FOUND_MESSAGE = "Usuário não encontrado. Faça login novamente."


@dataclass(frozen=True)
class ResellerContext:
    """Identity of the reseller operating the dashboard."""

    user_id: int
    reseller_id: UUID
    reseller: Reseller


def resolve_reseller_context(
    user: Any,
    repository: Optional[IResellerRepository] = None,
) -> ResellerContext:
    """Map an authenticated user to its reseller record.

    Raises:
        ResellerNotFound: the user is anonymous or has no reseller record.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        raise ResellerNotFound("No authenticated user.")

    if repository is None:
        from modules.resellers.repositories.django_repository import (
            ResellerDjangoRepository,
        )

        repository = ResellerDjangoRepository()

    reseller = repository.get_by_user_id(user.pk)
    if not reseller:
        logger.warning("reseller.context_missing", user_id=user.pk)
        raise ResellerNotFound(f"User {user.pk} has no reseller record.")

    return ResellerContext(user_id=user.pk, reseller_id=reseller.id, reseller=reseller)


class ResellerContextMixin:
    """ViewSet mixin resolving the reseller context for the request user.

    A missing reseller record is answered with 403 before any service
    call is made.
    """

    def get_reseller_context(self) -> ResellerContext:
        return resolve_reseller_context(self.request.user)  # type: ignore[attr-defined]

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, ResellerNotFound):
            return Response(
                {"detail": RESELLER_NOT_FOUND_MESSAGE},
                status=status.HTTP_403_FORBIDDEN,
            )
        return super().handle_exception(exc)  # type: ignore[misc]
