"""Customer service layer (Use Cases).

Customer links are never created from the API: the order workflow calls
``register_if_absent`` when a reseller accepts an order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple
from uuid import UUID

import structlog

from modules.customers.exceptions import CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.resellers.context import ResellerContext

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for reseller customer links.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    def register_if_absent(self, reseller_id: UUID, user: Any) -> Tuple[Customer, bool]:
        """Link ``user`` to the reseller unless already linked.

        Returns the link and whether it was created.
        """
        existing = self._repo.get_by_reseller_and_user(reseller_id, user.pk)
        if existing:
            return existing, False

        customer = Customer(
            reseller_id=reseller_id,
            user=user,
            name=Customer.full_name_of(user),
        )
        customer = self._repo.save(customer)
        logger.info(
            "customer.registered",
            reseller_id=str(reseller_id),
            customer_id=str(customer.id),
            user_id=user.pk,
        )
        return customer, True

    def list_customers(
        self, ctx: ResellerContext, search: Optional[str] = None
    ) -> List[Customer]:
        return self._repo.list_for_reseller(ctx.reseller_id, search)

    def get_customer(self, ctx: ResellerContext, id: str) -> Customer:
        """Retrieve one of the reseller's customers.

        Raises:
            CustomerNotFound: the link does not exist for this reseller.
        """
        customer = self._repo.get_for_reseller(ctx.reseller_id, id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer
