"""Domain events for the Orders bounded context.

Extra fields carry defaults so events can be rebuilt from outbox payloads.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderAccepted(DomainEvent):
    """Raised when a reseller accepts a pending order."""

    reseller_id: str = ""
    new_status: str = ""
    estimated_delivery_date: str = ""


@dataclass(frozen=True)
class OrderRejected(DomainEvent):
    """Raised when a reseller refuses a pending order."""

    reseller_id: str = ""
    reason: str = ""


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised when an accepted order advances along its fulfillment branch."""

    reseller_id: str = ""
    old_status: str = ""
    new_status: str = ""
