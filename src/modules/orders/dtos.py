"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``AcceptOrderDTO``: estimated delivery date for an acceptance.
- ``RejectOrderDTO``: optional refusal reason.
- ``AdvanceStatusDTO``: target fulfillment status.
- ``StockCheckResult``: outcome of the stock pre-check.
- ``OrderDecisionResult``: updated order plus the operator message.
"""

from __future__ import annotations

from datetime import date
from typing import Any, List

from django.utils import timezone
from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from modules.orders.constants import FulfillmentStatus

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class AcceptOrderDTO(BaseModel):
    """Acceptance input.

    ``estimated_date`` may not be in the past (local calendar date).
    """

    model_config = ConfigDict(frozen=True)

    estimated_date: date

    @field_validator("estimated_date")
    @classmethod
    def date_must_not_be_in_the_past(cls, v: date) -> date:
        if v < timezone.localdate():
            raise ValueError("A data estimada não pode ser anterior a hoje.")
        return v


class RejectOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: str = ""

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: str) -> str:
        return (v or "").strip()


class AdvanceStatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    new_status: str

    @field_validator("new_status")
    @classmethod
    def status_must_be_known(cls, v: str) -> str:
        value = (v or "").strip().lower()
        if value not in FulfillmentStatus.values:
            raise ValueError(f"Status desconhecido: {v}.")
        return value


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class StockCheckResult(BaseModel):
    """Product descriptions the reseller cannot cover, in line-item order."""

    model_config = ConfigDict(frozen=True)

    insufficient_products: List[str]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_fulfillable(self) -> bool:
        return not self.insufficient_products


class OrderDecisionResult(BaseModel):
    """Result of accept/reject/advance: the refreshed order and a message."""

    model_config = ConfigDict(frozen=True)

    order: Any
    message: str
