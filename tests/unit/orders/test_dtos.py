"""Unit tests for Order DTOs (Pydantic validation)."""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone
from pydantic import ValidationError

from modules.orders.dtos import (
    AcceptOrderDTO,
    AdvanceStatusDTO,
    RejectOrderDTO,
    StockCheckResult,
)

pytestmark = pytest.mark.unit


class TestAcceptOrderDTO:
    def test_today_is_accepted(self):
        today = timezone.localdate()
        assert AcceptOrderDTO(estimated_date=today).estimated_date == today

    def test_past_date_is_rejected(self):
        yesterday = timezone.localdate() - timedelta(days=1)
        with pytest.raises(ValidationError, match="anterior a hoje"):
            AcceptOrderDTO(estimated_date=yesterday)

    def test_iso_string_is_parsed(self):
        future = timezone.localdate() + timedelta(days=3)
        dto = AcceptOrderDTO(estimated_date=future.isoformat())
        assert dto.estimated_date == future

    def test_is_frozen(self):
        dto = AcceptOrderDTO(estimated_date=timezone.localdate())
        with pytest.raises(ValidationError):
            dto.estimated_date = timezone.localdate() + timedelta(days=1)


class TestRejectOrderDTO:
    def test_reason_is_stripped(self):
        assert RejectOrderDTO(reason="  sem entregador  ").reason == "sem entregador"

    def test_reason_defaults_to_empty(self):
        assert RejectOrderDTO().reason == ""


class TestAdvanceStatusDTO:
    def test_status_is_normalised(self):
        assert AdvanceStatusDTO(new_status=" ENTREGUE ").new_status == "entregue"

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError, match="Status desconhecido"):
            AdvanceStatusDTO(new_status="perdido")


class TestStockCheckResult:
    def test_fulfillable_when_nothing_missing(self):
        result = StockCheckResult(insufficient_products=[])
        assert result.is_fulfillable
        assert result.model_dump() == {
            "insufficient_products": [],
            "is_fulfillable": True,
        }

    def test_not_fulfillable_with_missing_products(self):
        result = StockCheckResult(insufficient_products=["Esfera X"])
        assert not result.is_fulfillable
