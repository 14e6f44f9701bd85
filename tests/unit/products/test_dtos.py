"""Unit tests for inventory DTOs."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.products.dtos import (
    AddInventoryItemDTO,
    AdjustStockDTO,
    UpdateInventoryItemDTO,
)

pytestmark = pytest.mark.unit


class TestAddInventoryItemDTO:
    def test_valid(self):
        dto = AddInventoryItemDTO(package_id=uuid4(), quantity=0, price=Decimal("9.90"))
        assert dto.quantity == 0

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="Quantidade"):
            AddInventoryItemDTO(package_id=uuid4(), quantity=-1, price=Decimal("1"))

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-2.50")])
    def test_non_positive_price_rejected(self, price):
        with pytest.raises(ValidationError, match="Preço"):
            AddInventoryItemDTO(package_id=uuid4(), quantity=1, price=price)


class TestAdjustStockDTO:
    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            AdjustStockDTO(quantity=-5)


class TestUpdateInventoryItemDTO:
    def test_all_fields_optional(self):
        dto = UpdateInventoryItemDTO()
        assert dto.price is None
        assert dto.status is None

    def test_status_is_stripped(self):
        assert UpdateInventoryItemDTO(status=" Promoção ").status == "Promoção"
