"""Unit tests for the inventory stock status rules."""

from __future__ import annotations

import pytest

from modules.products.stock_status import (
    Derived,
    Severity,
    Stored,
    describe,
    label_for_quantity,
    source_for,
    stock_status,
)

pytestmark = pytest.mark.unit


class TestLabelForQuantity:
    @pytest.mark.parametrize(
        ("quantity", "expected"),
        [
            (-3, "Sem estoque"),
            (0, "Sem estoque"),
            (1, "Estoque baixo"),
            (20, "Estoque baixo"),
            (21, "Em estoque"),
            (500, "Em estoque"),
        ],
    )
    def test_thresholds(self, quantity, expected):
        assert label_for_quantity(quantity) == expected

    def test_threshold_follows_settings(self, settings):
        settings.LOW_STOCK_THRESHOLD = 5
        assert label_for_quantity(5) == "Estoque baixo"
        assert label_for_quantity(6) == "Em estoque"


class TestSource:
    def test_non_blank_label_is_stored(self):
        assert source_for("Estoque baixo", 100) == Stored(label="Estoque baixo")

    @pytest.mark.parametrize("label", [None, "", "   "])
    def test_blank_label_is_derived(self, label):
        assert source_for(label, 7) == Derived(quantity=7)


class TestStockStatus:
    def test_stored_label_wins_over_quantity(self):
        view = stock_status("Em estoque", 0)
        assert view.display == "Em estoque"
        assert view.severity == Severity.NORMAL

    @pytest.mark.parametrize(
        ("label", "severity"),
        [
            ("Sem estoque", Severity.CRITICAL),
            ("SEM ESTOQUE", Severity.CRITICAL),
            ("Estoque baixo", Severity.WARNING),
            ("Em estoque", Severity.NORMAL),
            ("Promoção", Severity.NORMAL),
        ],
    )
    def test_stored_label_severity_by_keyword(self, label, severity):
        assert stock_status(label, 50).severity == severity

    @pytest.mark.parametrize(
        ("quantity", "display", "severity"),
        [
            (0, "Sem estoque", Severity.CRITICAL),
            (12, "Estoque baixo", Severity.WARNING),
            (40, "Em estoque", Severity.NORMAL),
        ],
    )
    def test_derived_from_quantity(self, quantity, display, severity):
        view = describe(Derived(quantity=quantity))
        assert view.display == display
        assert view.severity == severity

    def test_blank_label_falls_back_to_quantity(self):
        view = stock_status("", 3)
        assert view.display == "Estoque baixo"
        assert view.severity == Severity.WARNING
