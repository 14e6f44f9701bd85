"""Integration tests for the catalog and inventory endpoints."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from modules.products.models import InventoryItem, Package
from modules.products.repositories.django_repository import InventoryDjangoRepository
from modules.resellers.models import Reseller

pytestmark = pytest.mark.integration

INVENTORY_URL = "/api/v1/inventory/"


def _detail(item):
    return f"{INVENTORY_URL}{item.id}/"


class TestCatalog:
    def test_lists_packages_once_per_description(self, auth_client, package_x):
        Package.objects.create(description="Esfera X", price=Decimal("99.00"))
        Package.objects.create(description="Bola", price=Decimal("2.00"))

        response = auth_client.get("/api/v1/packages/")

        assert response.status_code == 200
        descriptions = [p["description"] for p in response.json()]
        assert descriptions == ["Bola", "Esfera X"]


class TestAddProduct:
    def test_add_product(self, auth_client, reseller, package_x):
        response = auth_client.post(
            INVENTORY_URL,
            {"package_id": str(package_x.id), "quantity": 40, "price": "12.50"},
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["product"] == "Esfera X"
        assert body["color"] == "#1E88E5"
        assert body["status"] == "Em estoque"
        assert body["stock_status"] == {"display": "Em estoque", "severity": "normal"}
        assert InventoryItem.objects.filter(reseller=reseller).count() == 1

    def test_zero_quantity_is_out_of_stock(self, auth_client, package_x):
        response = auth_client.post(
            INVENTORY_URL,
            {"package_id": str(package_x.id), "quantity": 0, "price": "10.00"},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["stock_status"]["severity"] == "critical"

    def test_price_below_package_price(self, auth_client, package_x):
        response = auth_client.post(
            INVENTORY_URL,
            {"package_id": str(package_x.id), "quantity": 5, "price": "9.99"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "O preço deve ser no mínimo R$ 10.00"

    def test_duplicate_product(self, auth_client, reseller, package_x, stock):
        stock(reseller, package_x, 5)

        response = auth_client.post(
            INVENTORY_URL,
            {"package_id": str(package_x.id), "quantity": 5, "price": "10.00"},
            format="json",
        )

        assert response.status_code == 409
        assert "Ajustar Estoque" in response.json()["detail"]

    def test_unknown_package(self, auth_client):
        response = auth_client.post(
            INVENTORY_URL,
            {
                "package_id": "00000000-0000-0000-0000-000000000000",
                "quantity": 5,
                "price": "10.00",
            },
            format="json",
        )
        assert response.status_code == 404

    def test_negative_quantity(self, auth_client, package_x):
        response = auth_client.post(
            INVENTORY_URL,
            {"package_id": str(package_x.id), "quantity": -1, "price": "10.00"},
            format="json",
        )
        assert response.status_code == 400


class TestAdjustAndUpdate:
    def test_adjust_relabels(self, auth_client, reseller, package_x, stock):
        item = stock(reseller, package_x, 100)

        response = auth_client.post(
            f"{_detail(item)}adjust/", {"quantity": 8}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["quantity"] == 8
        assert response.json()["status"] == "Estoque baixo"
        assert response.json()["stock_status"]["severity"] == "warning"

    def test_adjust_to_zero(self, auth_client, reseller, package_x, stock):
        item = stock(reseller, package_x, 3)

        response = auth_client.post(
            f"{_detail(item)}adjust/", {"quantity": 0}, format="json"
        )

        assert response.json()["status"] == "Sem estoque"

    def test_label_override_is_kept(self, auth_client, reseller, package_x, stock):
        item = stock(reseller, package_x, 0)

        response = auth_client.patch(
            _detail(item), {"status": "Em reposição"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["stock_status"] == {
            "display": "Em reposição",
            "severity": "normal",
        }

    def test_blank_label_derives_from_quantity(
        self, auth_client, reseller, package_x, stock
    ):
        item = stock(reseller, package_x, 15)

        response = auth_client.patch(_detail(item), {"status": ""}, format="json")

        assert response.json()["stock_status"] == {
            "display": "Estoque baixo",
            "severity": "warning",
        }

    def test_update_price_checks_floor(self, auth_client, reseller, package_x, stock):
        item = stock(reseller, package_x, 10)

        low = auth_client.patch(_detail(item), {"price": "5.00"}, format="json")
        ok = auth_client.patch(_detail(item), {"price": "14.90"}, format="json")

        assert low.status_code == 400
        assert ok.status_code == 200
        assert ok.json()["price"] == "14.90"


class TestListAndDelete:
    def test_search_by_product_or_label(
        self, auth_client, reseller, package_x, package_y, stock
    ):
        stock(reseller, package_x, 50, status="Em estoque")
        stock(reseller, package_y, 2, status="Estoque baixo")

        by_product = auth_client.get(INVENTORY_URL, {"search": "esfera x"})
        by_label = auth_client.get(INVENTORY_URL, {"search": "baixo"})

        assert [r["product"] for r in by_product.json()["results"]] == ["Esfera X"]
        assert [r["product"] for r in by_label.json()["results"]] == ["Esfera Y"]

    def test_delete(self, auth_client, reseller, package_x, stock):
        item = stock(reseller, package_x, 10)

        response = auth_client.delete(_detail(item))

        assert response.status_code == 204
        assert not InventoryItem.objects.filter(id=item.id).exists()

    def test_other_resellers_rows_are_not_found(
        self, auth_client, make_user, package_x, stock
    ):
        other = Reseller.objects.create(user=make_user("outra"))
        item = stock(other, package_x, 10)

        assert auth_client.get(_detail(item)).status_code == 404
        assert auth_client.delete(_detail(item)).status_code == 404
        response = auth_client.post(
            f"{_detail(item)}adjust/", {"quantity": 1}, format="json"
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Produto não encontrado no estoque."
        assert InventoryItem.objects.get(id=item.id).quantity == 10

    def test_list_excludes_other_resellers(
        self, auth_client, reseller, make_user, package_x, stock
    ):
        other = Reseller.objects.create(user=make_user("outra"))
        stock(other, package_x, 10)

        response = auth_client.get(INVENTORY_URL)

        assert response.json()["count"] == 0


class TestWriteFailures:
    def test_update_failure_returns_generic_message(
        self, auth_client, reseller, package_x, stock
    ):
        item = stock(reseller, package_x, 10, price=Decimal("12.00"))

        with patch.object(
            InventoryDjangoRepository,
            "save",
            side_effect=DatabaseError("connection reset"),
        ):
            response = auth_client.patch(
                _detail(item), {"price": "14.90"}, format="json"
            )

        assert response.status_code == 503
        assert response.json() == {"detail": "Não foi possível atualizar o produto."}
        item.refresh_from_db()
        assert item.price == Decimal("12.00")

    def test_delete_failure_returns_generic_message(
        self, auth_client, reseller, package_x, stock
    ):
        item = stock(reseller, package_x, 10)

        with patch.object(
            InventoryDjangoRepository,
            "delete",
            side_effect=DatabaseError("connection reset"),
        ):
            response = auth_client.delete(_detail(item))

        assert response.status_code == 503
        assert response.json() == {"detail": "Não foi possível remover o produto."}
        assert InventoryItem.objects.filter(id=item.id).exists()
