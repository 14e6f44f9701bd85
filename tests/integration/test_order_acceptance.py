"""Integration tests for the order acceptance workflow through the API."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.utils import timezone

from modules.core.models import EventStatus, OutboxEvent
from modules.customers.models import Customer
from modules.orders.constants import DeliveryKind, FulfillmentStatus
from modules.orders.models import OrderStatusHistory
from modules.products.models import InventoryItem
from modules.products.repositories.django_repository import InventoryDjangoRepository
from modules.resellers.models import Reseller

pytestmark = pytest.mark.integration


def _accept_url(order):
    return f"/api/v1/orders/{order.id}/accept/"


def _stock_check_url(order):
    return f"/api/v1/orders/{order.id}/stock-check/"


class TestAcceptScenario:
    def test_shortfall_then_restock_then_accept(
        self, auth_client, reseller, package_x, stock, make_order, tomorrow
    ):
        order = make_order([(package_x, 5)], number="1001")
        stock(reseller, package_x, 3)

        check = auth_client.get(_stock_check_url(order))
        assert check.status_code == 200
        assert check.json() == {
            "insufficient_products": ["Esfera X"],
            "is_fulfillable": False,
        }

        refused = auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )
        assert refused.status_code == 409
        assert refused.json()["insufficient_products"] == ["Esfera X"]

        stock(reseller, package_x, 10)
        response = auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Pedido 1001 foi aceito e está confirmado."
        assert body["order"]["fulfillment_status"] == "aceito"
        assert body["order"]["estimated_delivery_date"] == tomorrow.isoformat()
        assert body["order"]["allowed_transitions"] == [
            "a_caminho",
            "entregue",
            "cancelado",
        ]

        item = InventoryItem.objects.get(reseller=reseller, product="Esfera X")
        assert item.quantity == 5
        assert item.status == "Estoque baixo"

    def test_pickup_order_moves_to_preparing(
        self, auth_client, reseller, package_x, stock, make_order, tomorrow
    ):
        stock(reseller, package_x, 50)
        order = make_order([(package_x, 2)], delivery_kind=DeliveryKind.PICKUP)

        response = auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["order"]["fulfillment_status"] == "preparando_pedido"
        assert "sendo preparado" in response.json()["message"]


class TestAcceptAtomicity:
    def test_partial_shortfall_leaves_all_rows_untouched(
        self, auth_client, reseller, package_x, package_y, stock, make_order, tomorrow
    ):
        stock(reseller, package_x, 30)
        stock(reseller, package_y, 1)
        order = make_order([(package_x, 5), (package_y, 2)])

        response = auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["insufficient_products"] == ["Esfera Y"]
        quantities = dict(
            InventoryItem.objects.filter(reseller=reseller).values_list(
                "product", "quantity"
            )
        )
        assert quantities == {"Esfera X": 30, "Esfera Y": 1}

        order.refresh_from_db()
        assert order.fulfillment_status == FulfillmentStatus.AWAITING_ACCEPTANCE
        assert not Customer.objects.exists()
        assert not OrderStatusHistory.objects.filter(order=order).exists()
        assert not OutboxEvent.objects.exists()

    def test_missing_inventory_row_is_a_shortfall(
        self, auth_client, package_x, make_order, tomorrow
    ):
        order = make_order([(package_x, 1)])

        response = auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["insufficient_products"] == ["Esfera X"]

    def test_duplicate_lines_are_summed(
        self, auth_client, reseller, package_x, stock, make_order, tomorrow
    ):
        stock(reseller, package_x, 5)
        order = make_order([(package_x, 3), (package_x, 3)])

        response = auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )

        assert response.status_code == 409
        assert InventoryItem.objects.get(reseller=reseller).quantity == 5

    def test_write_failure_rolls_back_every_decrement(
        self, auth_client, reseller, package_x, package_y, stock, make_order, tomorrow
    ):
        stock(reseller, package_x, 30)
        stock(reseller, package_y, 30)
        order = make_order([(package_x, 5), (package_y, 2)])
        real_save = InventoryDjangoRepository.save
        saved = []

        def failing_second_save(repository, entity):
            saved.append(entity.product)
            if len(saved) == 2:
                raise DatabaseError("connection reset")
            return real_save(repository, entity)

        with patch.object(InventoryDjangoRepository, "save", failing_second_save):
            response = auth_client.post(
                _accept_url(order),
                {"estimated_date": tomorrow.isoformat()},
                format="json",
            )

        assert response.status_code == 503
        assert response.json() == {"detail": "Não foi possível aceitar o pedido."}
        assert len(saved) == 2
        quantities = dict(
            InventoryItem.objects.filter(reseller=reseller).values_list(
                "product", "quantity"
            )
        )
        assert quantities == {"Esfera X": 30, "Esfera Y": 30}

        order.refresh_from_db()
        assert order.fulfillment_status == FulfillmentStatus.AWAITING_ACCEPTANCE
        assert not Customer.objects.exists()
        assert not OutboxEvent.objects.exists()


class TestAcceptSideEffects:
    def test_buyer_linked_once_as_customer(
        self, auth_client, reseller, buyer, package_x, stock, make_order, tomorrow
    ):
        stock(reseller, package_x, 100)
        first = make_order([(package_x, 1)])
        second = make_order([(package_x, 1)])

        for order in (first, second):
            response = auth_client.post(
                _accept_url(order),
                {"estimated_date": tomorrow.isoformat()},
                format="json",
            )
            assert response.status_code == 200

        links = Customer.objects.filter(reseller=reseller, user=buyer)
        assert links.count() == 1
        assert links.get().name == "Joana Silva"

    def test_history_and_outbox_recorded(
        self, auth_client, reseller, package_x, stock, make_order, tomorrow
    ):
        stock(reseller, package_x, 100)
        order = make_order([(package_x, 1)])

        auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )

        history = OrderStatusHistory.objects.get(order=order)
        assert history.old_status == FulfillmentStatus.AWAITING_ACCEPTANCE
        assert history.new_status == FulfillmentStatus.ACCEPTED
        assert history.user == reseller.user

        outbox = OutboxEvent.objects.get(aggregate_id=str(order.id))
        assert outbox.event_type == "OrderAccepted"
        assert outbox.topic == "orders"
        assert outbox.status == EventStatus.PENDING
        assert outbox.payload["new_status"] == "aceito"


class TestAcceptValidation:
    def test_past_date_is_rejected(
        self, auth_client, reseller, package_x, stock, make_order
    ):
        stock(reseller, package_x, 100)
        order = make_order([(package_x, 1)])
        yesterday = timezone.localdate() - timedelta(days=1)

        response = auth_client.post(
            _accept_url(order), {"estimated_date": yesterday.isoformat()}, format="json"
        )

        assert response.status_code == 400
        assert "anterior a hoje" in response.json()["detail"]
        assert InventoryItem.objects.get(reseller=reseller).quantity == 100

    def test_missing_date_is_rejected(self, auth_client, package_x, make_order):
        order = make_order([(package_x, 1)])
        response = auth_client.post(_accept_url(order), {}, format="json")
        assert response.status_code == 400

    def test_already_accepted_order(
        self, auth_client, package_x, make_order, tomorrow
    ):
        order = make_order([(package_x, 1)], status=FulfillmentStatus.ACCEPTED)

        response = auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )

        assert response.status_code == 400

    def test_order_of_another_reseller_is_not_found(
        self, auth_client, make_user, package_x, make_order, tomorrow
    ):
        other = Reseller.objects.create(user=make_user("outra"))
        order = make_order([(package_x, 1)], owner=other)

        response = auth_client.post(
            _accept_url(order), {"estimated_date": tomorrow.isoformat()}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Pedido não encontrado."
