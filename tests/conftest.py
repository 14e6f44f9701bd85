from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from modules.orders.constants import DeliveryKind, FulfillmentStatus
from modules.orders.models import Order, OrderItem
from modules.products.models import InventoryItem, Package
from modules.resellers.models import Reseller


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _reset_throttles():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_user():
    User = get_user_model()

    def _make(username, first_name="", last_name="", email=""):
        return User.objects.create_user(
            username=username,
            password="pass1234",
            first_name=first_name,
            last_name=last_name,
            email=email or f"{username}@example.com",
        )

    return _make


@pytest.fixture()
def reseller_user(make_user):
    return make_user("revendedor", first_name="Rita", last_name="Revenda")


@pytest.fixture()
def reseller(reseller_user):
    return Reseller.objects.create(
        user=reseller_user,
        store_name="Revenda da Rita",
        shipping_fee=Decimal("8.00"),
    )


@pytest.fixture()
def auth_client(api_client, reseller):
    """APIClient authenticated as the reseller's user."""
    api_client.force_authenticate(user=reseller.user)
    return api_client


@pytest.fixture()
def buyer(make_user):
    return make_user("joana", first_name="Joana", last_name="Silva")


@pytest.fixture()
def package_x():
    return Package.objects.create(
        description="Esfera X", color="#1E88E5", price=Decimal("10.00")
    )


@pytest.fixture()
def package_y():
    return Package.objects.create(
        description="Esfera Y", color="#43A047", price=Decimal("15.00")
    )


@pytest.fixture()
def stock():
    """Create (or reset) an inventory row for a reseller."""

    def _stock(reseller, package, quantity, status="Em estoque", price=None):
        item, _ = InventoryItem.objects.update_or_create(
            reseller=reseller,
            product=package.description,
            defaults={
                "package": package,
                "quantity": quantity,
                "status": status,
                "price": price or package.price,
            },
        )
        return item

    return _stock


@pytest.fixture()
def make_order(reseller, buyer):
    """Create an order with line items given as ``(package, quantity)`` pairs."""

    def _make(
        items=(),
        *,
        number=None,
        delivery_kind=DeliveryKind.DELIVERY,
        status=FulfillmentStatus.AWAITING_ACCEPTANCE,
        customer=None,
        owner=None,
        delivered_at=None,
        total_amount=None,
    ):
        order = Order.objects.create(
            number=number or "",
            reseller=owner or reseller,
            customer=customer or buyer,
            delivery_kind=delivery_kind,
            fulfillment_status=status,
            delivered_at=delivered_at,
        )
        total = Decimal("0.00")
        for package, quantity in items:
            item = OrderItem.objects.create(
                order=order,
                package=package,
                quantity=quantity,
                unit_price=package.price,
            )
            total += item.subtotal
        order.total_amount = total if total_amount is None else total_amount
        order.save(update_fields=["total_amount"])
        return order

    return _make


@pytest.fixture()
def tomorrow():
    return timezone.localdate() + timedelta(days=1)
