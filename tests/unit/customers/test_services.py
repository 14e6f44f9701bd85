"""Unit tests for CustomerService with a mocked repository."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from django.contrib.auth import get_user_model

from modules.customers.exceptions import CustomerNotFound
from modules.customers.models import Customer
from modules.customers.services import CustomerService
from modules.resellers.context import ResellerContext

pytestmark = pytest.mark.unit


def _user(pk, first_name="", last_name=""):
    return get_user_model()(
        pk=pk, username=f"user{pk}", first_name=first_name, last_name=last_name
    )


@pytest.fixture()
def repo():
    repository = MagicMock()
    repository.save.side_effect = lambda customer: customer
    return repository


@pytest.fixture()
def service(repo):
    return CustomerService(repository=repo)


def test_registers_new_customer_with_full_name(service, repo):
    repo.get_by_reseller_and_user.return_value = None
    reseller_id = uuid4()

    customer, created = service.register_if_absent(
        reseller_id, _user(pk=5, first_name="Joana", last_name="Silva")
    )

    assert created
    assert customer.reseller_id == reseller_id
    assert customer.name == "Joana Silva"
    repo.save.assert_called_once()


def test_existing_link_is_returned(service, repo):
    existing = MagicMock()
    repo.get_by_reseller_and_user.return_value = existing

    customer, created = service.register_if_absent(uuid4(), _user(pk=5))

    assert customer is existing
    assert not created
    repo.save.assert_not_called()


def test_get_customer_not_found(service, repo):
    repo.get_for_reseller.return_value = None
    ctx = ResellerContext(user_id=1, reseller_id=uuid4(), reseller=MagicMock())

    with pytest.raises(CustomerNotFound):
        service.get_customer(ctx, "missing")


def test_full_name_is_blank_without_names():
    assert Customer.full_name_of(SimpleNamespace(first_name="", last_name="")) == ""
