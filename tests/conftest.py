from decimal import Decimal
from unittest.mock import patch

import pytest

from rest_framework.test import APIClient

from modules.catalog.models import Category, Product
from modules.clients.directory import ClientApiDirectory
from modules.clients.dtos import ClientRecord

KNOWN_CPF = "12345678900"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


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


# ---------------------------------------------------------------------------
# Catalog rows
# ---------------------------------------------------------------------------


@pytest.fixture()
def category():
    return Category.objects.create(name="Lanches", is_active=True)


@pytest.fixture()
def inactive_category():
    return Category.objects.create(name="Sazonais", is_active=False)


@pytest.fixture()
def burger(category):
    return Product.objects.create(
        name="X-Burger", price=Decimal("25.90"), category=category
    )


@pytest.fixture()
def soda(category):
    return Product.objects.create(
        name="Refrigerante", price=Decimal("6.50"), category=category
    )


# ---------------------------------------------------------------------------
# Client directory
# ---------------------------------------------------------------------------


@pytest.fixture()
def client_directory():
    """Patch the HTTP client directory: only ``KNOWN_CPF`` is registered."""

    def lookup(self, tax_id):
        if tax_id == KNOWN_CPF:
            return ClientRecord(tax_id=tax_id, name="Maria Silva")
        return None

    with patch.object(
        ClientApiDirectory, "get_client_by_tax_id", autospec=True, side_effect=lookup
    ) as mocked:
        yield mocked
