"""Integration tests for the order creation endpoint.

Covers:
- Success 201: the order is priced, submitted (SENT) and persisted.
- Validation 400: empty items, zero quantity, unavailable catalog entries.
- Client 404/502: unknown tax id, client directory unreachable.
- Malformed payloads rejected by the serializer.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest

from modules.catalog.models import Product
from modules.clients.directory import COMMUNICATION_ERROR_MESSAGE, ClientApiDirectory
from modules.clients.exceptions import ClientApiError
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"
KNOWN_CPF = "12345678900"


def payload(*items, **extra):
    body = {"title": "Pedido mesa 4", "items": list(items)}
    body.update(extra)
    return body


def item(product, quantity=1):
    return {"product_id": str(product.id), "quantity": quantity}


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


class TestCreateOrderSuccess:
    def test_returns_201_with_priced_sent_order(self, api_client, burger, client_directory):
        response = api_client.post(
            URL, payload(item(burger, 2), client_tax_id=KNOWN_CPF), format="json"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "SENT"
        assert body["total_amount"] == "51.80"
        assert body["client_tax_id"] == KNOWN_CPF
        assert body["received_at"] is None
        assert body["remaining_time"] is None
        assert body["items"][0]["product_name"] == "X-Burger"
        assert body["items"][0]["unit_price"] == "25.90"
        assert body["items"][0]["subtotal"] == "51.80"
        client_directory.assert_called_once()

    def test_order_and_items_are_persisted(self, api_client, burger, soda):
        response = api_client.post(
            URL, payload(item(burger), item(soda, 3)), format="json"
        )

        assert response.status_code == 201
        order = Order.objects.get(id=response.json()["id"])
        assert order.status == OrderStatus.SENT
        assert order.total_amount == Decimal("45.40")
        assert order.items.count() == 2

    @pytest.mark.parametrize(
        "requested", ["CREATED", "RECEIVED", "IN_PREPARATION", "READY", "FINISHED", "DELIVERED"]
    )
    def test_requested_status_is_ignored(self, api_client, burger, requested):
        response = api_client.post(
            URL, payload(item(burger), status=requested), format="json"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "SENT"
        assert body["received_at"] is None
        order = Order.objects.get(id=body["id"])
        assert order.status == OrderStatus.SENT
        assert order.received_at is None

    def test_without_tax_id_skips_client_lookup(self, api_client, burger, client_directory):
        response = api_client.post(URL, payload(item(burger)), format="json")
        assert response.status_code == 201
        assert response.json()["client_tax_id"] is None
        client_directory.assert_not_called()

    def test_price_is_a_snapshot(self, api_client, burger):
        response = api_client.post(URL, payload(item(burger)), format="json")
        Product.objects.filter(id=burger.id).update(price=Decimal("30.00"))

        detail = api_client.get(f"{URL}{response.json()['id']}/").json()
        assert detail["items"][0]["unit_price"] == "25.90"
        assert detail["total_amount"] == "25.90"


# ---------------------------------------------------------------------------
# Order validation
# ---------------------------------------------------------------------------


class TestCreateOrderValidation:
    def test_empty_items(self, api_client):
        response = api_client.post(URL, payload(), format="json")
        assert response.status_code == 400
        assert response.json() == {"detail": "Order must have at least one item."}
        assert Order.objects.count() == 0

    def test_zero_quantity(self, api_client, burger, soda):
        response = api_client.post(
            URL, payload(item(burger), item(soda, 0)), format="json"
        )
        assert response.status_code == 400
        assert response.json() == {"detail": "Each item must have at least quantity 1."}

    def test_unknown_product(self, api_client):
        missing = uuid4()
        response = api_client.post(
            URL,
            payload({"product_id": str(missing), "quantity": 1}),
            format="json",
        )
        assert response.status_code == 400
        assert response.json() == {"detail": f"Product with ID {missing} not found."}

    def test_inactive_product(self, api_client, category):
        product = Product.objects.create(
            name="Milkshake", price=Decimal("14.00"), category=category, is_active=False
        )
        response = api_client.post(URL, payload(item(product)), format="json")
        assert response.status_code == 400
        assert response.json() == {"detail": "Product 'Milkshake' is not available."}

    def test_inactive_category(self, api_client, inactive_category):
        product = Product.objects.create(
            name="Panetone", price=Decimal("40.00"), category=inactive_category
        )
        response = api_client.post(URL, payload(item(product)), format="json")
        assert response.status_code == 400
        assert response.json() == {"detail": "Category 'Sazonais' is not active."}

    def test_product_without_category(self, api_client):
        product = Product.objects.create(name="Avulso", price=Decimal("3.00"))
        response = api_client.post(URL, payload(item(product)), format="json")
        assert response.status_code == 400
        assert response.json() == {
            "detail": "Product 'Avulso' does not have a category assigned."
        }

    def test_blank_title(self, api_client, burger):
        response = api_client.post(
            URL, {"title": "   ", "items": [item(burger)]}, format="json"
        )
        assert response.status_code == 400


# ---------------------------------------------------------------------------
# Client directory
# ---------------------------------------------------------------------------


class TestCreateOrderClient:
    def test_unknown_client_returns_404(self, api_client, burger, client_directory):
        response = api_client.post(
            URL, payload(item(burger), client_tax_id="98765432100"), format="json"
        )
        assert response.status_code == 404
        assert response.json() == {"detail": "Client with CPF 98765432100 not found."}
        assert Order.objects.count() == 0

    def test_directory_unreachable_returns_502(self, api_client, burger):
        with patch.object(
            ClientApiDirectory,
            "get_client_by_tax_id",
            side_effect=ClientApiError(COMMUNICATION_ERROR_MESSAGE),
        ):
            response = api_client.post(
                URL, payload(item(burger), client_tax_id=KNOWN_CPF), format="json"
            )
        assert response.status_code == 502
        assert response.json() == {"detail": COMMUNICATION_ERROR_MESSAGE}
        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0


# ---------------------------------------------------------------------------
# Malformed payloads
# ---------------------------------------------------------------------------


class TestCreateOrderPayload:
    def test_missing_title(self, api_client, burger):
        response = api_client.post(URL, {"items": [item(burger)]}, format="json")
        assert response.status_code == 400
        assert "title" in response.json()

    def test_malformed_product_id(self, api_client):
        response = api_client.post(
            URL, payload({"product_id": "abc", "quantity": 1}), format="json"
        )
        assert response.status_code == 400
        assert "items" in response.json()
