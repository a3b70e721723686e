"""Integration tests for all-or-nothing order writes.

A failure while writing the items must leave no order behind, and a
failed item replacement must keep the previous items.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import IntegrityError

from modules.catalog.models import Product
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


def items_payload(*products):
    return [{"product_id": str(p.id), "quantity": 1} for p in products]


def test_create_rolls_back_when_an_item_write_fails(api_client, burger, soda):
    with patch.object(
        OrderItem, "save", autospec=True, side_effect=[None, IntegrityError("boom")]
    ):
        with pytest.raises(IntegrityError):
            api_client.post(
                URL,
                {"title": "Pedido", "items": items_payload(burger, soda)},
                format="json",
            )

    assert Order.objects.count() == 0
    assert OrderItem.objects.count() == 0


def test_failed_validation_of_second_item_writes_nothing(api_client, burger, category):
    hidden = Product.objects.create(
        name="Fora do cardapio", price=Decimal("1.00"), category=category, is_active=False
    )
    response = api_client.post(
        URL,
        {"title": "Pedido", "items": items_payload(burger, hidden)},
        format="json",
    )

    assert response.status_code == 400
    assert Order.objects.count() == 0


def test_item_replacement_rolls_back(api_client, burger, soda):
    order = Order.objects.create(
        title="Pedido", status=OrderStatus.SENT, total_amount=Decimal("25.90")
    )
    OrderItem.objects.create(order=order, product=burger, quantity=1, unit_price=burger.price)

    with patch.object(
        OrderItem, "save", autospec=True, side_effect=IntegrityError("boom")
    ):
        with pytest.raises(IntegrityError):
            api_client.put(
                f"{URL}{order.id}/items/",
                {"items": items_payload(soda)},
                format="json",
            )

    order.refresh_from_db()
    assert order.total_amount == Decimal("25.90")
    assert list(order.items.values_list("product_id", flat=True)) == [burger.id]
