"""Order DRF serializers for API input.

The serializer operates at the Interface layer (API Views) and only checks
the request shape.  Business rules (non-empty items, quantities, catalog
and client checks) live in the order validator so their messages stay
the same whatever the entry point.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import OrderStatus


class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField()


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload.

    There is no ``status`` field: every new order is submitted as SENT.
    """

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, default=None
    )
    client_tax_id = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, default=None, max_length=14
    )
    items = OrderItemInputSerializer(many=True, allow_empty=True)


class UpdateOrderSerializer(serializers.Serializer):
    """Full update of the order header (PUT)."""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, default=None
    )
    client_tax_id = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, default=None, max_length=14
    )
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class UpdateOrderItemsSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, allow_empty=True)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
