"""Order and OrderItem storage records.

- ``status`` is nullable: a record without a status is reported as such
  by the status machine instead of being coerced to a default.
- ``received_at`` is stamped once, when the order first becomes RECEIVED.
- OrderItem snapshots the product price (``unit_price``) at validation time;
  ``subtotal`` is always ``quantity * unit_price``, recalculated on save.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.db import models

from modules.core.models import BaseModel, SoftDeleteModel
from modules.orders.constants import OrderStatus


class Order(SoftDeleteModel):
    title: models.CharField = models.CharField(max_length=200)
    description: models.TextField = models.TextField(null=True, blank=True)  # noqa: DJ01
    status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.CREATED,
        null=True,
        blank=True,
    )
    client_tax_id: models.CharField = models.CharField(  # noqa: DJ01
        max_length=14, null=True, blank=True
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    received_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0),
                name="orders_total_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.status})"


class OrderItem(BaseModel):
    """Line item linking an Order to a Product.

    Items are owned by their order: replacing an order's items deletes the
    old rows, and hard-deleting the order cascades.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(default=1)
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        editable=False,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.subtotal = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} (${self.subtotal})"
