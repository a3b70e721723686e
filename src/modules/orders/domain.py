"""Order domain entities.

``Order`` and ``OrderItem`` are the values the validator, the status
machine and the service operate on.  The order repository maps them to
and from the ``orders`` / ``order_items`` tables.

An ``OrderItem`` starts as a bare reference (``product_id`` + quantity).
Validation fills in ``product`` and the ``unit_price`` snapshot; the
quantity rule (>= 1) is enforced there, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from modules.catalog.domain import Product
from modules.orders.constants import OrderStatus


@dataclass
class OrderItem:
    product_id: UUID
    quantity: int
    product: Optional[Product] = None
    unit_price: Optional[Decimal] = None
    id: Optional[UUID] = None

    @property
    def subtotal(self) -> Optional[Decimal]:
        if self.unit_price is None:
            return None
        return self.unit_price * self.quantity


@dataclass
class Order:
    title: str
    items: List[OrderItem] = field(default_factory=list)
    description: Optional[str] = None
    status: Optional[OrderStatus] = OrderStatus.CREATED
    client_tax_id: Optional[str] = None
    total_amount: Decimal = Decimal("0.00")
    received_at: Optional[datetime] = None
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
