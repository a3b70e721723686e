"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``OrderItemInputDTO``: a product reference plus quantity.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``UpdateOrderDTO``: full update of the order header.
- ``OrderOutputDTO``: output with items and the remaining-time message.
- ``OrderMonitorDTO``: one row of the kitchen monitor.

Item quantities are deliberately unconstrained here: the order validator
owns that rule and its message.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.constants import OrderStatus
from modules.orders.domain import Order, OrderItem

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class OrderItemInputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    def to_entity(self) -> OrderItem:
        return OrderItem(product_id=self.product_id, quantity=self.quantity)


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Carries no status: the service submits every new order as SENT.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: Optional[str] = None
    client_tax_id: Optional[str] = None
    items: List[OrderItemInputDTO] = []

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Order title cannot be empty.")
        return v.strip()

    @field_validator("client_tax_id")
    @classmethod
    def blank_tax_id_is_none(cls, v: Optional[str]) -> Optional[str]:
        return (v.strip() or None) if v is not None else None

    def to_entity(self) -> Order:
        return Order(
            title=self.title,
            description=self.description,
            client_tax_id=self.client_tax_id,
            items=[item.to_entity() for item in self.items],
        )


class UpdateOrderDTO(BaseModel):
    """Full replacement of the order header; items are not part of it."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: Optional[str] = None
    client_tax_id: Optional[str] = None
    status: OrderStatus

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Order title cannot be empty.")
        return v.strip()

    @field_validator("client_tax_id")
    @classmethod
    def blank_tax_id_is_none(cls, v: Optional[str]) -> Optional[str]:
        return (v.strip() or None) if v is not None else None


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderItemOutputDTO(BaseModel):
    """Immutable DTO for order item API responses."""

    model_config = ConfigDict(frozen=True)

    id: Optional[UUID]
    product_id: UUID
    product_name: Optional[str]
    quantity: int
    unit_price: Optional[Decimal]
    subtotal: Optional[Decimal]

    @classmethod
    def from_entity(cls, item: OrderItem) -> OrderItemOutputDTO:
        return cls(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product.name if item.product else None,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
        )


class OrderOutputDTO(BaseModel):
    """Immutable DTO for order API responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    title: str
    description: Optional[str]
    status: Optional[str]
    client_tax_id: Optional[str]
    total_amount: Decimal
    received_at: Optional[datetime]
    remaining_time: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    items: List[OrderItemOutputDTO]

    @classmethod
    def from_entity(
        cls, order: Order, remaining_time: Optional[str] = None
    ) -> OrderOutputDTO:
        return cls(
            id=order.id,
            title=order.title,
            description=order.description,
            status=str(order.status) if order.status is not None else None,
            client_tax_id=order.client_tax_id,
            total_amount=order.total_amount,
            received_at=order.received_at,
            remaining_time=remaining_time,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[OrderItemOutputDTO.from_entity(item) for item in order.items],
        )


class OrderMonitorDTO(BaseModel):
    """Kitchen monitor row: what to prepare and how long is left."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    title: str
    status: str
    received_at: Optional[datetime]
    remaining_time: Optional[str]
    item_count: int

    @classmethod
    def from_entity(cls, order: Order, remaining_time: Optional[str]) -> OrderMonitorDTO:
        return cls(
            id=order.id,
            title=order.title,
            status=str(order.status),
            received_at=order.received_at,
            remaining_time=remaining_time,
            item_count=sum(item.quantity for item in order.items),
        )
