"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` to ensure
the Order aggregate (Order + OrderItems) is persisted atomically.

Concurrency control on status changes uses ``select_for_update()``
(no ``version`` field exists on the model).
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F

from modules.catalog.repositories.django_repository import product_to_domain
from modules.core.pagination import Page, PageRequest, paginate
from modules.orders import domain
from modules.orders.constants import OrderStatus
from modules.orders.filters import OrderFilter
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def item_to_domain(row: OrderItem) -> domain.OrderItem:
    return domain.OrderItem(
        id=row.id,
        product_id=row.product_id,
        quantity=row.quantity,
        product=product_to_domain(row.product),
        unit_price=row.unit_price,
    )


def order_to_domain(row: Order) -> domain.Order:
    return domain.Order(
        id=row.id,
        title=row.title,
        description=row.description,
        status=OrderStatus(row.status) if row.status else None,
        client_tax_id=row.client_tax_id,
        total_amount=row.total_amount,
        received_at=row.received_at,
        items=[item_to_domain(item) for item in row.items.all()],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def _queryset(self) -> models.QuerySet:
        return Order.objects.alive().prefetch_related("items__product")

    def _first(self, queryset: models.QuerySet, id: str) -> Optional[Order]:
        try:
            return queryset.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[domain.Order]:
        """Retrieve an order with its items and their products.

        Returns ``None`` for non-existent, deleted or malformed IDs.
        """
        row = self._first(self._queryset(), id)
        return order_to_domain(row) if row else None

    def get_for_update(self, id: str) -> Optional[domain.Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Must be called inside ``transaction.atomic``.
        """
        row = self._first(self._queryset().select_for_update(), id)
        return order_to_domain(row) if row else None

    def find_all(
        self,
        page_request: PageRequest,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Page[domain.Order]:
        queryset = self._queryset().order_by("-created_at")
        if filters:
            filterset = OrderFilter(filters, queryset=queryset)
            if not filterset.is_valid():
                raise ValueError(f"Invalid filters: {dict(filterset.errors)}")
            queryset = filterset.qs
        return paginate(queryset, page_request, order_to_domain)

    def find_all_by_status(
        self,
        statuses: Iterable[str],
        page_request: PageRequest,
        oldest_received_first: bool = False,
    ) -> Page[domain.Order]:
        queryset = self._queryset().filter(status__in=list(statuses))
        if oldest_received_first:
            queryset = queryset.order_by(
                F("received_at").asc(nulls_last=True), "created_at"
            )
        else:
            queryset = queryset.order_by("-created_at")
        return paginate(queryset, page_request, order_to_domain)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: domain.Order) -> domain.Order:
        """Insert a new order with its items; assigns id and timestamps."""
        row = Order(
            title=entity.title,
            description=entity.description,
            status=entity.status,
            client_tax_id=entity.client_tax_id,
            total_amount=entity.total_amount,
            received_at=entity.received_at,
        )
        row.save()
        self._write_items(row, entity.items)

        logger.info(
            "order.saved",
            order_id=str(row.id),
            item_count=len(entity.items),
            status=row.status,
        )
        return self.get_by_id(row.id)

    @transaction.atomic
    def update(
        self, entity: domain.Order, replace_items: bool = False
    ) -> domain.Order:
        row = self._first(Order.objects.alive().select_for_update(), entity.id)
        if row is None:
            raise Order.DoesNotExist(f"Order {entity.id} not found.")

        row.title = entity.title
        row.description = entity.description
        row.status = entity.status
        row.client_tax_id = entity.client_tax_id
        row.received_at = entity.received_at
        fields = ["title", "description", "status", "client_tax_id", "received_at"]

        if replace_items:
            row.items.all().delete()
            self._write_items(row, entity.items)
            row.total_amount = entity.total_amount
            fields.append("total_amount")

        row.save(update_fields=fields)
        logger.info(
            "order.updated",
            order_id=str(row.id),
            status=row.status,
            items_replaced=replace_items,
        )
        return self.get_by_id(row.id)

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete an order by ID."""
        row = self._first(Order.objects.alive(), id)
        if not row:
            return False
        row.delete()
        logger.info("order.soft_deleted", order_id=str(id))
        return True

    def _write_items(self, row: Order, items: List[domain.OrderItem]) -> None:
        for item in items:
            OrderItem(
                order=row,
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
            ).save()
