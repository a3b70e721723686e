"""Order service layer (Use Cases).

Orchestrates validation, the status machine and persistence.  All write
operations are atomic: the service defines the unit-of-work boundary and
nothing is saved when a step fails.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional, Sequence

import structlog
from django.db import transaction
from django.utils import timezone

from modules.orders import status_machine
from modules.orders.constants import MONITOR_STATUSES, OrderStatus
from modules.orders.domain import Order, OrderItem
from modules.orders.exceptions import OrderNotFound
from modules.orders.timing import remaining_time_message
from modules.orders.validation import OrderValidator

if TYPE_CHECKING:
    from modules.catalog.repositories.interfaces import (
        ICategoryRepository,
        IProductRepository,
    )
    from modules.clients.directory import IClientDirectory
    from modules.core.pagination import Page, PageRequest
    from modules.orders.dtos import UpdateOrderDTO
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and the client directory via constructor
    injection (DIP).  ``clock`` supplies "now" for status timestamps and
    remaining-time messages.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        category_repository: ICategoryRepository,
        client_directory: IClientDirectory,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._order_repo = order_repository
        self._validator = OrderValidator(
            product_repository=product_repository,
            category_repository=category_repository,
            client_directory=client_directory,
        )
        self._clock = clock

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, order: Order) -> Order:
        """Validate, price, submit and persist a new order.

        Whatever status the candidate carries, a new order always enters the
        workflow as SENT, not yet received.

        Raises:
            OrderValidationError, ClientNotFound, ClientApiError
        """
        priced = self._validator.validate_and_price(order)
        priced.status = OrderStatus.SENT
        priced.received_at = None

        saved = self._order_repo.save(priced)
        logger.info(
            "order.created",
            order_id=str(saved.id),
            total_amount=str(saved.total_amount),
            item_count=len(saved.items),
        )
        return saved

    @transaction.atomic
    def update(self, order_id: Any, changes: UpdateOrderDTO) -> Order:
        """Replace title, description, client tax id and status.

        A changed client tax id is checked against the client directory.
        Items and total are left as they are.
        """
        order = self._get_for_update(order_id)

        if changes.client_tax_id and changes.client_tax_id != order.client_tax_id:
            self._validator.check_client(changes.client_tax_id)

        order.title = changes.title
        order.description = changes.description
        order.client_tax_id = changes.client_tax_id
        status_machine.set_status(order, changes.status, now=self._clock())

        updated = self._order_repo.update(order)
        logger.info("order.updated", order_id=str(order_id), status=str(updated.status))
        return updated

    @transaction.atomic
    def update_items(self, order_id: Any, items: Sequence[OrderItem]) -> Order:
        """Replace the order's items and recompute its total."""
        order = self._get_for_update(order_id)
        resolved, total = self._validator.validate_items(items)

        order = dataclasses.replace(order, items=resolved, total_amount=total)
        updated = self._order_repo.update(order, replace_items=True)
        logger.info(
            "order.items_replaced",
            order_id=str(order_id),
            item_count=len(resolved),
            total_amount=str(total),
        )
        return updated

    @transaction.atomic
    def update_status(self, order_id: Any, new_status: OrderStatus) -> Order:
        """Administrative overwrite of the status; no transition rules apply."""
        order = self._get_for_update(order_id)
        old_status = order.status
        status_machine.set_status(order, new_status, now=self._clock())

        updated = self._order_repo.update(order)
        logger.info(
            "order.status_overwritten",
            order_id=str(order_id),
            old_status=str(old_status),
            new_status=str(updated.status),
        )
        return updated

    @transaction.atomic
    def advance_status(self, order_id: Any) -> Order:
        """Move the order one step along the workflow.

        Raises:
            OrderNotFound: no such order.
            IllegalOrderState: the order cannot advance; nothing is saved.
        """
        order = self._get_for_update(order_id)
        old_status = order.status
        status_machine.advance(order, now=self._clock())

        updated = self._order_repo.update(order)
        logger.info(
            "order.status_advanced",
            order_id=str(order_id),
            old_status=str(old_status),
            new_status=str(updated.status),
        )
        return updated

    @transaction.atomic
    def delete(self, order_id: Any) -> None:
        if not self._order_repo.delete(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")
        logger.info("order.deleted", order_id=str(order_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_id(self, order_id: Any) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def find_all(
        self,
        page_request: PageRequest,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Page[Order]:
        return self._order_repo.find_all(page_request, filters)

    def find_all_by_status(
        self, statuses: Iterable[str], page_request: PageRequest
    ) -> Page[Order]:
        return self._order_repo.find_all_by_status(statuses, page_request)

    def monitor(self, page_request: PageRequest) -> Page[tuple[Order, Optional[str]]]:
        """Orders being worked on, oldest received first, with their message."""
        now = self._clock()
        page = self._order_repo.find_all_by_status(
            MONITOR_STATUSES, page_request, oldest_received_first=True
        )
        return page.map(
            lambda order: (
                order,
                remaining_time_message(order.received_at, order.status, now=now),
            )
        )

    def remaining_time(self, order: Order) -> Optional[str]:
        return remaining_time_message(order.received_at, order.status, now=self._clock())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_for_update(self, order_id: Any) -> Order:
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order
