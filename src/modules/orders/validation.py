"""Order Validator.

Checks a candidate order against structural rules, the client directory
and the product catalog, then prices it.  Checks run as an ordered
pipeline and the first failure wins; nothing is written anywhere.
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal
from typing import Callable, List, Sequence, Tuple

from modules.catalog.repositories.interfaces import (
    ICategoryRepository,
    IProductRepository,
)
from modules.clients.directory import IClientDirectory
from modules.clients.exceptions import ClientNotFound
from modules.orders.domain import Order, OrderItem
from modules.orders.exceptions import OrderValidationError

ItemCheck = Callable[[Sequence[OrderItem]], None]


def check_not_empty(items: Sequence[OrderItem]) -> None:
    if not items:
        raise OrderValidationError("Order must have at least one item.")


def check_quantities(items: Sequence[OrderItem]) -> None:
    if any(item.quantity is None or item.quantity < 1 for item in items):
        raise OrderValidationError("Each item must have at least quantity 1.")


STRUCTURAL_CHECKS: Tuple[ItemCheck, ...] = (check_not_empty, check_quantities)


class OrderValidator:
    def __init__(
        self,
        product_repository: IProductRepository,
        category_repository: ICategoryRepository,
        client_directory: IClientDirectory,
    ) -> None:
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.client_directory = client_directory

    def validate_and_price(self, order: Order) -> Order:
        """Return a copy of *order* with resolved items and its total.

        Raises:
            OrderValidationError: empty items, bad quantity, or a product
                that cannot be sold.
            ClientNotFound: the tax id is not registered.
            ClientApiError: the client directory could not be reached.
        """
        self._run_structural_checks(order.items)
        if order.client_tax_id:
            self.check_client(order.client_tax_id)
        items, total = self._resolve_and_price(order.items)
        return dataclasses.replace(order, items=items, total_amount=total)

    def validate_items(
        self, items: Sequence[OrderItem]
    ) -> Tuple[List[OrderItem], Decimal]:
        """Validate and price an item list on its own (item replacement)."""
        self._run_structural_checks(items)
        return self._resolve_and_price(items)

    def _run_structural_checks(self, items: Sequence[OrderItem]) -> None:
        for check in STRUCTURAL_CHECKS:
            check(items)

    def check_client(self, tax_id: str) -> None:
        if self.client_directory.get_client_by_tax_id(tax_id) is None:
            raise ClientNotFound(tax_id)

    def _resolve_and_price(
        self, items: Sequence[OrderItem]
    ) -> Tuple[List[OrderItem], Decimal]:
        resolved = [self._resolve_item(item) for item in items]
        total = sum((item.subtotal for item in resolved), Decimal("0.00"))
        return resolved, total

    def _resolve_item(self, item: OrderItem) -> OrderItem:
        product = self.product_repository.get_by_id(item.product_id)
        if product is None:
            raise OrderValidationError(f"Product with ID {item.product_id} not found.")
        if not product.is_active:
            raise OrderValidationError(f"Product '{product.name}' is not available.")
        if product.category_id is None:
            raise OrderValidationError(
                f"Product '{product.name}' does not have a category assigned."
            )

        category = self.category_repository.get_by_id(product.category_id)
        if category is None:
            raise OrderValidationError(
                f"Category for product '{product.name}' not found."
            )
        if not category.is_active:
            raise OrderValidationError(f"Category '{category.name}' is not active.")

        return dataclasses.replace(item, product=product, unit_price=product.price)
