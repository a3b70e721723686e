"""Unit tests for OrderValidator with mocked collaborators.

Covers:
- Structural rules (non-empty items, quantity >= 1) checked before lookups.
- Client verification by tax id.
- Catalog rules: product exists, is active, has a live active category.
- Exact Decimal pricing.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from structlog.testing import capture_logs

from modules.catalog.domain import Category, Product
from modules.clients.dtos import ClientRecord
from modules.clients.exceptions import ClientApiError, ClientNotFound
from modules.orders.domain import Order, OrderItem
from modules.orders.exceptions import OrderValidationError
from modules.orders.validation import OrderValidator

pytestmark = pytest.mark.unit

CPF = "12345678900"


@pytest.fixture()
def lanches():
    return Category(id=uuid4(), name="Lanches", is_active=True)


@pytest.fixture()
def burger(lanches):
    return Product(
        id=uuid4(), name="X-Burger", price=Decimal("25.90"), category_id=lanches.id
    )


@pytest.fixture()
def juice(lanches):
    return Product(
        id=uuid4(), name="Suco", price=Decimal("8.35"), category_id=lanches.id
    )


@pytest.fixture()
def product_repo(burger, juice):
    products = {burger.id: burger, juice.id: juice}
    repo = MagicMock()
    repo.get_by_id.side_effect = products.get
    return repo


@pytest.fixture()
def category_repo(lanches):
    categories = {lanches.id: lanches}
    repo = MagicMock()
    repo.get_by_id.side_effect = categories.get
    return repo


@pytest.fixture()
def client_directory():
    directory = MagicMock()
    directory.get_client_by_tax_id.return_value = ClientRecord(tax_id=CPF)
    return directory


@pytest.fixture()
def validator(product_repo, category_repo, client_directory):
    return OrderValidator(
        product_repository=product_repo,
        category_repository=category_repo,
        client_directory=client_directory,
    )


def order_of(*items, tax_id=None) -> Order:
    return Order(title="Pedido", items=list(items), client_tax_id=tax_id)


# ---------------------------------------------------------------------------
# Structural rules
# ---------------------------------------------------------------------------


class TestStructuralRules:
    def test_empty_items(self, validator, product_repo, client_directory):
        with pytest.raises(OrderValidationError, match="^Order must have at least one item.$"):
            validator.validate_and_price(order_of(tax_id=CPF))
        client_directory.get_client_by_tax_id.assert_not_called()
        product_repo.get_by_id.assert_not_called()

    def test_zero_quantity_fails_before_any_lookup(
        self, validator, burger, product_repo, client_directory
    ):
        order = order_of(
            OrderItem(product_id=burger.id, quantity=2),
            OrderItem(product_id=burger.id, quantity=0),
            tax_id=CPF,
        )
        with pytest.raises(
            OrderValidationError, match="^Each item must have at least quantity 1.$"
        ):
            validator.validate_and_price(order)
        client_directory.get_client_by_tax_id.assert_not_called()
        product_repo.get_by_id.assert_not_called()

    def test_negative_quantity(self, validator, burger):
        with pytest.raises(OrderValidationError):
            validator.validate_and_price(
                order_of(OrderItem(product_id=burger.id, quantity=-3))
            )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class TestClientCheck:
    def test_unknown_client(self, validator, burger, client_directory, product_repo):
        client_directory.get_client_by_tax_id.return_value = None
        with pytest.raises(ClientNotFound) as exc_info:
            validator.validate_and_price(
                order_of(OrderItem(product_id=burger.id, quantity=1), tax_id="99999999999")
            )
        assert exc_info.value.tax_id == "99999999999"
        product_repo.get_by_id.assert_not_called()

    def test_client_is_not_a_validation_error(self, validator, burger, client_directory):
        client_directory.get_client_by_tax_id.return_value = None
        with pytest.raises(ClientNotFound):
            validator.validate_and_price(
                order_of(OrderItem(product_id=burger.id, quantity=1), tax_id=CPF)
            )

    def test_unknown_client_is_not_logged_by_the_validator(
        self, validator, burger, client_directory
    ):
        client_directory.get_client_by_tax_id.return_value = None
        with capture_logs() as logs:
            with pytest.raises(ClientNotFound):
                validator.validate_and_price(
                    order_of(OrderItem(product_id=burger.id, quantity=1), tax_id=CPF)
                )
        assert logs == []

    def test_directory_failure_propagates(self, validator, burger, client_directory):
        client_directory.get_client_by_tax_id.side_effect = ClientApiError("down")
        with pytest.raises(ClientApiError):
            validator.validate_and_price(
                order_of(OrderItem(product_id=burger.id, quantity=1), tax_id=CPF)
            )

    def test_no_tax_id_skips_directory(self, validator, burger, client_directory):
        validator.validate_and_price(order_of(OrderItem(product_id=burger.id, quantity=1)))
        client_directory.get_client_by_tax_id.assert_not_called()

    def test_known_client_is_looked_up_once(self, validator, burger, client_directory):
        validator.validate_and_price(
            order_of(OrderItem(product_id=burger.id, quantity=1), tax_id=CPF)
        )
        client_directory.get_client_by_tax_id.assert_called_once_with(CPF)


# ---------------------------------------------------------------------------
# Catalog rules
# ---------------------------------------------------------------------------


class TestCatalogRules:
    def test_unknown_product(self, validator):
        missing = uuid4()
        with pytest.raises(OrderValidationError) as exc_info:
            validator.validate_and_price(order_of(OrderItem(product_id=missing, quantity=1)))
        assert str(exc_info.value) == f"Product with ID {missing} not found."

    def test_inactive_product(self, validator, product_repo, lanches):
        product = Product(
            id=uuid4(),
            name="Milkshake",
            price=Decimal("12.00"),
            is_active=False,
            category_id=lanches.id,
        )
        product_repo.get_by_id.side_effect = None
        product_repo.get_by_id.return_value = product
        with pytest.raises(OrderValidationError) as exc_info:
            validator.validate_and_price(order_of(OrderItem(product_id=product.id, quantity=1)))
        assert str(exc_info.value) == "Product 'Milkshake' is not available."

    def test_product_without_category(self, validator, product_repo):
        product = Product(id=uuid4(), name="Avulso", price=Decimal("3.00"))
        product_repo.get_by_id.side_effect = None
        product_repo.get_by_id.return_value = product
        with pytest.raises(OrderValidationError) as exc_info:
            validator.validate_and_price(order_of(OrderItem(product_id=product.id, quantity=1)))
        assert str(exc_info.value) == "Product 'Avulso' does not have a category assigned."

    def test_missing_category(self, validator, product_repo):
        product = Product(
            id=uuid4(), name="Pastel", price=Decimal("7.00"), category_id=uuid4()
        )
        product_repo.get_by_id.side_effect = None
        product_repo.get_by_id.return_value = product
        with pytest.raises(OrderValidationError) as exc_info:
            validator.validate_and_price(order_of(OrderItem(product_id=product.id, quantity=1)))
        assert str(exc_info.value) == "Category for product 'Pastel' not found."

    def test_inactive_category(self, validator, product_repo, category_repo):
        closed = Category(id=uuid4(), name="Sobremesas", is_active=False)
        product = Product(
            id=uuid4(), name="Pudim", price=Decimal("9.00"), category_id=closed.id
        )
        product_repo.get_by_id.side_effect = None
        product_repo.get_by_id.return_value = product
        category_repo.get_by_id.side_effect = None
        category_repo.get_by_id.return_value = closed
        with pytest.raises(OrderValidationError) as exc_info:
            validator.validate_and_price(order_of(OrderItem(product_id=product.id, quantity=1)))
        assert str(exc_info.value) == "Category 'Sobremesas' is not active."

    def test_first_failing_item_wins(self, validator, burger):
        missing = uuid4()
        order = order_of(
            OrderItem(product_id=burger.id, quantity=1),
            OrderItem(product_id=missing, quantity=1),
            OrderItem(product_id=uuid4(), quantity=1),
        )
        with pytest.raises(OrderValidationError, match=str(missing)):
            validator.validate_and_price(order)


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------


class TestPricing:
    def test_single_item_total(self, validator, burger):
        priced = validator.validate_and_price(
            order_of(OrderItem(product_id=burger.id, quantity=2), tax_id=CPF)
        )
        assert priced.total_amount == Decimal("51.80")

    def test_total_is_exact_sum(self, validator, burger, juice):
        priced = validator.validate_and_price(
            order_of(
                OrderItem(product_id=burger.id, quantity=1),
                OrderItem(product_id=juice.id, quantity=3),
            )
        )
        assert priced.total_amount == Decimal("50.95")
        assert isinstance(priced.total_amount, Decimal)

    def test_items_are_resolved_with_price_snapshot(self, validator, burger):
        priced = validator.validate_and_price(
            order_of(OrderItem(product_id=burger.id, quantity=2))
        )
        item = priced.items[0]
        assert item.product == burger
        assert item.unit_price == Decimal("25.90")
        assert item.subtotal == Decimal("51.80")

    def test_candidate_is_not_mutated(self, validator, burger):
        candidate = order_of(OrderItem(product_id=burger.id, quantity=2))
        validator.validate_and_price(candidate)
        assert candidate.total_amount == Decimal("0.00")
        assert candidate.items[0].product is None

    def test_validate_items_skips_client(self, validator, burger, client_directory):
        items, total = validator.validate_items(
            [OrderItem(product_id=burger.id, quantity=3)]
        )
        assert total == Decimal("77.70")
        assert items[0].unit_price == Decimal("25.90")
        client_directory.get_client_by_tax_id.assert_not_called()

    def test_validate_items_rejects_empty_list(self, validator):
        with pytest.raises(OrderValidationError, match="at least one item"):
            validator.validate_items([])
