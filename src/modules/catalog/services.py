"""Catalog service layer (Use Cases).

Orchestrates business logic for categories and products, delegating
persistence to the injected repositories.

Business rules enforced here:
- Category names are unique among live categories.
- A product must reference an existing category when created or moved.
- Deletes are soft deletes performed by the repositories.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.catalog.domain import Category, Product
from modules.catalog.exceptions import (
    CategoryAlreadyExists,
    CategoryNotFound,
    ProductNotFound,
)

if TYPE_CHECKING:
    from modules.catalog.dtos import (
        CreateCategoryDTO,
        CreateProductDTO,
        UpdateCategoryDTO,
        UpdateProductDTO,
    )
    from modules.catalog.repositories.interfaces import (
        ICategoryRepository,
        IProductRepository,
    )

logger = structlog.get_logger(__name__)


class CategoryService:
    """Application service for Category use-cases."""

    def __init__(self, repository: ICategoryRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_category(self, dto: CreateCategoryDTO) -> Category:
        """Raises:
        CategoryAlreadyExists: if the name is taken.
        """
        log = logger.bind(name=dto.name)
        if self._repo.get_by_name(dto.name):
            log.warning("category.duplicate_name")
            raise CategoryAlreadyExists("Category already exists")

        category = self._repo.save(Category(name=dto.name, is_active=dto.is_active))
        log.info("category.created", category_id=str(category.id))
        return category

    @transaction.atomic
    def update_category(self, id: str, dto: UpdateCategoryDTO) -> Category:
        """Rename and/or toggle the active flag.

        Raises:
            CategoryNotFound: if the category does not exist.
            CategoryAlreadyExists: if the new name is taken by another category.
        """
        category = self.get_category(id)
        log = logger.bind(category_id=str(id))

        if dto.name is not None and dto.name != category.name:
            if self._repo.get_by_name(dto.name):
                log.warning("category.duplicate_name", name=dto.name)
                raise CategoryAlreadyExists("Category already exists")

        changes = {
            field: getattr(dto, field)
            for field in ("name", "is_active")
            if getattr(dto, field) is not None
        }
        category = self._repo.save(replace(category, **changes))
        log.info("category.updated", fields=sorted(changes))
        return category

    @transaction.atomic
    def delete_category(self, id: str) -> None:
        if not self._repo.delete(id):
            raise CategoryNotFound(f"Category {id} not found.")
        logger.info("category.deleted", category_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_category(self, id: str) -> Category:
        category = self._repo.get_by_id(id)
        if not category:
            raise CategoryNotFound(f"Category {id} not found.")
        return category

    def get_category_by_name(self, name: str) -> Category:
        category = self._repo.get_by_name(name)
        if not category:
            raise CategoryNotFound(f"Category '{name}' not found.")
        return category

    def list_categories(self) -> List[Category]:
        return self._repo.list()


class ProductService:
    """Application service for Product use-cases.

    Receives the product repository plus the category repository, which is
    needed to check that a product's category exists.
    """

    def __init__(
        self,
        repository: IProductRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._repo = repository
        self._category_repo = category_repository

    def _require_category(self, category_id) -> None:
        if not self._category_repo.get_by_id(str(category_id)):
            raise CategoryNotFound("Category not found")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product inside an existing category.

        Raises:
            CategoryNotFound: if ``dto.category_id`` does not resolve.
        """
        log = logger.bind(category_id=str(dto.category_id))
        self._require_category(dto.category_id)

        product = self._repo.save(
            Product(
                name=dto.name,
                price=dto.price,
                description=dto.description,
                is_active=dto.is_active,
                category_id=dto.category_id,
            )
        )
        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields to an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
            CategoryNotFound: if the product is moved to an unknown category.
        """
        product = self.get_product(id)
        if dto.category_id is not None and dto.category_id != product.category_id:
            self._require_category(dto.category_id)

        changes = {
            field: getattr(dto, field)
            for field in ("name", "description", "price", "is_active", "category_id")
            if getattr(dto, field) is not None
        }
        product = self._repo.save(replace(product, **changes))
        logger.info("product.updated", product_id=str(id), fields=sorted(changes))
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: str) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def list_products(self, category_id: Optional[str] = None) -> List[Product]:
        """Return live products, optionally only those of one category."""
        return self._repo.list(category_id)
