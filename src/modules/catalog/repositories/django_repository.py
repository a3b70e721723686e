"""Django ORM implementation of the catalog repositories.

Satisfies ``ICategoryRepository`` / ``IProductRepository`` using Django's
QuerySet API.  Reads return immutable domain snapshots; malformed IDs and
soft-deleted rows are reported as ``None`` (Null Object pattern) so the
service layer decides how to translate a missing entity.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.catalog import domain
from modules.catalog.models import Category, Product
from modules.catalog.repositories.interfaces import (
    ICategoryRepository,
    IProductRepository,
)

logger = structlog.get_logger(__name__)


def category_to_domain(row: Category) -> domain.Category:
    return domain.Category(
        id=row.id,
        name=row.name,
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def product_to_domain(row: Product) -> domain.Product:
    return domain.Product(
        id=row.id,
        name=row.name,
        description=row.description,
        price=row.price,
        is_active=row.is_active,
        category_id=row.category_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class CategoryDjangoRepository(ICategoryRepository):
    """Concrete Category repository backed by Django ORM."""

    def _get_row(self, id: str) -> Optional[Category]:
        try:
            return Category.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_id(self, id: str) -> Optional[domain.Category]:
        row = self._get_row(id)
        return category_to_domain(row) if row else None

    def get_by_name(self, name: str) -> Optional[domain.Category]:
        row = Category.objects.alive().filter(name=name).first()
        return category_to_domain(row) if row else None

    def list(self) -> List[domain.Category]:
        return [category_to_domain(row) for row in Category.objects.alive()]

    @transaction.atomic
    def save(self, entity: domain.Category) -> domain.Category:
        """Insert when ``entity.id`` is unset, otherwise update in place."""
        row = self._get_row(str(entity.id)) if entity.id else None
        if row is None:
            row = Category(name=entity.name, is_active=entity.is_active)
            if entity.id:
                row.id = entity.id
        else:
            row.name = entity.name
            row.is_active = entity.is_active
        row.save()
        logger.info("category.saved", category_id=str(row.id))
        return category_to_domain(row)

    @transaction.atomic
    def delete(self, id: str) -> bool:
        row = self._get_row(id)
        if not row:
            return False
        row.delete()
        logger.info("category.soft_deleted", category_id=str(id))
        return True


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def _get_row(self, id: str) -> Optional[Product]:
        try:
            return Product.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_id(self, id: str) -> Optional[domain.Product]:
        row = self._get_row(id)
        return product_to_domain(row) if row else None

    def list(self, category_id: Optional[str] = None) -> List[domain.Product]:
        queryset = Product.objects.alive()
        if category_id is not None:
            try:
                queryset = queryset.filter(category_id=category_id)
                return [product_to_domain(row) for row in queryset]
            except (ValueError, ValidationError):
                return []
        return [product_to_domain(row) for row in queryset]

    @transaction.atomic
    def save(self, entity: domain.Product) -> domain.Product:
        """Insert when ``entity.id`` is unset, otherwise update in place."""
        row = self._get_row(str(entity.id)) if entity.id else None
        if row is None:
            row = Product()
            if entity.id:
                row.id = entity.id
        row.name = entity.name
        row.description = entity.description
        row.price = entity.price
        row.is_active = entity.is_active
        row.category_id = entity.category_id
        row.save()
        logger.info("product.saved", product_id=str(row.id))
        return product_to_domain(row)

    @transaction.atomic
    def delete(self, id: str) -> bool:
        row = self._get_row(id)
        if not row:
            return False
        row.delete()
        logger.info("product.soft_deleted", product_id=str(id))
        return True
