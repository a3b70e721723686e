"""Catalog repository interfaces.

``get_by_id`` on both contracts is the Catalog Lookup consumed by the
order validator: it must return ``None`` for unknown or deleted rows and
report the ``is_active`` flag exactly as stored.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.catalog.domain import Category, Product


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for categories."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Category]:
        """Retrieve a category by its exact name."""

    @abstractmethod
    def list(self) -> List[Category]:
        """List every live category, active or not."""


class IProductRepository(IRepository["Product"]):
    """Repository contract for products."""

    @abstractmethod
    def list(self, category_id: Optional[str] = None) -> List[Product]:
        """List live products, optionally restricted to one category."""
