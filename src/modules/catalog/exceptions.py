"""Catalog domain exceptions.

Raised by the catalog services when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class CategoryNotFound(Exception):
    """The requested category does not exist or has been soft-deleted."""


class CategoryAlreadyExists(Exception):
    """Another category already uses the requested name."""


class ProductNotFound(Exception):
    """The requested product does not exist or has been soft-deleted."""
