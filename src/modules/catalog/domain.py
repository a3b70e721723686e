"""Catalog domain entities.

Immutable snapshots handed out by the catalog repositories.  The order
validator only ever reads them; changes go through the catalog services,
which build a modified copy with ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class Category:
    name: str
    is_active: bool = True
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Product:
    """A sellable item.

    ``category_id`` is optional at the storage level; the order validator
    rejects products that lack one.
    """

    name: str
    price: Decimal
    description: str = ""
    is_active: bool = True
    category_id: Optional[UUID] = None
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
