"""Catalog DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the catalog services.
DTOs are immutable (``frozen=True``).

Input DTOs declare their fields as required-but-nullable so that a
missing value reaches the validator and produces the catalog's own
message instead of Pydantic's generic "field required".
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.catalog.domain import Category, Product


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str]
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: Optional[str]) -> str:
        if not v or not v.strip():
            raise ValueError("Category name cannot be empty")
        return v.strip()


class UpdateCategoryDTO(BaseModel):
    """All fields optional; only supplied fields are changed."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Category name cannot be empty")
        return v.strip() if v is not None else v


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string.
    - ``price`` is present and greater than zero.
    - ``category_id`` is present (existence is checked by the service).
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str]
    price: Optional[Decimal]
    category_id: Optional[UUID]
    description: str = ""
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: Optional[str]) -> str:
        if not v or not v.strip():
            raise ValueError("Product name cannot be empty")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Decimal:
        if v is None or v <= 0:
            raise ValueError("Product price cannot be empty or zero")
        return v

    @field_validator("category_id")
    @classmethod
    def category_must_be_present(cls, v: Optional[UUID]) -> UUID:
        if v is None:
            raise ValueError("Product category cannot be empty")
        return v


class UpdateProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    is_active: Optional[bool] = None
    category_id: Optional[UUID] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Product name cannot be empty")
        return v.strip() if v is not None else v

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Product price cannot be empty or zero")
        return v


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class CategoryOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, category: Category) -> CategoryOutputDTO:
        return cls(
            id=category.id,
            name=category.name,
            is_active=category.is_active,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str
    price: Decimal
    is_active: bool
    category_id: Optional[UUID]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            is_active=product.is_active,
            category_id=product.category_id,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
