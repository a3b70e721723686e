"""Pagination primitives shared by repositories and views.

Repositories slice querysets with Django's ``Paginator`` and hand back a
``Page`` of domain objects, so the service layer never touches a QuerySet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import ceil
from typing import Any, Callable, Dict, Generic, List, TypeVar

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.db import models
from rest_framework.request import Request

T = TypeVar("T")

MAX_PAGE_SIZE = 100


def _default_page_size() -> int:
    return settings.REST_FRAMEWORK.get("PAGE_SIZE", 20)


@dataclass(frozen=True)
class PageRequest:
    """One-based page number plus page size."""

    page: int = 1
    size: int = field(default_factory=_default_page_size)

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("Page number must be at least 1.")
        if not 1 <= self.size <= MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}.")

    @classmethod
    def from_request(cls, request: Request) -> PageRequest:
        """Build from ``?page=`` / ``?size=`` query params."""
        page = int(request.query_params.get("page", 1))
        size = int(request.query_params.get("size", _default_page_size()))
        return cls(page=page, size=size)


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    size: int

    @property
    def pages(self) -> int:
        return ceil(self.total / self.size) if self.total else 0

    def map(self, fn: Callable[[T], Any]) -> Page[Any]:
        return Page(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            size=self.size,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "count": self.total,
            "page": self.page,
            "size": self.size,
            "pages": self.pages,
            "results": self.items,
        }


def paginate(
    queryset: models.QuerySet,
    page_request: PageRequest,
    to_domain: Callable[[Any], T],
) -> Page[T]:
    """Slice *queryset* and map every row with *to_domain*.

    A page past the end yields an empty ``items`` list rather than an error.
    """
    paginator = Paginator(queryset, page_request.size)
    try:
        rows = paginator.page(page_request.page).object_list
    except EmptyPage:
        rows = []
    return Page(
        items=[to_domain(row) for row in rows],
        total=paginator.count,
        page=page_request.page,
        size=page_request.size,
    )
