"""Order repository interface (the order persistence gateway).

Extends ``IRepository[Order]`` with the reads the service needs: a locking
load for read-modify-write cycles and paginated listings.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest
    from modules.orders.domain import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The aggregate includes its OrderItem children.  Mutations are atomic
    and every read skips soft-deleted orders.
    """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Like ``get_by_id`` but takes a row lock until the transaction ends."""

    @abstractmethod
    def update(self, entity: Order, replace_items: bool = False) -> Order:
        """Write back scalar fields; replace item rows when asked."""

    @abstractmethod
    def find_all(
        self,
        page_request: PageRequest,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Page[Order]:
        """Newest first, optionally narrowed by ``OrderFilter`` params."""

    @abstractmethod
    def find_all_by_status(
        self,
        statuses: Iterable[str],
        page_request: PageRequest,
        oldest_received_first: bool = False,
    ) -> Page[Order]:
        """Orders whose status is one of *statuses*."""
