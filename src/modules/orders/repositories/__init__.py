"""Order persistence gateway: contract plus the Django ORM implementation."""

from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    order_to_domain,
)
from modules.orders.repositories.interfaces import IOrderRepository

__all__ = ["IOrderRepository", "OrderDjangoRepository", "order_to_domain"]
