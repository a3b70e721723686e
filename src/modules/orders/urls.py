"""Order URL configuration.

Besides the CRUD routes the router exposes the ``items``, ``status``,
``advance`` and ``monitor`` actions declared on ``OrderViewSet``.
"""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.orders.views import OrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("orders", OrderViewSet, basename="order")

urlpatterns = router.urls
