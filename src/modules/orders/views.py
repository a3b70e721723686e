"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from typing import Callable

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.catalog.repositories.django_repository import (
    CategoryDjangoRepository,
    ProductDjangoRepository,
)
from modules.clients.directory import default_client_directory
from modules.clients.exceptions import ClientApiError, ClientNotFound
from modules.core.pagination import PageRequest
from modules.core.responses import dto_error_message, error_response
from modules.orders.constants import OrderStatus
from modules.orders.dtos import (
    CreateOrderDTO,
    OrderItemInputDTO,
    OrderMonitorDTO,
    OrderOutputDTO,
    UpdateOrderDTO,
)
from modules.orders.exceptions import (
    IllegalOrderState,
    OrderNotFound,
    OrderValidationError,
)
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    UpdateOrderItemsSerializer,
    UpdateOrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService

ORDER_NOT_FOUND = "Order not found."

# Filters forwarded to OrderFilter besides ``status``.
EXTRA_FILTERS = ("client", "start_date", "end_date", "min_total", "max_total")


class OrderViewSet(ViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).  All ORM access
    goes through the service/repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            category_repository=CategoryDjangoRepository(),
            client_directory=default_client_directory(),
        )

    def _out(self, order) -> dict:
        dto = OrderOutputDTO.from_entity(order, self._service.remaining_time(order))
        return dto.model_dump(mode="json")

    def _run(
        self,
        command: Callable[[], object],
        success_status: int = status.HTTP_200_OK,
    ) -> Response:
        """Execute a service command and map domain errors to HTTP answers."""
        try:
            order = command()
        except OrderNotFound:
            return error_response(ORDER_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        except ClientNotFound as exc:
            return error_response(str(exc), status.HTTP_404_NOT_FOUND)
        except (OrderValidationError, IllegalOrderState) as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)
        except ClientApiError as exc:
            return error_response(str(exc), status.HTTP_502_BAD_GATEWAY)
        return Response(self._out(order), status=success_status)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = CreateOrderDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return error_response(dto_error_message(exc), status.HTTP_400_BAD_REQUEST)

        return self._run(
            lambda: self._service.create(dto.to_entity()),
            success_status=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?status=SENT&status=READY&page=1&size=20

        Without ``status`` every order is listed, newest first.  The other
        ``OrderFilter`` params (client, date range, total range) narrow it.
        """
        try:
            page_request = PageRequest.from_request(request)
            statuses = [
                OrderStatus(value) for value in request.query_params.getlist("status")
            ]
        except ValueError:
            return error_response("Invalid query parameters.", status.HTTP_400_BAD_REQUEST)

        filters = {
            key: request.query_params[key]
            for key in EXTRA_FILTERS
            if key in request.query_params
        }
        try:
            if statuses and not filters:
                page = self._service.find_all_by_status(statuses, page_request)
            else:
                if statuses:
                    filters["status"] = [str(s) for s in statuses]
                page = self._service.find_all(page_request, filters or None)
        except ValueError as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        return Response(page.map(self._out).to_payload())

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        return self._run(lambda: self._service.find_by_id(pk))

    @action(detail=False, methods=["get"])
    def monitor(self, request: Request) -> Response:
        """GET /api/v1/orders/monitor/"""
        try:
            page_request = PageRequest.from_request(request)
        except ValueError:
            return error_response("Invalid query parameters.", status.HTTP_400_BAD_REQUEST)

        page = self._service.monitor(page_request).map(
            lambda entry: OrderMonitorDTO.from_entity(*entry).model_dump(mode="json")
        )
        return Response(page.to_payload())

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/"""
        serializer = UpdateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = UpdateOrderDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return error_response(dto_error_message(exc), status.HTTP_400_BAD_REQUEST)

        return self._run(lambda: self._service.update(pk, dto))

    @action(detail=True, methods=["put"])
    def items(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/items/"""
        serializer = UpdateOrderItemsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        items = [
            OrderItemInputDTO(**item).to_entity()
            for item in serializer.validated_data["items"]
        ]
        return self._run(lambda: self._service.update_items(pk, items))

    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status/"""
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        new_status = OrderStatus(serializer.validated_data["status"])
        return self._run(lambda: self._service.update_status(pk, new_status))

    @action(detail=True, methods=["post"])
    def advance(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/advance/

        Answers with the order id and its new status only.
        """
        try:
            order = self._service.advance_status(pk)
        except OrderNotFound:
            return error_response(ORDER_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        except IllegalOrderState as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)
        return Response({"id": str(order.id), "status": str(order.status)})

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        try:
            self._service.delete(pk)
        except OrderNotFound:
            return error_response(ORDER_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
