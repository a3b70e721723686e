"""Catalog API views.

Exposes ``CategoryService`` and ``ProductService`` via HTTP using DRF
ViewSets.  Domain exceptions are caught and translated into appropriate
HTTP status codes; the views never swallow generic exceptions.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.catalog.dtos import (
    CategoryOutputDTO,
    CreateCategoryDTO,
    CreateProductDTO,
    ProductOutputDTO,
    UpdateCategoryDTO,
    UpdateProductDTO,
)
from modules.catalog.exceptions import (
    CategoryAlreadyExists,
    CategoryNotFound,
    ProductNotFound,
)
from modules.catalog.repositories.django_repository import (
    CategoryDjangoRepository,
    ProductDjangoRepository,
)
from modules.catalog.services import CategoryService, ProductService
from modules.core.responses import dto_error_message, error_response


class CategoryViewSet(ViewSet):
    """ViewSet for Category CRUD operations.

    All ORM access goes through the service/repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CategoryService(repository=CategoryDjangoRepository())

    @staticmethod
    def _out(category) -> dict:
        return CategoryOutputDTO.from_entity(category).model_dump(mode="json")

    def list(self, request: Request) -> Response:
        """GET /api/v1/categories/"""
        return Response([self._out(c) for c in self._service.list_categories()])

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/categories/{pk}/"""
        try:
            category = self._service.get_category(pk)
        except CategoryNotFound:
            return error_response("Category not found.", status.HTTP_404_NOT_FOUND)
        return Response(self._out(category))

    @action(detail=False, methods=["get"], url_path="by-name")
    def by_name(self, request: Request) -> Response:
        """GET /api/v1/categories/by-name/?name=<name>"""
        name = request.query_params.get("name", "")
        try:
            category = self._service.get_category_by_name(name)
        except CategoryNotFound:
            return error_response("Category not found.", status.HTTP_404_NOT_FOUND)
        return Response(self._out(category))

    def create(self, request: Request) -> Response:
        """POST /api/v1/categories/"""
        try:
            dto = CreateCategoryDTO(
                name=request.data.get("name"),
                is_active=request.data.get("is_active", True),
            )
        except PydanticValidationError as exc:
            return error_response(dto_error_message(exc), status.HTTP_400_BAD_REQUEST)

        try:
            category = self._service.create_category(dto)
        except CategoryAlreadyExists as exc:
            return error_response(str(exc), status.HTTP_409_CONFLICT)

        return Response(self._out(category), status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/categories/{pk}/"""
        try:
            dto = UpdateCategoryDTO(
                name=request.data.get("name"),
                is_active=request.data.get("is_active"),
            )
        except PydanticValidationError as exc:
            return error_response(dto_error_message(exc), status.HTTP_400_BAD_REQUEST)

        try:
            category = self._service.update_category(pk, dto)
        except CategoryNotFound:
            return error_response("Category not found.", status.HTTP_404_NOT_FOUND)
        except CategoryAlreadyExists as exc:
            return error_response(str(exc), status.HTTP_409_CONFLICT)

        return Response(self._out(category))

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/categories/{pk}/"""
        try:
            self._service.delete_category(pk)
        except CategoryNotFound:
            return error_response("Category not found.", status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    ``GET /products/?category=<id>`` lists the products of one category.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            category_repository=CategoryDjangoRepository(),
        )

    @staticmethod
    def _out(product) -> dict:
        return ProductOutputDTO.from_entity(product).model_dump(mode="json")

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        products = self._service.list_products(request.query_params.get("category"))
        return Response([self._out(p) for p in products])

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return error_response("Product not found.", status.HTTP_404_NOT_FOUND)
        return Response(self._out(product))

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        data = request.data
        try:
            dto = CreateProductDTO(
                name=data.get("name"),
                price=data.get("price"),
                category_id=data.get("category_id"),
                description=data.get("description", ""),
                is_active=data.get("is_active", True),
            )
        except PydanticValidationError as exc:
            return error_response(dto_error_message(exc), status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.create_product(dto)
        except CategoryNotFound as exc:
            return error_response(str(exc), status.HTTP_404_NOT_FOUND)

        return Response(self._out(product), status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/"""
        data = request.data
        try:
            dto = UpdateProductDTO(
                name=data.get("name"),
                description=data.get("description"),
                price=data.get("price"),
                is_active=data.get("is_active"),
                category_id=data.get("category_id"),
            )
        except PydanticValidationError as exc:
            return error_response(dto_error_message(exc), status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound:
            return error_response("Product not found.", status.HTTP_404_NOT_FOUND)
        except CategoryNotFound as exc:
            return error_response(str(exc), status.HTTP_404_NOT_FOUND)

        return Response(self._out(product))

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return error_response("Product not found.", status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
