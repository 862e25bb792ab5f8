"""Catalog API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Reading the catalog is public; uploading a product requires a bearer
token.  Domain exceptions are caught and translated into appropriate
HTTP status codes; generic exceptions are never swallowed here.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, BasePermission, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.dtos import CreateProductDTO
from modules.catalog.exceptions import (
    CategoryNotFound,
    ImageUploadFailed,
    InvalidProductImage,
    ProductNotFound,
)
from modules.catalog.filters import ProductFilter
from modules.catalog.models import Product
from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.catalog.serializers import ProductSerializer
from modules.catalog.services import ProductService
from modules.catalog.storage import ProductImageStorage
from modules.core.exceptions import describe_validation_error, error_response


class ProductViewSet(GenericViewSet):
    """ViewSet for the product catalog.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend]
    parser_classes = [MultiPartParser, FormParser]
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            image_storage=ProductImageStorage(),
        )

    def get_permissions(self) -> list[BasePermission]:
        if self.action == "create":
            return [IsAuthenticated()]
        return [AllowAny()]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_products()

    def list(self, request: Request) -> Response:
        """GET /api/products

        Newest products first.  Filtering (name, category, price range,
        in_stock) is handled by ``ProductFilter``.
        """
        queryset = self.filter_queryset(self.get_queryset())
        serializer = ProductSerializer(queryset, many=True)
        return Response({"success": True, "data": serializer.data})

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        try:
            product = self._service.get_product(int(pk or ""))
        except (ValueError, ProductNotFound):
            return error_response("Product not found.", status.HTTP_404_NOT_FOUND)
        serializer = ProductSerializer(product)
        return Response({"success": True, "data": serializer.data})

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products (multipart, bearer token required)"""
        data = request.data

        try:
            dto = CreateProductDTO(
                name=data.get("name", ""),
                description=data.get("description", ""),
                price=data.get("price"),
                stock=data.get("stock"),
                category_id=data.get("categoryId"),
            )
        except PydanticValidationError as exc:
            return error_response(
                describe_validation_error(exc), status.HTTP_400_BAD_REQUEST
            )

        try:
            product = self._service.create_product(dto, request.FILES.get("image"))
        except (InvalidProductImage, CategoryNotFound) as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)
        except ImageUploadFailed as exc:
            return error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {
                "success": True,
                "message": "Product saved.",
                "productId": product.id,
                "imageUrl": product.image_url,
            },
            status=status.HTTP_200_OK,
        )
