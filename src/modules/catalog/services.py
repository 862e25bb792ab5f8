"""Catalog service layer (Use Cases).

Orchestrates product upload and catalog reads, delegating persistence to
the injected ``IProductRepository`` and file handling to
``ProductImageStorage``.

Business rules enforced here:
- Every product is created with an image; the image is stored first and
  removed again if the product row cannot be written.
- A referenced category must exist.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import DatabaseError, transaction

from modules.catalog.exceptions import CategoryNotFound, ProductNotFound

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile
    from django.db.models import QuerySet

    from modules.catalog.dtos import CreateProductDTO
    from modules.catalog.models import Product
    from modules.catalog.repositories.interfaces import IProductRepository
    from modules.catalog.storage import ProductImageStorage

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for catalog use-cases.

    Receives its collaborators via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        image_storage: ProductImageStorage,
    ) -> None:
        self._repo = repository
        self._images = image_storage

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(
        self, dto: CreateProductDTO, image: Optional[UploadedFile]
    ) -> Product:
        """Store the product image, then insert the product.

        Raises:
            InvalidProductImage: image missing or not an image.
            CategoryNotFound: ``category_id`` references no category.
            ImageUploadFailed: the storage backend rejected the file.
        """
        log = logger.bind(name=dto.name)
        image = self._images.validate(image)

        if dto.category_id is not None and not self._repo.category_exists(
            dto.category_id
        ):
            raise CategoryNotFound(f"Category {dto.category_id} not found.")

        stored = self._images.upload(image)
        try:
            with transaction.atomic(using=self._repo.using):
                product = self._repo.insert(
                    {
                        "name": dto.name,
                        "description": dto.description,
                        "price": dto.price,
                        "stock": dto.stock,
                        "category_id": dto.category_id,
                        "image_url": stored.url,
                    }
                )
        except DatabaseError:
            log.error("product.insert_failed", image=stored.name)
            self._images.delete(stored.name)
            raise

        log.info("product.created", product_id=product.id, image_url=stored.url)
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """Return products newest first, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
