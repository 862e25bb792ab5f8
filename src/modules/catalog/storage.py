"""Product image storage.

Thin wrapper over Django's storage API: the configured ``default``
storage backend (local filesystem, in-memory for tests, or any
object-storage backend plugged into ``STORAGES``) holds the files, this
module only decides names and validates uploads.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Optional

import structlog
from django.core.files.storage import Storage, default_storage
from django.core.files.uploadedfile import UploadedFile

from modules.catalog.exceptions import ImageUploadFailed, InvalidProductImage

logger = structlog.get_logger(__name__)

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class StoredImage:
    name: str
    url: str


class ProductImageStorage:
    """Stores product images under ``products/`` and returns their public URL."""

    folder = "products"

    def __init__(self, storage: Optional[Storage] = None) -> None:
        self._storage = storage or default_storage

    @classmethod
    def build_name(cls, original_name: str) -> str:
        """``products/prod_<epoch millis>_<name with whitespace as _>``."""
        millis = int(time.time() * 1000)
        safe_name = _WHITESPACE.sub("_", original_name)
        return f"{cls.folder}/prod_{millis}_{safe_name}"

    def validate(self, image: Optional[UploadedFile]) -> UploadedFile:
        if image is None:
            raise InvalidProductImage("Product image is required.")
        content_type = getattr(image, "content_type", "") or ""
        if not content_type.startswith("image/"):
            raise InvalidProductImage(
                f"File '{image.name}' is not an image ({content_type or 'unknown type'})."
            )
        return image

    def upload(self, image: UploadedFile) -> StoredImage:
        name = self.build_name(image.name or "image")
        try:
            saved_name = self._storage.save(name, image)
            url = self._storage.url(saved_name)
        except Exception as exc:
            logger.error("product_image.upload_failed", name=name, error=str(exc))
            raise ImageUploadFailed(f"Could not store image '{image.name}'.") from exc
        logger.info("product_image.uploaded", name=saved_name, size=image.size)
        return StoredImage(name=saved_name, url=url)

    def delete(self, name: str) -> None:
        self._storage.delete(name)
        logger.info("product_image.deleted", name=name)
