"""Catalog DRF serializers for API output.

Field names follow the storefront client's camelCase convention.
Product uploads are validated by ``CreateProductDTO`` instead.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.catalog.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    imageUrl = serializers.CharField(source="image_url", read_only=True)
    categoryId = serializers.IntegerField(source="category_id", read_only=True)
    categoryName = serializers.CharField(
        source="category.name", read_only=True, default=None
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "stock",
            "imageUrl",
            "categoryId",
            "categoryName",
        ]
        read_only_fields = fields
