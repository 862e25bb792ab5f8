"""Order DRF serializers for API output.

The serializer operates at the Interface layer (API Views).
Checkout input is validated by ``PlaceOrderDTO`` in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order lines with their price snapshot."""

    productId = serializers.IntegerField(source="product_id", read_only=True)
    productName = serializers.CharField(source="product.name", read_only=True)
    priceAtTime = serializers.DecimalField(
        source="price_at_time", max_digits=12, decimal_places=2, read_only=True
    )
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "productId", "productName", "quantity", "priceAtTime", "subtotal"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items."""

    customerName = serializers.CharField(source="customer_name", read_only=True)
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=12, decimal_places=2, read_only=True
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customerName",
            "address",
            "totalAmount",
            "status",
            "createdAt",
            "items",
        ]
        read_only_fields = fields
