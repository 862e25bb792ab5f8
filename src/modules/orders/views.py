"""Order API views.

Exposes the ``CheckoutService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; generic exceptions are never swallowed here.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny, BasePermission, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.orders.dtos import PlaceOrderDTO
from modules.orders.exceptions import (
    InsufficientStock,
    InvalidOrderRequest,
    OrderNotFound,
    TransactionFailed,
)
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer
from modules.orders.services import CheckoutService, OrderQueryService
from modules.orders.unit_of_work import DjangoCheckoutUnitOfWork


class OrderViewSet(GenericViewSet):
    """ViewSet for checkout and order look-up.

    Checkout is public; reading an order back requires a bearer token.
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._checkout = CheckoutService(unit_of_work_factory=DjangoCheckoutUnitOfWork)
        self._orders = OrderQueryService(order_repository=OrderDjangoRepository())

    def get_permissions(self) -> list[BasePermission]:
        if self.action == "create":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        self.throttle_scope = "checkout" if self.action == "create" else None
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/orders

        Body: ``{customerName, address, items: [{productId, quantity}]}``.
        Returns ``{success, orderId, total}``; ``total`` is a decimal string.
        """
        try:
            dto = PlaceOrderDTO.from_payload(request.data)
        except InvalidOrderRequest as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            placed = self._checkout.place_order(dto)
        except InsufficientStock as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)
        except TransactionFailed as exc:
            return error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {
                "success": True,
                "orderId": placed.order_id,
                "total": str(placed.total),
            },
            status=status.HTTP_200_OK,
        )

    # ------------------------------------------------------------------
    # Retrieve
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/orders/{pk}"""
        try:
            order = self._orders.get_order(int(pk or ""))
        except (ValueError, OrderNotFound):
            return error_response("Order not found.", status.HTTP_404_NOT_FOUND)
        serializer = OrderSerializer(order)
        return Response({"success": True, "data": serializer.data})
