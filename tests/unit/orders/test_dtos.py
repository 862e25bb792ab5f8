"""
Unit tests for checkout DTO validation.

Malformed requests must be rejected as InvalidOrderRequest before the
store is touched.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.orders.dtos import OrderLineDTO, PlacedOrder, PlaceOrderDTO
from modules.orders.exceptions import InvalidOrderRequest

pytestmark = pytest.mark.unit


def _payload(**overrides):
    payload = {
        "customerName": "Ana",
        "address": "Rua A, 1",
        "items": [{"productId": 1, "quantity": 2}],
    }
    payload.update(overrides)
    return payload


class TestPlaceOrderDTO:
    def test_parses_camel_case_payload(self):
        dto = PlaceOrderDTO.from_payload(_payload())

        assert dto.customer_name == "Ana"
        assert dto.address == "Rua A, 1"
        assert dto.items == [OrderLineDTO(product_id=1, quantity=2)]

    def test_strips_whitespace(self):
        dto = PlaceOrderDTO.from_payload(_payload(customerName="  Ana  "))
        assert dto.customer_name == "Ana"

    def test_ignores_client_prices(self):
        dto = PlaceOrderDTO.from_payload(
            _payload(total="1.00", items=[{"productId": 1, "quantity": 1, "price": "0.01"}])
        )
        assert not hasattr(dto, "total")
        assert not hasattr(dto.items[0], "price")

    def test_keeps_duplicate_products_in_order(self):
        dto = PlaceOrderDTO.from_payload(
            _payload(
                items=[
                    {"productId": 2, "quantity": 1},
                    {"productId": 1, "quantity": 1},
                    {"productId": 2, "quantity": 3},
                ]
            )
        )
        assert [line.product_id for line in dto.items] == [2, 1, 2]

    def test_empty_items_rejected(self):
        with pytest.raises(InvalidOrderRequest, match="at least one item"):
            PlaceOrderDTO.from_payload(_payload(items=[]))

    @pytest.mark.parametrize("field", ["customerName", "address", "items"])
    def test_missing_field_rejected(self, field):
        payload = _payload()
        del payload[field]

        with pytest.raises(InvalidOrderRequest, match=field):
            PlaceOrderDTO.from_payload(payload)

    def test_blank_address_rejected(self):
        with pytest.raises(InvalidOrderRequest, match="address"):
            PlaceOrderDTO.from_payload(_payload(address="   "))

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(InvalidOrderRequest, match="quantity"):
            PlaceOrderDTO.from_payload(
                _payload(items=[{"productId": 1, "quantity": quantity}])
            )

    @pytest.mark.parametrize("quantity", ["2", 1.5, None])
    def test_non_integer_quantity_rejected(self, quantity):
        with pytest.raises(InvalidOrderRequest):
            PlaceOrderDTO.from_payload(
                _payload(items=[{"productId": 1, "quantity": quantity}])
            )

    def test_non_integer_product_id_rejected(self):
        with pytest.raises(InvalidOrderRequest, match="productId"):
            PlaceOrderDTO.from_payload(
                _payload(items=[{"productId": "abc", "quantity": 1}])
            )

    @pytest.mark.parametrize("payload", [None, [], "order", 42])
    def test_non_object_body_rejected(self, payload):
        with pytest.raises(InvalidOrderRequest, match="JSON object"):
            PlaceOrderDTO.from_payload(payload)

    def test_is_frozen(self):
        dto = PlaceOrderDTO.from_payload(_payload())
        with pytest.raises(ValidationError):
            dto.address = "elsewhere"


class TestPlacedOrder:
    def test_holds_id_and_total(self):
        placed = PlacedOrder(order_id=7, total=Decimal("30.00"))
        assert placed.order_id == 7
        assert placed.total == Decimal("30.00")


class TestPlaceOrderDTOLimits:
    def test_customer_name_fits_column(self):
        dto = PlaceOrderDTO.from_payload(_payload(customerName="A" * 256))
        assert len(dto.customer_name) == 256

    def test_customer_name_over_column_rejected(self):
        with pytest.raises(InvalidOrderRequest, match="customerName"):
            PlaceOrderDTO.from_payload(_payload(customerName="A" * 257))
