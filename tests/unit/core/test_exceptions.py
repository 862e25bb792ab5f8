"""Unit tests for the API error envelope helpers."""

import pytest
from pydantic import BaseModel, ValidationError
from rest_framework.exceptions import NotFound, ValidationError as DRFValidationError

from modules.core.exceptions import (
    api_exception_handler,
    describe_validation_error,
    error_response,
)

pytestmark = pytest.mark.unit


class _Sample(BaseModel):
    name: str
    count: int


class TestErrorResponse:
    def test_envelope(self):
        response = error_response("Nope.", 409)
        assert response.status_code == 409
        assert response.data == {"success": False, "message": "Nope."}


class TestApiExceptionHandler:
    def test_detail_is_flattened(self):
        response = api_exception_handler(NotFound("Missing."), {})
        assert response.status_code == 404
        assert response.data == {"success": False, "message": "Missing."}

    def test_field_errors_are_joined(self):
        response = api_exception_handler(
            DRFValidationError({"name": ["Required."], "count": ["Too small."]}), {}
        )
        assert response.status_code == 400
        assert response.data["message"] == "name: Required.; count: Too small."

    def test_unhandled_exceptions_pass_through(self):
        assert api_exception_handler(RuntimeError("boom"), {}) is None


class TestDescribeValidationError:
    def test_lists_each_field(self):
        with pytest.raises(ValidationError) as exc_info:
            _Sample.model_validate({"count": "x"})

        message = describe_validation_error(exc_info.value)

        assert "name: Field required" in message
        assert "count:" in message
