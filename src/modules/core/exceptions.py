"""Project-wide DRF exception handler.

Every API error leaves the service in the same envelope the storefront
client expects: ``{"success": false, "message": "..."}``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def error_response(message: str, status_code: int) -> Response:
    """Build the standard failure payload."""
    return Response({"success": False, "message": message}, status=status_code)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Reshape DRF's error responses into the storefront envelope.

    Exceptions DRF does not handle (``None``) propagate to Django unchanged.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    message = _flatten_detail(response.data)
    logger.info(
        "api.request_rejected",
        status_code=response.status_code,
        error=exc.__class__.__name__,
    )
    response.data = {"success": False, "message": message}
    return response


def _flatten_detail(data: Any) -> str:
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        return "; ".join(f"{field}: {_flatten_detail(value)}" for field, value in data.items())
    if isinstance(data, list):
        return " ".join(_flatten_detail(item) for item in data)
    return str(data)


def describe_validation_error(exc: PydanticValidationError) -> str:
    """One-line, client-facing summary of a Pydantic validation error."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"]
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)
