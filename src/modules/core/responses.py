"""Helpers shared by the API views for error payloads.

Every error answer has the shape ``{"detail": "<message>"}``.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework.response import Response

_VALUE_ERROR_PREFIX = "Value error, "


def error_response(message: str, status_code: int) -> Response:
    return Response({"detail": message}, status=status_code)


def dto_error_message(exc: PydanticValidationError) -> str:
    """First error of a DTO validation failure, without Pydantic's prefix."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    message = errors[0]["msg"]
    if message.startswith(_VALUE_ERROR_PREFIX):
        return message[len(_VALUE_ERROR_PREFIX):]
    return message
