import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _flatten(data):
    """Collapse DRF error payloads into one human readable sentence."""
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        parts = []
        for field, value in data.items():
            if field == "non_field_errors":
                parts.append(_flatten(value))
            else:
                parts.append(f"{field}: {_flatten(value)}")
        return " ".join(parts)
    if isinstance(data, (list, tuple)):
        return " ".join(_flatten(item) for item in data)
    return str(data)


def api_exception_handler(exc, context):
    """
    Render every API error as {"success": false, "message": ...}.

    Anything DRF does not know how to handle is logged with its traceback and
    reported as a generic 500 so store errors never reach the client.
    """
    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(exc.messages)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
            exc_info=exc,
        )
        return Response(
            {"success": False, "message": "Internal server error."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response.data = {"success": False, "message": _flatten(response.data)}
    return response
