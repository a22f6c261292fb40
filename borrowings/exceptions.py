from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    NotFound,
    PermissionDenied,
    ValidationError,
)

__all__ = ["NotFound", "Conflict", "Forbidden", "ValidationError", "ServiceBusy"]


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the library."
    default_code = "conflict"


class Forbidden(PermissionDenied):
    default_code = "forbidden"


class ServiceBusy(APIException):
    """The book is locked by another request; safe to retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The library is busy with this book, please try again."
    default_code = "busy"
