# backend/api/exceptions.py
import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class NotFoundError(APIException):
    """Entity or stored file that does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"

    def __init__(self, entity, field, value):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} not found with {field}: {value}")


class DuplicateKeyError(APIException):
    """Create/update would break a uniqueness invariant. Caller mistake, never retried."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "duplicate_key"

    def __init__(self, entity, key):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} already exists")


class StorageIOError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "storage_error"

    def __init__(self, operation, name, cause=None):
        self.operation = operation
        self.name = name
        self.cause = cause
        super().__init__(f"Could not {operation} file {name}")


def exception_handler(exc, context):
    """Log API failures, then let DRF build the response."""
    response = drf_exception_handler(exc, context)
    view = context.get("view")
    where = type(view).__name__ if view is not None else "-"
    if response is None:
        logger.exception("Unhandled error in %s", where)
    elif response.status_code >= 500:
        logger.error("%s in %s: %s", type(exc).__name__, where, exc)
    else:
        logger.warning("%s in %s: %s", type(exc).__name__, where, exc)
    return response
