"""Mapping of domain errors to HTTP responses."""

from typing import Any

import structlog
from rest_framework import status
from rest_framework.response import Response

from tickets.domain.errors import DomainError, ErrorCode

logger = structlog.get_logger(__name__)

STATUS_BY_CODE = {
    ErrorCode.ENCODING_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TICKET_KEY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PURCHASE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PURCHASE_NOT_COMPLETED: status.HTTP_409_CONFLICT,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError, **details: Any) -> Response:
    """Return a response carrying the error code, user-safe message and any details."""
    http_status = STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.info("domain_error", code=error.code.value, status=http_status)
    return Response(
        {"error": {"code": error.code.value, "message": error.message, **details}},
        status=http_status,
    )
