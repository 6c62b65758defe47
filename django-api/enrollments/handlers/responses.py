"""Response envelope and error mapping.

Every response has the shape `{success, data, ...}`; failures carry
`{success: false, error, code}` and never expose internal details.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from enrollments.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ENROLLMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TRAINING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CAPACITY_FULL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ALREADY_APPROVED: status.HTTP_400_BAD_REQUEST,
}


def success(data, status_code: int = status.HTTP_200_OK, **extra) -> Response:
    return Response({"success": True, **extra, "data": data}, status=status_code)


def paged(page, data, **extra) -> Response:
    return success(
        data,
        count=len(page.items),
        total=page.total,
        totalPages=page.total_pages,
        currentPage=page.pagination.page,
        **extra,
    )


def failure(message: str, status_code: int, code: str | None = None) -> Response:
    body = {"success": False, "error": message}
    if code:
        body["code"] = code
    return Response(body, status=status_code)


def domain_error_response(exc: DomainError) -> Response:
    return failure(exc.message, ERROR_STATUS[exc.code], exc.code.value)


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        if "detail" in detail:
            return _first_message(detail["detail"])
        field, value = next(iter(detail.items()))
        return f"{field}: {_first_message(value)}"
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)


def envelope_exception_handler(exc, context):
    """DRF exception handler wrapping every handled error in the envelope."""
    if isinstance(exc, DomainError):
        logger.info("Request refused: %s", exc)
        return domain_error_response(exc)
    response = exception_handler(exc, context)
    if response is None:
        return None
    response.data = {
        "success": False,
        "error": _first_message(response.data),
    }
    return response
