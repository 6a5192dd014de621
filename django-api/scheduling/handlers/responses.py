"""Response envelope and error mapping for the HTTP boundary.

Every response body has the shape ``{"success", "message", "data"}``.
"""

import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from scheduling.domain import errors

logger = logging.getLogger(__name__)


def api_response(status_code: int, success: bool, message: str, data=None) -> Response:
    return Response(
        {"success": success, "message": message, "data": data},
        status=status_code,
    )


def status_for(error: errors.DomainError) -> int:
    if isinstance(error, errors.ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, errors.NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, errors.ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _describe(data) -> str:
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return "Invalid request"


def exception_handler(exc, context):
    """DRF exception handler that renders every failure as an envelope.

    Domain validation and not-found errors are expected outcomes and are not
    logged as errors. Anything unexpected is logged with its traceback and
    returned as a generic 500.
    """
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "unknown"

    if isinstance(exc, errors.DomainError):
        code = status_for(exc)
        if code >= 500:
            logger.error("Domain error in %s: %s", view_name, exc)
        else:
            logger.info("%s rejected request: %s", view_name, exc)
        return api_response(code, False, exc.message)

    response = drf_exception_handler(exc, context)
    if response is not None:
        logger.info("%s rejected request: %s", view_name, exc)
        data = None if isinstance(response.data, dict) and "detail" in response.data else {
            "errors": response.data
        }
        envelope = api_response(response.status_code, False, _describe(response.data), data)
        for header in ("Allow", "WWW-Authenticate", "Retry-After"):
            if header in response:
                envelope[header] = response[header]
        return envelope

    logger.exception("Unhandled error in %s", view_name)
    return api_response(status.HTTP_500_INTERNAL_SERVER_ERROR, False, "Internal Server Error")


def not_found(request, exception=None) -> JsonResponse:
    return JsonResponse(
        {"success": False, "message": "Route not found", "data": None},
        status=status.HTTP_404_NOT_FOUND,
    )


def server_error(request) -> JsonResponse:
    return JsonResponse(
        {"success": False, "message": "Internal Server Error", "data": None},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
