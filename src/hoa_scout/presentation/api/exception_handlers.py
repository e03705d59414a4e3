"""Exception handlers turning domain errors into JSON responses.

Every error body has the same shape::

    {"detail": "HOA not found", "code": "HOA_NOT_FOUND"}

The enrichment endpoint reports failures in its own response model and uses
``status_for_error_code`` directly to pick the status.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hoa_scout.domain.shared.exceptions import DomainException, ErrorCode

logger = logging.getLogger(__name__)

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_QUERY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_LOCATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_HOA_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.HOA_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EXTERNAL_SERVICE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.ANALYSIS_QUEUE_FULL: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.PERSISTENCE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.DISTINCT_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for_error_code(code: ErrorCode | None) -> int:
    """HTTP status for an error code, 500 when unknown or missing."""
    if code is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return ERROR_CODE_TO_STATUS.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _error_body(status_code: int, message: str, code: ErrorCode) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code.value},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the domain and catch-all handlers on ``app``.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        status_code = status_for_error_code(exc.code)
        log = logger.error if status_code >= 500 else logger.warning  # NOQA: PLR2004
        log(
            "%s %s failed with %s: %s %s",
            request.method,
            request.url.path,
            exc.code.value,
            exc.message,
            exc.details,
        )
        return _error_body(status_code, exc.message, exc.code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Hide unexpected errors from clients; the traceback goes to the log."""
        logger.exception(
            "Unhandled error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            ErrorCode.INTERNAL_ERROR,
        )
