"""Map domain exceptions to HTTP error responses"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from credit_service.domain.exceptions import (
    CreditNotFound,
    ReportGenerationError,
    StorageError,
    ValidationError,
)
from credit_service.infrastructure.observability.metrics import storage_failures_counter


def _error_response(status: HTTPStatus, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.value,
        content={
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "status": status.value,
            "error": status.phrase,
            "message": message,
        },
    )


async def credit_not_found_handler(request: Request, exc: CreditNotFound) -> JSONResponse:
    return _error_response(HTTPStatus.NOT_FOUND, str(exc))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(HTTPStatus.BAD_REQUEST, str(exc))


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    storage_failures_counter.inc()
    logging.error(f"Storage error: {exc}", extra={"request_id": getattr(request.state, "request_id", "unknown")})
    return _error_response(HTTPStatus.SERVICE_UNAVAILABLE, "Storage unavailable, please retry later")


async def report_error_handler(request: Request, exc: ReportGenerationError) -> JSONResponse:
    return _error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Starlette picks the handler of the nearest class in the exception's MRO"""
    app.add_exception_handler(CreditNotFound, credit_not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(ReportGenerationError, report_error_handler)
