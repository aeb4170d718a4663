"""
JSON error envelope shared by every service.

All failures leave a service as ``{"success": false, "message": ..., "error": ...}``
with ``error`` present only when there is an underlying cause to report.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Semua field wajib diisi"
INVALID_DATA_MESSAGE = "Data tidak valid"
INTERNAL_ERROR_MESSAGE = "Internal server error"

# Pydantic error types that mean "field absent or empty"
_MISSING_ERROR_TYPES = {"missing", "string_too_short", "too_short"}


class ServiceError(Exception):
    """
    Error raised by route code and rendered as the failure envelope.

    Attributes:
        status_code (int): HTTP status of the response
        message (str): Human-readable summary
        error (str): Underlying cause (store or upstream message), optional
    """

    def __init__(self, status_code: int, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error


def error_body(message: str, error: Optional[str] = None) -> dict:
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return body


def store_error(message: str, exc: SQLAlchemyError) -> ServiceError:
    """
    Wrap a store failure into a 500 ServiceError carrying the driver message.

    Args:
        message: Summary for the failed operation (e.g. "Error creating user")
        exc: The SQLAlchemy exception

    Returns:
        ServiceError with status 500
    """
    cause = getattr(exc, "orig", None) or exc
    logger.error(f"{message}: {cause}")
    return ServiceError(500, message, error=str(cause))


def describe_validation_error(exc: RequestValidationError) -> ServiceError:
    errors = exc.errors()
    missing = any(err.get("type") in _MISSING_ERROR_TYPES for err in errors)
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in errors
    )
    return ServiceError(400, MISSING_FIELDS_MESSAGE if missing else INVALID_DATA_MESSAGE, error=details)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.error))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await service_error_handler(request, describe_validation_error(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content=error_body(INTERNAL_ERROR_MESSAGE, str(exc) or exc.__class__.__name__))


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on a FastAPI application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
