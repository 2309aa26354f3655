"""
razvivayka/core/errors.py

Purpose: HTTP error envelope

Every failure leaves the API as {"error", "code", "details"} so the
companion web app has one shape to handle.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from razvivayka.core.config import settings
from razvivayka.core.exceptions import RazvivaykaError
from razvivayka.core.logging import get_logger
from razvivayka.schemas.response import ErrorResponse

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."


def error_response(status_code: int, error: str, code: str, details: Optional[Any] = None) -> JSONResponse:
    envelope = ErrorResponse(error=error, code=code, details=details)
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


async def handle_service_error(request: Request, exc: RazvivaykaError) -> JSONResponse:
    """
    Domain errors carry their own status and code.
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}")
    return error_response(exc.status_code, exc.message, exc.code, exc.details)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown routes and webhook token rejections land here
    return error_response(exc.status_code, str(exc.detail), "HTTP_ERROR")


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(422, "Input validation failed", "VALIDATION_ERROR", jsonable_encoder(exc.errors()))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        extra={"client": request.client.host if request.client else "unknown"},
        exc_info=True,
    )
    message = INTERNAL_ERROR_MESSAGE if settings.is_production else str(exc)
    return error_response(500, message, "INTERNAL_ERROR")


def add_exception_handlers(app: FastAPI):
    """
    Registers the envelope handlers with the FastAPI app.
    """
    app.add_exception_handler(RazvivaykaError, handle_service_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
