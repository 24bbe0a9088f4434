"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import FitmyphoneException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "REAUTHENTICATION_REQUIRED": 401,
    "PERMISSION_DENIED": 403,
    "ACCOUNT_SUSPENDED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "USER_ALREADY_EXISTS": 409,
    "CATEGORY_ALREADY_EXISTS": 409,
    "MASTER_MODEL_ALREADY_EXISTS": 409,
    "CONTRIBUTION_ALREADY_REVIEWED": 409,
    "DOCUMENT_EXISTS": 409,
    "TRANSACTION_ABORTED": 409,
    "SEARCH_TERM_TOO_SHORT": 422,
    "STORE_PERMISSION_DENIED": 502,
    "SUGGESTION_SERVICE_ERROR": 502,
    "UPSTREAM_SERVICE_ERROR": 502,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: FitmyphoneException) -> int:
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _fitmyphone_exception_handler(
    request: Request, exc: FitmyphoneException
) -> JSONResponse:
    """Return JSON from FitmyphoneException.to_dict() with the mapped status code."""
    status = status_for(exc)
    if status >= 500:
        logger.error(
            "%s %s failed: %s %s", request.method, request.url.path, exc.error_code, exc.details
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """pydantic error dicts without the ctx objects (they may hold exceptions)."""
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: FitmyphoneException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(FitmyphoneException, _fitmyphone_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
