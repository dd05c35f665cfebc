"""
Global exception handlers for the matching API.

Every error response uses the same envelope:
``{"error": CODE, "message": str, "status": int, "timestamp": iso8601}``.

- MatchingError (domain) → its own code and HTTP status
- RequestValidationError → 400 VALIDATION_ERROR with per-field details
- Exception (catch-all) → 500 INTERNAL_ERROR, no internal details
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import DuplicateSwipe, MatchingError
from app.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_matching_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[list[dict[str, Any]]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=code,
        message=message,
        status=status_code,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _register_matching_error_handler(app: FastAPI) -> None:
    @app.exception_handler(MatchingError)
    async def matching_error_handler(request: Request, exc: MatchingError):
        if exc.http_status >= 500:
            logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_ERROR",
                "An internal error occurred",
            )

        # Duplicate swipes are routine under concurrent use
        log = logger.info if isinstance(exc, DuplicateSwipe) else logger.warning
        log(f"{exc.code} on {request.url.path}: {exc.message}")
        return error_response(exc.http_status, exc.code, exc.message)


def _register_validation_error_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in jsonable_encoder(exc.errors())
        ]
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            "Invalid request data",
            details=details,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "An internal error occurred",
        )
