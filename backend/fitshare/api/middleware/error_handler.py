"""
Error Handler Middleware

Global exception handling for the API.

Provides consistent error responses across all endpoints by catching
exceptions and converting them to the standard envelope.

Error Response Format:
======================
    {
        "success": false,
        "message": "Validation failed",
        "code": "VALIDATION_ERROR",
        "errors": ["content: String should have at least 1 character"]
    }

Exception Handling:
===================
1. FitShareException subclasses → their status_code and to_dict()
2. RequestValidationError / pydantic ValidationError → 400 with "field: message" errors
3. Starlette HTTPException → status passthrough (404 for unknown routes, 405, ...)
4. Other exceptions → 500 with generic message (details logged, not exposed)

Usage:
======
    from fitshare.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitshare.shared.core.exceptions import FitShareException
from fitshare.shared.core.logging import logger

# Location prefixes FastAPI adds that mean nothing to a client
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie", "form"}


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> list[str]:
    """
    Flatten pydantic error dicts into "field: message" strings.

    Example:
        [{"loc": ("body", "content"), "msg": "Field required"}]
        → ["content: Field required"]
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS]
        field = ".".join(loc) or "request"
        formatted.append(f"{field}: {error.get('msg', 'Invalid value')}")
    return formatted


def _validation_response(errors: list[str]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(FitShareException)
    async def fitshare_exception_handler(
        request: Request,
        exc: FitShareException,
    ) -> JSONResponse:
        """
        Handle application exceptions.

        All custom exceptions inherit from FitShareException and include:
        - status_code: HTTP status code
        - error_code: Machine-readable error code
        - message: Human-readable message
        """
        logger.warning(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Request body, query or path parameters failed validation."""
        errors = format_validation_errors(exc.errors())
        logger.warning("Validation error", errors=errors, path=request.url.path)
        return _validation_response(errors)

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """
        Handle Pydantic validation errors raised inside handlers.

        These occur when a multipart `payload` field doesn't match its schema.
        """
        errors = format_validation_errors(exc.errors())
        logger.warning("Validation error", errors=errors, path=request.url.path)
        return _validation_response(errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )
