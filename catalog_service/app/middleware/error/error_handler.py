"""
Error handling for Catalog Service.
Maps service exceptions and framework errors to a standard error body.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.exceptions import CatalogServiceError
from ...utils.logging import setup_catalog_logging

logger = setup_catalog_logging("catalog_service_error_handler")


class CatalogServiceErrorHandler:
    """Centralized error handling for Catalog Service."""

    @staticmethod
    def setup_error_handlers(app: FastAPI) -> None:
        """Register all error handlers on the FastAPI application."""

        @app.exception_handler(CatalogServiceError)
        async def catalog_error_handler(
            request: Request, exc: CatalogServiceError
        ) -> JSONResponse:
            """Handle errors raised by the service layer."""
            if exc.status_code >= 500:
                logger.error(
                    "Catalog service error",
                    extra={
                        "path": request.url.path,
                        "method": request.method,
                        "error_type": exc.error_type,
                        "details": exc.details,
                    },
                    exc_info=exc,
                )
            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=exc.status_code,
                error_type=exc.error_type,
                message=exc.message,
                details=exc.details,
            )

        @app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(
            request: Request, exc: StarletteHTTPException
        ) -> JSONResponse:
            """Handle HTTP exceptions from Starlette/FastAPI."""
            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=exc.status_code,
                error_type="http_error",
                message=str(exc.detail),
            )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(
            request: Request, exc: RequestValidationError
        ) -> JSONResponse:
            """Handle request validation errors."""
            error_details = [
                {
                    "field": ".".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in exc.errors()
            ]
            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=422,
                error_type="validation_error",
                message="Request validation failed",
                details={"validation_errors": error_details},
            )

        @app.exception_handler(ValidationError)
        async def pydantic_validation_exception_handler(
            request: Request, exc: ValidationError
        ) -> JSONResponse:
            """Handle pydantic validation errors raised inside handlers."""
            error_details = [
                {
                    "field": ".".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in exc.errors()
            ]
            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=400,
                error_type="data_validation_error",
                message="Data validation failed",
                details={"validation_errors": error_details},
            )

        @app.exception_handler(Exception)
        async def unhandled_exception_handler(
            request: Request, exc: Exception
        ) -> JSONResponse:
            """Last-resort handler."""
            logger.error(
                "Unhandled exception occurred",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                },
                exc_info=exc,
            )
            return CatalogServiceErrorHandler._create_error_response(
                request=request,
                status_code=500,
                error_type="internal_server_error",
                message="An internal server error occurred",
                details={"exception_type": type(exc).__name__},
            )

    @staticmethod
    def _create_error_response(
        request: Request,
        status_code: int,
        error_type: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        """
        Create a standardized error response.

        Args:
            request: The FastAPI request object
            status_code: HTTP status code
            error_type: Type of error for categorization
            message: Human-readable error message
            details: Additional error details

        Returns:
            JSONResponse with standardized error format
        """
        correlation_id = getattr(request.state, "correlation_id", "unknown")

        error_response: Dict[str, Any] = {
            "success": False,
            "error": {
                "type": error_type,
                "message": message,
                "correlation_id": correlation_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "path": request.url.path,
                "method": request.method,
            },
        }

        if details:
            error_response["error"]["details"] = details

        if status_code < 500:
            logger.warning(
                f"Client error: {error_type}",
                extra={
                    "correlation_id": correlation_id,
                    "status_code": status_code,
                    "error_type": error_type,
                    "path": request.url.path,
                    "method": request.method,
                },
            )

        return JSONResponse(status_code=status_code, content=error_response)


def setup_catalog_error_handling(app: FastAPI) -> None:
    """Setup error handling for Catalog Service."""
    CatalogServiceErrorHandler.setup_error_handlers(app)
    logger.info("Catalog Service error handling configured")
