"""
Error handling for the flight search service
"""

from datetime import datetime
from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .types import (
    AuthError,
    FlightSearchError,
    NetworkError,
    UpstreamClientError,
    UpstreamServerError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


class ErrorCode:
    """Standard error codes for the flight search service"""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_SEARCH = "INVALID_SEARCH"
    HTTP_ERROR = "HTTP_ERROR"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    AUTH_FAILED = "AUTH_FAILED"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class ErrorHandler:
    """Centralized error response formatting"""

    @staticmethod
    def create_error_response(
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Create standardized error response"""

        error_response = {
            "error": message,
            "error_code": error_code,
            "timestamp": datetime.now().isoformat(),
        }

        if details:
            error_response["details"] = details

        return error_response

    @staticmethod
    def get_user_friendly_message(error_code: str, original_message: Optional[str] = None) -> str:
        """Get user-facing error messages"""

        user_messages = {
            ErrorCode.INVALID_SEARCH: "Invalid search parameters. Please check your airports and dates and try again.",
            ErrorCode.AUTH_FAILED: "Failed to authenticate with the flight data provider.",
            ErrorCode.PROVIDER_ERROR: "The flight data provider is unavailable. Please try again later.",
            ErrorCode.NETWORK_ERROR: "Could not reach the flight data provider. Please try again later.",
            ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
        }

        return user_messages.get(error_code, original_message or user_messages[ErrorCode.INTERNAL_ERROR])


class ExceptionMapper:
    """Map domain exceptions to status codes and error bodies"""

    @staticmethod
    def map_exception(exception: Exception) -> JSONResponse:
        if isinstance(exception, ValidationError):
            status_code = 400
            body = ErrorHandler.create_error_response(
                message=str(exception),
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"fields": exception.fields} if exception.fields else None,
            )

        elif isinstance(exception, UpstreamClientError) and exception.status_code == 400:
            status_code = 400
            body = ErrorHandler.create_error_response(
                message=ErrorHandler.get_user_friendly_message(ErrorCode.INVALID_SEARCH),
                error_code=ErrorCode.INVALID_SEARCH,
            )

        elif isinstance(exception, AuthError):
            status_code = 500
            body = ErrorHandler.create_error_response(
                message=ErrorHandler.get_user_friendly_message(ErrorCode.AUTH_FAILED),
                error_code=ErrorCode.AUTH_FAILED,
            )

        elif isinstance(exception, NetworkError):
            status_code = 500
            body = ErrorHandler.create_error_response(
                message=ErrorHandler.get_user_friendly_message(ErrorCode.NETWORK_ERROR),
                error_code=ErrorCode.NETWORK_ERROR,
            )

        elif isinstance(exception, (UpstreamClientError, UpstreamServerError)):
            status_code = 500
            body = ErrorHandler.create_error_response(
                message=ErrorHandler.get_user_friendly_message(ErrorCode.PROVIDER_ERROR),
                error_code=ErrorCode.PROVIDER_ERROR,
                details={"upstream_status": exception.status_code},
            )

        else:
            # Generic internal server error
            status_code = 500
            body = ErrorHandler.create_error_response(
                message=ErrorHandler.get_user_friendly_message(ErrorCode.INTERNAL_ERROR),
                error_code=ErrorCode.INTERNAL_ERROR,
                details={"exception_type": type(exception).__name__},
            )

        return JSONResponse(status_code=status_code, content=body)


async def search_exception_handler(request: Request, exc: FlightSearchError) -> JSONResponse:
    """Handler for domain exceptions raised by search endpoints"""

    log = logger.warning if isinstance(exc, ValidationError) else logger.error
    log(
        "Search request failed",
        error_type=type(exc).__name__,
        error_message=str(exc),
        url=str(request.url),
        method=request.method,
    )
    return ExceptionMapper.map_exception(exc)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled exceptions"""

    logger.exception(
        "Unhandled error",
        error_type=type(exc).__name__,
        url=str(request.url),
        method=request.method,
    )
    return ExceptionMapper.map_exception(exc)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for HTTP exceptions"""

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorHandler.create_error_response(
            message=str(exc.detail),
            error_code=ErrorCode.HTTP_ERROR if exc.status_code < 500 else ErrorCode.INTERNAL_ERROR,
        ),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for request validation exceptions"""

    logger.warning(
        "Request validation failed",
        error=str(exc),
        url=str(request.url),
    )

    return JSONResponse(
        status_code=400,
        content=ErrorHandler.create_error_response(
            message="Request validation failed. Please check your input and try again.",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": jsonable_encoder(exc.errors())},
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FlightSearchError, search_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
