"""Custom exceptions and error handling utilities."""
import traceback
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from evcharge.utils.logger import logger, log_context

if TYPE_CHECKING:
    from evcharge.utils.result import ServiceResult


class ErrorCode(str, Enum):
    """Failure taxonomy shared by every operation."""

    INVALID_INPUT = "INVALID_INPUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    EXPIRED = "EXPIRED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


# Duplicate keys are treated as a client input problem, hence 400 and not 409
STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_TOKEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.EXPIRED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class APIError(Exception):
    """Raised at the API boundary to turn a failed result into a response."""

    def __init__(self, code: ErrorCode, message: str, errors: Optional[List[str]] = None):
        self.code = code
        self.message = message
        self.errors = list(errors or [])
        self.status_code = STATUS_BY_CODE[code]
        super().__init__(message)


def raise_for_result(result: "ServiceResult", operation: str, **context) -> None:
    """
    Raise an APIError if the result is a failure.

    Args:
        result: Result returned by a store or service
        operation: Name of the operation, for logging
        **context: Identifying fields to log alongside the failure

    Raises:
        APIError: If ``result.success`` is False
    """
    if result.success:
        return

    logger.warning(
        f"{operation} failed: "
        + log_context(code=result.error_code.value, message=result.message, **context)
    )
    raise APIError(result.error_code, result.message, result.errors)


def error_body(message: str, errors: Optional[List[str]] = None) -> dict:
    """Build the JSON body used for every error response."""
    body = {"message": message}
    if errors:
        body["errors"] = errors
    return body


def setup_exception_handlers(app: FastAPI, development: bool = False) -> None:
    """Register exception handlers with FastAPI app."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.errors))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
        logger.warning(
            "Invalid input: " + log_context(path=request.url.path, method=request.method, code=ErrorCode.INVALID_INPUT.value)
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Invalid input", errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {exc} "
            + log_context(path=request.url.path, method=request.method, code=ErrorCode.INTERNAL.value),
            exc_info=exc,
        )
        body = error_body("Something went wrong!")
        if development:
            body["details"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
