"""
Error responses for the Stockbook API.

Every failure leaves the API as an ``ErrorResponse`` carrying an
``error_code``, the message, a recovery hint, the request path and, for
domain errors, their structured ``details`` (e.g. the units available
when a sale is refused).
"""

import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stockbook.application.dto.responses import ErrorResponse
from stockbook.config import get_logger
from stockbook.core.exceptions import (
    DuplicateCategoryError,
    NotFoundError,
    StockbookError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# First match wins, so subclasses come before their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateCategoryError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    # pydantic errors raised while re-validating a merged entity
    ValueError: status.HTTP_400_BAD_REQUEST,
}

HINTS: dict[str, str] = {
    "PRODUCT_NOT_FOUND": "List products with GET /api/products or look one up by SKU or barcode with GET /api/products/by-code/{code}.",
    "CUSTOMER_NOT_FOUND": "List customers with GET /api/customers.",
    "INVOICE_NOT_FOUND": "List invoices with GET /api/invoices.",
    "CATEGORY_NOT_FOUND": "List categories with GET /api/categories.",
    "INSUFFICIENT_STOCK": "Lower the quantity or restock with POST /api/products/{id}/stock.",
    "DUPLICATE_CATEGORY": "Choose a name that GET /api/categories does not list.",
    "VALIDATION_ERROR": "Fix the fields named in the error and resend.",
    "DATABASE_ERROR": "The database rejected the operation. GET /api/health/db reports its state.",
    "NOT_FOUND": "No such route. The API lives under /api.",
}

# Error codes for framework HTTP errors such as an unknown route
HTTP_ERROR_CODES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_409_CONFLICT: "CONFLICT",
}


def status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=HINTS.get(error_code),
        detail=detail,
        details=details or {},
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Turn any exception into an ``ErrorResponse`` and log it once."""
    status_code = status_for(exc)

    if isinstance(exc, StockbookError):
        error_code, message, details = exc.code, exc.message, exc.details
    else:
        error_code, message, details = exc.__class__.__name__, str(exc), None

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        status=status_code,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    return error_json(request, status_code, error_code, message, details=details)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last resort for exceptions that escaped the registered handlers."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def _field_path(loc: tuple) -> str:
    # ("body", "items", 0, "quantity") -> "items.0.quantity"
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts) or "request"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the domain, request validation and HTTP error handlers."""

    @app.exception_handler(StockbookError)
    async def domain_exception_handler(
        request: Request,
        exc: StockbookError,
    ) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        fields = {_field_path(error["loc"]): error["msg"] for error in exc.errors()}
        return error_json(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail="; ".join(f"{name}: {msg}" for name, msg in fields.items()),
            details={"fields": fields},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        return error_json(
            request,
            exc.status_code,
            HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            exc.detail or "An error occurred",
        )
