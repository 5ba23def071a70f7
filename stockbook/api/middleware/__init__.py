"""API middleware."""

from stockbook.api.middleware.error_handler import ErrorHandlerMiddleware
from stockbook.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
