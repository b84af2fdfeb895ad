"""
Error handling utilities for the Product Service
"""

import traceback
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from product_api.core.config import config
from product_api.core.logger import logger


class ErrorResponse(Exception):
    """Custom exception for application errors"""

    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class PersistenceError(ErrorResponse):
    """
    Raised by the data access layer for any storage failure.
    The message shown to callers is fixed; the cause is kept for logging only.
    """

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        self.operation = operation
        self.cause = cause
        super().__init__("Server error", status_code=500)

    def __str__(self):
        if self.cause is not None:
            return f"{self.operation} failed: {self.cause}"
        return f"{self.operation} failed"


async def error_response_handler(request: Request, exc: ErrorResponse):
    """Handler for custom ErrorResponse exceptions"""
    metadata = {
        "event": "error_response",
        "status_code": exc.status_code,
        "url": str(request.url),
        "method": request.method,
        **exc.details,
    }

    if isinstance(exc, PersistenceError):
        metadata["operation"] = exc.operation
        if exc.cause is not None:
            metadata["cause"] = f"{type(exc.cause).__name__}: {exc.cause}"

    if config.environment == "development":
        # Include more detailed error info in development
        metadata["traceback"] = traceback.format_exc()

    logger.error(
        f"Error: {exc.message}",
        metadata=metadata
    )

    content = {"msg": exc.message}
    if exc.details and not isinstance(exc, PersistenceError):
        content["details"] = exc.details

    return JSONResponse(status_code=exc.status_code, content=content)
