"""
Module 08 - API Error Handling

Standardized error handling for the API. Ledger exceptions raised by the
core become JSON error bodies with a matching status code.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import (
    LedgerException,
    StorageException,
    TransactionNotFoundException,
)


logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_ledger_exception(cls, exc: LedgerException) -> "APIError":
        """Map a core exception to an HTTP status."""
        if isinstance(exc, TransactionNotFoundException):
            status_code = 404
        elif isinstance(exc, StorageException):
            status_code = 500
        else:
            status_code = 400
        return cls(
            code=exc.code,
            message=exc.message,
            status_code=status_code,
            details=exc.details,
        )

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def ledger_error_handler(request: Request, exc: LedgerException) -> JSONResponse:
    """Handle exceptions raised by the ledger core."""
    logger.info("%s %s failed: %r", request.method, request.url.path, exc)
    return await api_error_handler(request, APIError.from_ledger_exception(exc))


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
