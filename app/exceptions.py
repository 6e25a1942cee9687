# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error the service raises on purpose is a PortfolioException. The
# `status` tag ("fail" for client mistakes, "error" for server trouble) and
# `status_code` decide how it is rendered, so handlers never branch on type.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class PortfolioException(Exception):
    """
    Base exception for the portfolio API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORTFOLIO_ERROR",
        status_code: int = 500,
        status: str = "error",
        errors: list[dict[str, str]] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.status = status
        self.errors = errors or []
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        if self.errors:
            return {"status": self.status, "errors": self.errors}
        return {"status": self.status, "message": self.message}


# =============================================================================
# Request Exceptions
# =============================================================================

class FormValidationError(PortfolioException):
    """Raised when a request body fails its schema. One entry per bad field."""

    def __init__(self, errors: list[dict[str, str]]):
        super().__init__(
            message="Validation failed",
            code="VALIDATION_ERROR",
            status_code=400,
            status="fail",
            errors=errors,
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> "FormValidationError":
        return cls([{"field": field, "message": message}])


class MissingTableError(PortfolioException):
    """Raised when a request does not say which table it targets."""

    def __init__(self):
        super().__init__(
            message="Table name is required",
            code="TABLE_REQUIRED",
            status_code=400,
            status="fail",
        )


class MissingParameterError(PortfolioException):
    """Raised when a required query/form parameter other than the table is absent."""

    def __init__(self, name: str):
        super().__init__(
            message=f"Parameter '{name}' is required",
            code="PARAMETER_REQUIRED",
            status_code=400,
            status="fail",
            details={"parameter": name},
        )


class RecordNotFoundError(PortfolioException):
    """Raised when no row matches the requested id."""

    def __init__(self, table: str, record_id: Any):
        super().__init__(
            message=f"No record with id {record_id} in {table}",
            code="RECORD_NOT_FOUND",
            status_code=404,
            status="fail",
            details={"table": table, "id": record_id},
        )


class RouteNotFoundError(PortfolioException):
    """Raised for any path the API does not serve."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Cannot find {path} on this server",
            code="ROUTE_NOT_FOUND",
            status_code=404,
            status="fail",
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class UploadRejectedError(PortfolioException):
    """Raised when an uploaded file's extension or MIME type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}. Allowed: {', '.join(allowed)}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            status="error",
            details={"filename": filename, "allowed_types": allowed},
        )


class DuplicateAttachmentError(PortfolioException):
    """Raised when more than one file is sent for a single attachment slot."""

    def __init__(self, slot: str):
        super().__init__(
            message=f"Only one file may be uploaded as '{slot}'",
            code="DUPLICATE_ATTACHMENT",
            status_code=400,
            status="error",
            details={"slot": slot},
        )


class FileTooLargeError(PortfolioException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            status="error",
            details={"size_mb": size_mb, "max_mb": max_mb},
        )


# =============================================================================
# Backend Exceptions
# =============================================================================
# Messages here are what the client sees; the underlying error is logged.

class StorageWriteError(PortfolioException):
    """Raised when an accepted upload cannot be written to the upload directory."""

    def __init__(self, filename: str):
        super().__init__(
            message="Failed to store uploaded file",
            code="STORAGE_WRITE_ERROR",
            status_code=500,
            status="error",
            details={"filename": filename},
        )


class DatabaseError(PortfolioException):
    """Raised when the database rejects or fails a statement."""

    def __init__(self, operation: str):
        super().__init__(
            message="Database query failed",
            code="DATABASE_ERROR",
            status_code=500,
            status="error",
            details={"operation": operation},
        )


class MailTemplateError(PortfolioException):
    """Raised when the email template cannot be loaded."""

    def __init__(self):
        super().__init__(
            message="Failed to prepare email",
            code="MAIL_TEMPLATE_ERROR",
            status_code=500,
            status="error",
        )


class MailDeliveryError(PortfolioException):
    """Raised when the SMTP transport fails or times out."""

    def __init__(self):
        super().__init__(
            message="Failed to send email due to an external service error",
            code="MAIL_DELIVERY_ERROR",
            status_code=500,
            status="error",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def portfolio_exception_handler(
    request: Request,
    exc: PortfolioException
) -> JSONResponse:
    """
    Convert PortfolioException to JSON response.

    Client errors carry `status: "fail"` and either `errors` (field-level)
    or `message`; server errors carry `status: "error"` and a generic message.
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed query parameters (e.g. a non-numeric id).

    Rendered like FormValidationError: 400 with one entry per field.
    """
    errors = []
    for err in exc.errors():
        loc = err.get("loc") or ("",)
        errors.append({"field": str(loc[-1]), "message": err.get("msg", "Invalid value")})
    return JSONResponse(
        status_code=400,
        content={"status": "fail", "errors": errors}
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors in the same {status, message} shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": "fail" if exc.status_code < 500 else "error",
            "message": str(exc.detail),
        },
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Last resort: log everything, reveal nothing."""
    logger.exception(f"Unhandled error in {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": "Internal Server Error"}
    )
