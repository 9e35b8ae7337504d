"""Error Hierarchy: typed exceptions for every failure a request can end in.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() always produces the response envelope (see core/envelope.py)
    - Only ValidationFailure carries the extra `status: "error"` marker

Design Decisions:
    - Single hierarchy with BookApiError base: one global handler renders them all
    - errors payload is free-form (str | list | None) to match the envelope contract
"""

from enum import Enum
from typing import Any

from book_api.core.envelope import build_envelope


class ErrorCategory(str, Enum):
    """High-level error categories for logging and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class BookApiError(Exception):
    """Base exception for all Book API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
        errors: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status
        self.errors = errors

    def to_response(self) -> dict:
        """Convert to the failure envelope."""
        return build_envelope(
            success=False,
            message=self.message,
            status_code=self.http_status,
            errors=self.errors,
        )


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationFailure(BookApiError):
    """Request payload failed the validation gate."""
    def __init__(self, violations: list[dict], message: str = "Validation failed"):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400, violations,
        )
        self.violations = violations

    def to_response(self) -> dict:
        return {"status": "error", **super().to_response()}


class MissingTokenError(BookApiError):
    """No bearer credential supplied, or the header is malformed."""
    def __init__(self, message: str = "Authorization header missing or malformed"):
        super().__init__(
            message, "MISSING_TOKEN", ErrorCategory.AUTHENTICATION, 401,
        )


class AuthenticationFailure(BookApiError):
    """Credentials were supplied but do not identify a user."""
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION, 401,
        )


class InvalidTokenError(BookApiError):
    """Token signature, expiry or type check failed."""
    def __init__(self, message: str = "Invalid or expired token", reason: str | None = None):
        super().__init__(
            message, "INVALID_TOKEN", ErrorCategory.AUTHENTICATION, 403, reason,
        )


class NotFoundError(BookApiError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, message: str | None = None):
        super().__init__(
            message or f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.resource_type = resource_type


class ConflictError(BookApiError):
    """A uniqueness constraint would be violated."""
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT, 409, detail,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class UnexpectedFailure(BookApiError):
    """Store or runtime failure. errors carries the underlying message."""
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL, 500, detail,
        )
