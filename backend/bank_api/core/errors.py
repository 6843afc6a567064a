"""Error Hierarchy — typed, categorized exceptions for all Bank API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status the centralized formatter renders it with
    - to_response() produces the uniform envelope {success: false, message}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BankApiError base: one global handler catches all (ADR: uniform error shape)
    - "Not found" is NOT an exception here: the repository service returns a NotFound
      result (core/domain_types.py) and the handler branches on it explicitly
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    RATE_LIMIT = "rate_limit"
    FORBIDDEN = "forbidden"


@dataclass
class ErrorContext:
    """Context attached to an error for logs, never rendered to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer_id: str | None = None


class BankApiError(Exception):
    """Base exception for all Bank API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard failure envelope."""
        return {"success": False, "message": self.message}


# ─── Request Errors (400-level) ─────────────────────────────────

class ValidationError(BankApiError):
    """Required customer fields missing or empty."""
    def __init__(self, missing: list[str], context: ErrorContext | None = None):
        super().__init__(
            "Missing required fields: firstName, lastName, address",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.missing = missing


class MalformedBodyError(BankApiError):
    """Request body could not be decoded."""
    def __init__(self, detail: str, context: ErrorContext | None = None):
        super().__init__(
            "Malformed request body",
            "MALFORMED_BODY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.detail = detail


class CustomerNotFoundError(BankApiError):
    """Rendered form of a NotFound result (404)."""
    def __init__(self, customer_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.customer_id = customer_id
        super().__init__(
            "Customer not found",
            "CUSTOMER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


class RouteNotFoundError(BankApiError):
    """No route matches the request's verb and path."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        super().__init__(
            "Route not found",
            "ROUTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.path = path


class OriginNotAllowedError(BankApiError):
    """Cross-origin request from an origin outside the allow-list."""
    def __init__(self, origin: str, context: ErrorContext | None = None):
        super().__init__(
            "Origin not allowed",
            "ORIGIN_NOT_ALLOWED", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )
        self.origin = origin


class RateLimitExceededError(BankApiError):
    """Client exceeded a rate limit policy."""
    def __init__(
        self, message: str, retry_after_seconds: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "RATE_LIMIT_EXCEEDED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, context, 429,
        )
        self.retry_after_seconds = retry_after_seconds


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(BankApiError):
    """Database operation failed (integrity, driver, query).

    Rendered 400 with a generic message; the detail is only echoed in development.
    """
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return {"success": False, "message": "Database operation failed"}


class DatabaseUnavailableError(BankApiError):
    """Database unreachable or operational failure (connection, timeout)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database unavailable: {message}",
            "DATABASE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )

    def to_response(self) -> dict:
        return {"success": False, "message": "Internal Server Error"}
