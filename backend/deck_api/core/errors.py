"""Error Hierarchy — typed, categorized exceptions for every deck-api failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() produces the REST envelope {"error": <message>}
    - DatabaseError never carries storage internals in its user-facing message

Design Decisions:
    - Single hierarchy with DeckApiError base: one FastAPI global handler catches all
    - severity picks the log level and category is logged with every handled error;
      neither reaches the response body
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class DeckApiError(Exception):
    """Base exception for all deck-api errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestValidationFailed(DeckApiError):
    """Request shape or field value rejected."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class AuthenticationError(DeckApiError):
    """Bearer token refused, or login credentials rejected."""
    def __init__(self, reason: str = "missing", message: str = "Unauthorized"):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )
        self.reason = reason


class PermissionDeniedError(DeckApiError):
    """Authenticated caller may not act on this resource."""
    def __init__(self, message: str):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, 403,
        )


class ResourceNotFoundError(DeckApiError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str):
        super().__init__(
            f"{resource_type} not found.",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, 404,
        )
        self.resource_type = resource_type


class ConflictError(DeckApiError):
    """Natural key already taken."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 409,
        )


# ─── Storage Errors (500-level) ─────────────────────────────────

class DatabaseError(DeckApiError):
    """Database operation failed. The operation name is for logs only."""
    def __init__(self, detail: str, operation: str):
        super().__init__(
            "Database error", "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.detail = detail
        self.operation = operation
