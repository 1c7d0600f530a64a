"""Error Hierarchy — typed, categorized exceptions for all Cardsmith failure modes.

Invariants:
    - Every raised error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; store errors (409/503) ask the caller to retry
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - MissingRequiredField, MalformedStoredValue and InvalidLinkCandidate are
      value objects reported by the core, never raised by it

Design Decisions:
    - Single hierarchy with CardsmithError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    card_id: str | None = None
    owner_id: str | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class CardsmithError(Exception):
    """Base exception for all Cardsmith errors."""

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

    @property
    def retryable(self) -> bool:
        return self.category in (ErrorCategory.DATABASE, ErrorCategory.CONFLICT)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "retryable": self.retryable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "card_id": self.context.card_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Reported (non-raised) conditions ───────────────────────────

@dataclass(frozen=True)
class MissingRequiredField:
    """A required field is blank; the save action stays disabled."""
    field: str

    @property
    def message(self) -> str:
        return f"'{self.field}' is required before the card can be saved"


@dataclass(frozen=True)
class MalformedStoredValue:
    """A stored structured value could not be parsed; a default was substituted."""
    column: str
    raw: Any = None

    @property
    def message(self) -> str:
        return f"Stored '{self.column}' value is malformed; default substituted"


@dataclass(frozen=True)
class InvalidLinkCandidate:
    """A link candidate was rejected at the boundary (blank URL)."""
    platform: str | None = None
    reason: str = "url is required"


# ─── Domain Errors (400-level) ──────────────────────────────────

class CardValidationError(CardsmithError):
    """Save attempted while required fields are missing."""
    def __init__(
        self, missing: list[MissingRequiredField], context: ErrorContext | None = None,
    ):
        fields = [m.field for m in missing]
        super().__init__(
            f"Missing required fields: {', '.join(fields)}",
            "MISSING_REQUIRED_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["fields"] = self.fields
        return response


class CardNotFound(CardsmithError):
    """Card does not exist, is not owned by the caller, or is not published."""
    def __init__(self, reference: str, context: ErrorContext | None = None):
        super().__init__(
            f"Card '{reference}' not found",
            "CARD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.reference = reference


# ─── Store Errors (409 / 503) ───────────────────────────────────

class StoreConflict(CardsmithError):
    """Store rejected the write (e.g. slug already taken)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.user_message = ctx.user_message or "Save failed: the card conflicts with an existing one."
        super().__init__(
            message, "STORE_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.operation = operation


class StoreUnavailable(CardsmithError):
    """Store call failed; the caller may retry manually."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.user_message = ctx.user_message or f"{operation.capitalize()} failed. Please try again."
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
