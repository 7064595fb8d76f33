"""Error Hierarchy — typed, categorized failures for every TicketApp outcome.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are expected outcomes: services return them inside Err, never raise them
    - to_response() produces a JSON-serializable envelope for the presentation layer
    - Messages are user-safe: InvalidCredentialsError never says which field was wrong

Design Decisions:
    - Single hierarchy with TicketAppError base: one shape for every Err payload
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    STORAGE = "storage"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ticket_id: str | None = None
    storage_key: str | None = None
    debug_info: dict[str, Any] | None = None


class TicketAppError(Exception):
    """Base exception for all TicketApp errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "ticket_id": self.context.ticket_id,
                    "storage_key": self.context.storage_key,
                },
            }
        }


# ─── Domain Errors (caller-recoverable) ─────────────────────────

class ValidationFailedError(TicketAppError):
    """Form data failed schema validation. Carries field → first message."""
    def __init__(self, field_errors: dict[str, str], context: ErrorContext | None = None):
        super().__init__(
            "Invalid form data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.field_errors = dict(field_errors)

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field_errors"] = dict(self.field_errors)
        return response


class InvalidCredentialsError(TicketAppError):
    """Unknown email or wrong password. Same error for both cases."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email or password", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context,
        )


class EmailAlreadyExistsError(TicketAppError):
    """Signup attempted with an email already in the user directory."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User with this email already exists", "EMAIL_ALREADY_EXISTS",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context,
        )


class TicketNotFoundError(TicketAppError):
    """No ticket with the requested id."""
    def __init__(self, ticket_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.ticket_id = ticket_id
        super().__init__(
            "Ticket not found", "TICKET_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx,
        )
        self.ticket_id = ticket_id


# ─── Storage Errors ─────────────────────────────────────────────

class CorruptStateError(TicketAppError):
    """Persisted payload under a storage key is not well-formed."""
    def __init__(self, storage_key: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.storage_key = storage_key
        ctx.debug_info = {"reason": reason}
        super().__init__(
            f"Persisted state under '{storage_key}' is corrupt",
            "CORRUPT_STATE", ErrorCategory.STORAGE, ErrorSeverity.ERROR, ctx,
        )
        self.storage_key = storage_key


class StorageError(TicketAppError):
    """Key-value substrate operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
