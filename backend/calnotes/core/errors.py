"""Error Hierarchy — typed, categorized exceptions for all CalNotes failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages (no plaintext, no stack traces)

Design Decisions:
    - Single hierarchy with CalNotesError base: FastAPI global handler catches all (ADR: uniform error shape)
    - AccessDeniedError is distinct from NoteNotFoundError: existence is only revealed to the owner
      through the 403/404 split, never through note fields
"""

from dataclasses import dataclass, field
from enum import Enum
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
    ACCESS_DENIED = "access_denied"
    DATABASE = "database"
    CIPHER = "cipher"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    note_id: str | None = None
    operation: str | None = None


class CalNotesError(Exception):
    """Base exception for all CalNotes errors."""

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
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "note_id": self.context.note_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class NoteValidationError(CalNotesError):
    """Malformed or out-of-range input (bad repeat interval, missing date)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class NoteNotFoundError(CalNotesError):
    """Referenced note id does not exist."""
    def __init__(self, note_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.note_id = str(note_id)
        super().__init__(
            f"Note '{note_id}' not found",
            "NOTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class AccessDeniedError(CalNotesError):
    """Note exists but the caller is not its owner."""
    def __init__(self, note_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.note_id = str(note_id)
        super().__init__(
            "Access denied",
            "ACCESS_DENIED", ErrorCategory.ACCESS_DENIED,
            ErrorSeverity.WARNING, ctx, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CalNotesError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class CipherError(CalNotesError):
    """Cipher adapter could not encrypt or decrypt a value."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Cipher {operation} failed",
            "CIPHER_ERROR", ErrorCategory.CIPHER,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class CorruptedNoteError(CalNotesError):
    """Stored note data could not be decrypted or parsed back."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"Stored note field '{field}' could not be restored",
            "CORRUPTED_NOTE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.field = field
