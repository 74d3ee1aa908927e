"""Pledgebook Errors — the failure taxonomy every layer raises and the API reports.

Invariants:
    - Each subclass fixes its code, category, severity and HTTP status as class
      attributes; instances only carry a message and an ErrorContext
    - 4xx errors are the caller's to fix; 5xx errors need an operator
    - Nothing is retried anywhere; an error is reported once, where it is handled
    - to_response() never includes ErrorContext.debug_info (may hold gateway ids)

Design Decisions:
    - One root (PledgebookError) so a single FastAPI handler renders every failure
    - A rejected card surfaces as 400: from the user's side it is bad input
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where an error happened: which user, which store key, what to repair."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_iden: str | None = None
    store_key: str | None = None
    debug_info: dict[str, Any] | None = None


class PledgebookError(Exception):
    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Caller errors ──────────────────────────────────────────────

class BadRequestError(PledgebookError):
    """Missing, malformed or unresolvable input."""
    code = "BAD_REQUEST"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING
    http_status = 400


class ExternalAuthInvalidError(PledgebookError):
    """Facebook did not vouch for the login token."""
    code = "EXTERNAL_AUTH_INVALID"
    category = ErrorCategory.EXTERNAL_API
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(
        self,
        message: str = "Login token was rejected",
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context)


class UnauthorizedError(PledgebookError):
    """No bearer token, or one we never issued."""
    code = "UNAUTHORIZED"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(
        self,
        message: str = "Missing or invalid access token",
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context)


class PaymentGatewayError(PledgebookError):
    code = "PAYMENT_GATEWAY_ERROR"
    category = ErrorCategory.EXTERNAL_API
    http_status = 400

    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"Payment {operation} failed: {message}", context)
        self.operation = operation


# ─── Operator errors ────────────────────────────────────────────

class StorageError(PledgebookError):
    code = "STORAGE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL

    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"Storage {operation} failed: {message}", context)
        self.operation = operation


class InternalInconsistencyError(PledgebookError):
    """Stored mappings disagree; someone has to repair the data."""
    code = "INTERNAL_INCONSISTENCY"
    severity = ErrorSeverity.CRITICAL
