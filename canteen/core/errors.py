"""Error Hierarchy — typed, categorized exceptions for every canteen failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Business-rule errors (400-level) are user-correctable; infrastructure errors
      (500-level) are critical for the current request
    - to_response() produces the REST envelope; details carry the data a client
      needs to render a precise message (e.g. quota max and already-ordered)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CanteenError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    identity_key: str | None = None
    ticket_id: str | None = None
    date_str: str | None = None
    debug_info: dict[str, Any] | None = None


class CanteenError(Exception):
    """Base exception for all canteen errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": self.details,
            }
        }


# ─── Business Errors (400-level) ────────────────────────────────

class WorkerNotFoundError(CanteenError):
    """Identity presented at order intake is not in the worker directory."""
    def __init__(self, identity_key: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.identity_key = identity_key
        super().__init__(
            "Worker not found in the official list.",
            "WORKER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
            details={"identity_key": identity_key},
        )
        self.identity_key = identity_key


class QuotaExceededError(CanteenError):
    """Admitting the order would push the worker past the daily quota."""
    def __init__(
        self, max_daily: int, already_ordered: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Daily limit exceeded ({max_daily}). "
            f"You have already ordered {already_ordered} today.",
            "QUOTA_EXCEEDED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
            details={"max_daily": max_daily, "already_ordered": already_ordered},
        )
        self.max_daily = max_daily
        self.already_ordered = already_ordered


class InvalidParametersError(CanteenError):
    """Required fields missing or inconsistent."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_PARAMETERS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"field": field} if field else None,
        )
        self.field = field


class UnauthorizedError(CanteenError):
    """Missing, unknown or expired admin session on a privileged call."""
    def __init__(
        self, message: str = "Unauthorized", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(CanteenError):
    """Delete/patch target does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(CanteenError):
    """Unique directory value already taken (worker identity, company name)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageUnavailableError(CanteenError):
    """Store unreachable or a statement failed. Never retried by the core."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class TicketCollisionError(CanteenError):
    """Ticket id collided twice in a row at insertion."""
    def __init__(self, attempts: int, context: ErrorContext | None = None):
        super().__init__(
            "Could not allocate a unique ticket id",
            "TICKET_COLLISION", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.attempts = attempts
