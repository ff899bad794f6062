"""Error Hierarchy: typed, categorized exceptions for discovery failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller bugs; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - Evaluation outcomes (not eligible, not graduated) are results, never errors

Design Decisions:
    - Single hierarchy with DiscoveryError base: FastAPI global handler catches all
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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    project_id: str | None = None
    assumption_id: str | None = None
    interview_id: str | None = None
    debug_info: dict[str, Any] | None = None


class DiscoveryError(Exception):
    """Base exception for all discovery engine errors."""

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
                    "project_id": self.context.project_id,
                    "assumption_id": self.context.assumption_id,
                    "interview_id": self.context.interview_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class RatingOutOfRangeError(DiscoveryError):
    """A 1-5 rating (or a 1-25 risk score) fell outside its range."""
    def __init__(
        self, field_name: str, value: object, low: int, high: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{field_name} must be an integer between {low} and {high}, got {value!r}",
            "RATING_OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field_name = field_name
        self.value = value


class InvalidStatusTransitionError(DiscoveryError):
    """Assumption status change not allowed by the lifecycle."""
    def __init__(
        self, current: str, requested: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot move assumption from '{current}' to '{requested}'",
            "INVALID_STATUS_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.current = current
        self.requested = requested


class InputValidationError(DiscoveryError):
    """A pure check_* function rejected a snapshot. Carries the error dict."""
    def __init__(self, error: dict, context: ErrorContext | None = None):
        super().__init__(
            error["message"], error["error_code"], ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.error = error


class ResourceNotFoundError(DiscoveryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DiscoveryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
