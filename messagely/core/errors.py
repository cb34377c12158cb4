"""Error Hierarchy — typed, tagged exceptions for all Messagely failure modes.

Invariants:
    - Every error carries a kind (ErrorKind), code (str) and severity (ErrorSeverity)
    - HTTP status comes from ERROR_STATUS, the single kind-to-status table
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages (driver errors never
      reach the message text)

Design Decisions:
    - Single hierarchy with MessagelyError base: FastAPI global handler catches all
    - Exceptions carry the kind tag; the boundary translates, routes never pick statuses
    - InvalidCredentialsError is the one override (400) for the login endpoint,
      and its message does not say whether the user exists
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorKind(str, Enum):
    """Tagged error kinds surfaced by the core."""
    NOT_FOUND = "not_found"
    DUPLICATE_IDENTITY = "duplicate_identity"
    REFERENTIAL_VIOLATION = "referential_violation"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"
    STORE_UNAVAILABLE = "store_unavailable"


ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_IDENTITY: 409,
    ErrorKind.REFERENTIAL_VIOLATION: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.STORE_UNAVAILABLE: 503,
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    username: str | None = None
    message_id: int | None = None
    debug_info: dict[str, Any] | None = None


class MessagelyError(Exception):
    """Base exception for all Messagely errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status or ERROR_STATUS[kind]

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "kind": self.kind.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class NotFoundError(MessagelyError):
    """Requested entity does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"No such {resource_type.lower()}: {resource_id}",
            "RESOURCE_NOT_FOUND", ErrorKind.NOT_FOUND,
            ErrorSeverity.WARNING, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateIdentityError(MessagelyError):
    """Username already registered."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            f"Username '{username}' is already taken",
            "DUPLICATE_IDENTITY", ErrorKind.DUPLICATE_IDENTITY,
            ErrorSeverity.WARNING, context,
        )
        self.username = username


class ReferentialViolationError(MessagelyError):
    """Message references a user that does not exist."""
    def __init__(
        self, from_username: str, to_username: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            "Message sender and recipient must both be existing users",
            "REFERENTIAL_VIOLATION", ErrorKind.REFERENTIAL_VIOLATION,
            ErrorSeverity.WARNING, context,
        )
        self.from_username = from_username
        self.to_username = to_username


class ForbiddenError(MessagelyError):
    """Access policy denied the action."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Not permitted to {action}",
            "FORBIDDEN", ErrorKind.FORBIDDEN,
            ErrorSeverity.WARNING, context,
        )
        self.action = action


class UnauthenticatedError(MessagelyError):
    """Missing, malformed or invalid bearer token."""
    def __init__(
        self,
        message: str = "Authentication required",
        context: ErrorContext | None = None,
        http_status: int | None = None,
        code: str = "UNAUTHENTICATED",
    ):
        super().__init__(
            message, code, ErrorKind.UNAUTHENTICATED,
            ErrorSeverity.WARNING, context, http_status,
        )


class InvalidCredentialsError(UnauthenticatedError):
    """Login rejected — same message for unknown user and wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username/password", context, 400, "INVALID_CREDENTIALS",
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(MessagelyError):
    """Database operation failed or timed out."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorKind.STORE_UNAVAILABLE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
