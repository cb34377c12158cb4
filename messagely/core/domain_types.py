"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Username is the immutable primary identifier of a user
    - MessageId is system-assigned and monotonic
    - SecurityConfig is immutable once loaded (frozen dataclass)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - SecurityConfig lives in core so PasswordHasher and SessionIssuer receive
      it explicitly instead of reading ambient settings
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Username = NewType("Username", str)
MessageId = NewType("MessageId", int)


# ─── Configuration ───────────────────────────────────────────────

@dataclass(frozen=True)
class SecurityConfig:
    """Signing key and hash cost, loaded once at startup."""
    secret_key: str
    jwt_algorithm: str = "HS256"
    bcrypt_work_factor: int = 12
