"""User Schemas — public views of a user record.

Invariants:
    - IdentitySnippet is the counterparty view embedded in message responses
    - UserDetail adds timestamps; nothing exposes password_hash
"""

from datetime import datetime

from pydantic import BaseModel


class IdentitySnippet(BaseModel):
    """username, first/last name and phone of a message party."""
    username: str
    first_name: str
    last_name: str
    phone: str


class UserSummary(IdentitySnippet):
    """Entry in the user list."""


class UserDetail(UserSummary):
    """Own profile view, with join and last-login timestamps."""
    join_at: datetime
    last_login_at: datetime | None = None


class UserListResponse(BaseModel):
    users: list[UserSummary]


class UserDetailResponse(BaseModel):
    user: UserDetail
