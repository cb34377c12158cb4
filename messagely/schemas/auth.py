"""Auth Schemas — login/registration payloads and the token envelope.

Invariants:
    - username: 1-50 chars, stripped on both login and registration
      (matches users.username length)
    - password is accepted as-is (no stripping; whitespace is significant)
    - registration passwords fit bcrypt's 72-byte input (UTF-8)
"""

from pydantic import BaseModel, Field, field_validator

from messagely.infrastructure.password_hashing import (
    MAX_PASSWORD_BYTES, password_fits_bcrypt,
)


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty or whitespace")
    return v


class LoginRequest(BaseModel):
    """Login credentials — no format rules beyond presence, so nothing leaks."""
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _strip_required(v)


class RegisterRequest(BaseModel):
    """Registration — identity plus profile fields."""
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=1, max_length=30)

    @field_validator("username", "first_name", "last_name", "phone")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, v: str) -> str:
        if not password_fits_bcrypt(v):
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class TokenResponse(BaseModel):
    token: str
