"""Password Hashing — salted bcrypt via passlib, off the event loop.

Invariants:
    - Raw passwords are never stored, returned or logged
    - Work factor comes from SecurityConfig (fixed for the process lifetime)
    - verify() on a missing hash still spends one bcrypt round (dummy_verify),
      so unknown users and wrong passwords take the same time
    - Passwords over MAX_PASSWORD_BYTES (UTF-8) are never hashed and never
      verify: bcrypt would silently compare only their first 72 bytes

Design Decisions:
    - passlib CryptContext: salt generation, constant-time comparison and
      future scheme migration handled by the library
    - bcrypt__truncate_error: passlib refuses to hash an overlong secret
      instead of truncating it
    - asyncio.to_thread: bcrypt is CPU-bound and would otherwise block other requests
"""

import asyncio

from passlib.context import CryptContext

from messagely.core.domain_types import SecurityConfig

MAX_PASSWORD_BYTES = 72


def password_fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


class PasswordHasher:
    """One-way, cost-parameterized password hashing."""

    def __init__(self, config: SecurityConfig):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=config.bcrypt_work_factor,
            bcrypt__truncate_error=True,
        )

    async def hash(self, password: str) -> str:
        if not password_fits_bcrypt(password):
            raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        return await asyncio.to_thread(self._context.hash, password)

    async def verify(self, password: str, password_hash: str | None) -> bool:
        if password_hash is None or not password_fits_bcrypt(password):
            await asyncio.to_thread(self._context.dummy_verify)
            return False
        return await asyncio.to_thread(
            self._context.verify, password, password_hash,
        )
