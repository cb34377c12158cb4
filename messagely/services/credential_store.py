"""Credential Store — persists users with hashed credentials.

Invariants:
    - Passwords are hashed before any write; the raw password never reaches the DB or logs
    - Duplicate usernames surface from the primary-key constraint as DuplicateIdentityError
    - authenticate() returns False for unknown users AND wrong passwords, never raises
      for either (no username enumeration)
    - Returned schemas never include password_hash

Design Decisions:
    - Core insert/update statements over session.add(): writes go straight to
      the database and never collide with objects cached in the session
    - join_at and last_login_at both set at registration: registering logs the user in
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from messagely.core.errors import DuplicateIdentityError, NotFoundError
from messagely.infrastructure.database import guard_store
from messagely.infrastructure.password_hashing import PasswordHasher
from messagely.models.user import User
from messagely.schemas.user import UserDetail, UserSummary

logger = logging.getLogger(__name__)


class CredentialStore:
    """User registration, authentication and lookup."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self._db = db
        self._hasher = hasher

    async def register(
        self,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str,
    ) -> UserSummary:
        password_hash = await self._hasher.hash(password)
        now = datetime.now(timezone.utc)
        async with guard_store(self._db, "register"):
            try:
                await self._db.execute(
                    insert(User).values(
                        username=username,
                        password_hash=password_hash,
                        first_name=first_name,
                        last_name=last_name,
                        phone=phone,
                        join_at=now,
                        last_login_at=now,
                    ),
                )
                await self._db.commit()
            except IntegrityError as e:
                await self._db.rollback()
                logger.info("Registration rejected: username taken", extra={"username": username})
                raise DuplicateIdentityError(username) from e
        logger.info("User registered", extra={"username": username})
        return UserSummary(
            username=username, first_name=first_name,
            last_name=last_name, phone=phone,
        )

    async def authenticate(self, username: str, password: str) -> bool:
        async with guard_store(self._db, "authenticate"):
            password_hash = await self._db.scalar(
                select(User.password_hash).where(User.username == username),
            )
        return await self._hasher.verify(password, password_hash)

    async def touch_login(self, username: str) -> None:
        async with guard_store(self._db, "touch_login"):
            result = await self._db.execute(
                update(User)
                .where(User.username == username)
                .values(last_login_at=datetime.now(timezone.utc)),
            )
            if result.rowcount == 0:
                await self._db.rollback()
                raise NotFoundError("User", username)
            await self._db.commit()

    async def list_users(self) -> list[UserSummary]:
        async with guard_store(self._db, "list_users"):
            result = await self._db.execute(
                select(
                    User.username, User.first_name, User.last_name, User.phone,
                ).order_by(User.username),
            )
            rows = result.all()
        return [UserSummary(**row._mapping) for row in rows]

    async def get(self, username: str) -> UserDetail:
        async with guard_store(self._db, "get_user"):
            result = await self._db.execute(
                select(
                    User.username, User.first_name, User.last_name, User.phone,
                    User.join_at, User.last_login_at,
                ).where(User.username == username),
            )
            row = result.one_or_none()
        if row is None:
            raise NotFoundError("User", username)
        return UserDetail(**row._mapping)
