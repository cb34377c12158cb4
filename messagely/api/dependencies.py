"""Request Dependencies — wires settings, DB sessions and stores into routes.

Invariants:
    - PasswordHasher and SessionIssuer built once per process from SecurityConfig
    - Every protected route resolves the caller through get_current_username
    - Missing or invalid bearer tokens raise UnauthenticatedError (401)

Design Decisions:
    - HTTPBearer(auto_error=False): a missing header flows through our own
      error envelope instead of FastAPI's default 403
"""

from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from messagely.config import get_settings
from messagely.core.domain_types import Username
from messagely.infrastructure.database import get_db
from messagely.infrastructure.password_hashing import PasswordHasher
from messagely.services.credential_store import CredentialStore
from messagely.services.message_store import MessageStore
from messagely.services.session_issuer import SessionIssuer

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(get_settings().security())


@lru_cache
def get_session_issuer() -> SessionIssuer:
    return SessionIssuer(get_settings().security())


def get_credential_store(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CredentialStore:
    return CredentialStore(db, hasher)


def get_message_store(db: AsyncSession = Depends(get_db)) -> MessageStore:
    return MessageStore(db)


def get_current_username(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> Username:
    """Recover the caller's username from the Authorization header."""
    token = credentials.credentials if credentials else None
    return issuer.verify(token)
