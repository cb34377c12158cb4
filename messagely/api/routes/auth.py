"""Auth Routes — login and registration, both answering with a bearer token.

Invariants:
    - Login failure is one response (400 "Invalid username/password") whether the
      user is unknown or the password is wrong
    - last_login_at moves only after a successful authenticate()
    - Tokens and passwords never logged
"""

import logging

from fastapi import APIRouter, Depends, status

from messagely.api.dependencies import get_credential_store, get_session_issuer
from messagely.core.errors import InvalidCredentialsError
from messagely.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from messagely.services.credential_store import CredentialStore
from messagely.services.session_issuer import SessionIssuer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    """Login: {username, password} => {token}."""
    if not await store.authenticate(body.username, body.password):
        raise InvalidCredentialsError()
    await store.touch_login(body.username)
    logger.info("User logged in", extra={"username": body.username})
    return TokenResponse(token=issuer.issue(body.username))


@router.post(
    "/register", response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    store: CredentialStore = Depends(get_credential_store),
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    """Register, log in, and return a token."""
    user = await store.register(
        body.username, body.password,
        body.first_name, body.last_name, body.phone,
    )
    return TokenResponse(token=issuer.issue(user.username))
