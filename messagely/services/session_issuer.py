"""Session Issuer — converts a verified username into a signed bearer token and back.

Invariants:
    - Token claims: {"username": str, "iat": int}; no expiry is enforced
    - Signing key and algorithm fixed at construction (SecurityConfig)
    - verify() raises UnauthenticatedError for missing, malformed, badly signed
      or claim-less tokens; it never returns an empty username

Design Decisions:
    - PyJWT HS256: standard, verifiable by any JWT library
    - Stateless: nothing is stored per token, each request is verified independently
"""

import logging
from datetime import datetime, timezone

import jwt

from messagely.core.domain_types import SecurityConfig, Username
from messagely.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


class SessionIssuer:
    """Issues and verifies signed username claims."""

    def __init__(self, config: SecurityConfig):
        self._key = config.secret_key
        self._algorithm = config.jwt_algorithm

    def issue(self, username: str) -> str:
        claims = {
            "username": username,
            "iat": int(datetime.now(timezone.utc).timestamp()),
        }
        return jwt.encode(claims, self._key, algorithm=self._algorithm)

    def verify(self, token: str | None) -> Username:
        if not token:
            raise UnauthenticatedError()
        try:
            claims = jwt.decode(
                token, self._key, algorithms=[self._algorithm],
                options={"require": ["username"]},
            )
        except jwt.PyJWTError as e:
            logger.info(f"Rejected bearer token: {type(e).__name__}")
            raise UnauthenticatedError("Invalid or expired token") from e
        username = claims.get("username")
        if not isinstance(username, str) or not username:
            raise UnauthenticatedError("Invalid or expired token")
        return Username(username)
