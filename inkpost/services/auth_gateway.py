"""Auth gateway: issue and verify signed, time-limited bearer tokens."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import jwt
from pydantic import ValidationError

from inkpost.core.errors import InvalidTokenError, MissingTokenError, TokenSigningError
from inkpost.core.security import create_access_token, decode_access_token
from inkpost.models.user import User
from inkpost.schemas.auth import AuthenticatedIdentity

if TYPE_CHECKING:
    from inkpost.core.config import Settings

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AuthGateway:
    """
    Mints and validates stateless JWTs carrying the user id (sub) and role.

    There is no session table: a validly signed, unexpired token is the only
    proof of authentication, and verification never reloads the user. A role
    change therefore only shows up in tokens issued after it.

    The clock drives both iat/exp at issuance and the expiry check on verify.
    """

    def __init__(
        self,
        settings: "Settings",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings
        self._clock = clock

    def _secret(self) -> str:
        secret = self._settings.JWT_SECRET
        if secret is None:
            raise TokenSigningError("JWT_SECRET is not configured")
        return secret.get_secret_value()

    def issue_token(self, user: User) -> str:
        """
        Sign {sub: user.id, role: user.role} with JWT_EXPIRE_MINUTES expiry.

        Raises TokenSigningError when the secret is missing or signing fails.
        """
        secret = self._secret()
        try:
            return create_access_token(
                sub=user.id,
                role=user.role,
                secret=secret,
                algorithm=self._settings.JWT_ALGORITHM,
                expires_minutes=self._settings.JWT_EXPIRE_MINUTES,
                now=self._clock(),
            )
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            raise TokenSigningError(f"Token signing failed: {e}", cause=e) from e

    def verify_token(self, token: str | None) -> AuthenticatedIdentity:
        """
        Return the identity encoded in token.

        Raises MissingTokenError when no token is given, InvalidTokenError for a
        bad signature, malformed or expired token, or unusable claims.
        """
        if token is None or not token.strip():
            raise MissingTokenError()
        try:
            secret = self._secret()
        except TokenSigningError as e:
            # Nothing could have been signed without a secret either.
            raise InvalidTokenError() from e
        try:
            payload = decode_access_token(
                token.strip(),
                secret=secret,
                algorithm=self._settings.JWT_ALGORITHM,
                now=self._clock(),
            )
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidTokenError() from e
        try:
            return AuthenticatedIdentity(user_id=int(payload["sub"]), role=payload["role"])
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.debug("Token rejected: unusable claims")
            raise InvalidTokenError() from e
