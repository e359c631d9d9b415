"""Shared FastAPI dependencies: injected settings, service construction and the auth gate."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from inkpost.core.config import Settings, get_settings
from inkpost.core.database import get_db
from inkpost.core.errors import ForbiddenError
from inkpost.models.user import Role
from inkpost.schemas.auth import AuthenticatedIdentity
from inkpost.services.auth_gateway import AuthGateway
from inkpost.services.credentials import CredentialStore


def get_credential_store(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CredentialStore:
    return CredentialStore(db, settings)


def get_auth_gateway(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthGateway:
    return AuthGateway(settings)


def require_auth(
    request: Request,
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthenticatedIdentity:
    """
    Dependency: verify the token in the AUTH_HEADER_NAME header (default x-auth-token).

    On success the identity is attached to request.state.identity and returned.
    MissingTokenError / InvalidTokenError propagate and end the request with 401
    before the route handler runs.
    """
    identity = gateway.verify_token(request.headers.get(settings.AUTH_HEADER_NAME))
    request.state.identity = identity
    return identity


def require_role(*roles: Role) -> Callable[..., AuthenticatedIdentity]:
    """Dependency factory: require_auth plus a check that the token's role is one of roles."""
    allowed = frozenset(r.value for r in roles)

    def _require_role(
        identity: Annotated[AuthenticatedIdentity, Depends(require_auth)],
    ) -> AuthenticatedIdentity:
        if identity.role not in allowed:
            raise ForbiddenError()
        return identity

    return _require_role


CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(require_auth)]
