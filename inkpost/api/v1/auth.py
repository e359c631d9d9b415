"""Registration, login and token introspection endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from inkpost.api.deps import CurrentIdentity, get_auth_gateway, get_credential_store
from inkpost.schemas.auth import (
    AuthenticatedIdentity,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from inkpost.services.auth_gateway import AuthGateway
from inkpost.services.credentials import CredentialStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
def register(
    body: RegisterRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
) -> TokenResponse:
    """
    Create a user (role defaults to 'editor') and return a token so the client is signed in.
    Send the token on protected requests in the x-auth-token header.
    """
    user = store.register(body.username, body.password, body.role)
    return TokenResponse(token=gateway.issue_token(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
def login(
    body: LoginRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
) -> TokenResponse:
    """Authenticate with username and password; returns a token valid for JWT_EXPIRE_MINUTES."""
    user = store.verify_credentials(body.username, body.password)
    token = gateway.issue_token(user)
    logger.info("Login succeeded for user id=%s", user.id)
    return TokenResponse(token=token)


@router.get(
    "/me",
    response_model=AuthenticatedIdentity,
    responses={401: {"model": MessageResponse}},
)
def me(identity: CurrentIdentity) -> AuthenticatedIdentity:
    """Return the identity carried by the presented token (no database lookup)."""
    return identity
