"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inkpost.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    check_password_bytes,
)

RoleName = Literal["admin", "editor", "user"]


def _strip_username(value: str) -> str:
    """Usernames are stored trimmed; reject values that are blank after trimming."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("username must be non-empty")
    return stripped


class RegisterRequest(BaseModel):
    """Credentials and optional role for registration."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    role: RoleName | None = Field(default=None, description="Role; defaults to 'editor'")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _strip_username(v)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        return check_password_bytes(v)


class LoginRequest(BaseModel):
    """
    Credentials for login.

    Neither field is length-checked here: every lookup or mismatch failure must
    get the same 400 "invalid credentials" from the credential store.
    """

    username: str
    password: str


class TokenResponse(BaseModel):
    """Signed bearer token returned after registration or login."""

    token: str = Field(..., description="JWT to send in the auth header")


class AuthenticatedIdentity(BaseModel):
    """Identity decoded from a verified token (user id and role claim)."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    role: RoleName


class MessageResponse(BaseModel):
    """Plain message body, used for errors and simple acknowledgements."""

    msg: str
