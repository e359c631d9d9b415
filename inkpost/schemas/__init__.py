"""Pydantic request/response schemas."""

from inkpost.schemas.auth import (
    AuthenticatedIdentity,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from inkpost.schemas.health import HealthResponse
from inkpost.schemas.post import (
    CommentCreate,
    CommentOut,
    PostCreate,
    PostDetail,
    PostSummary,
    PostUpdate,
)

__all__ = [
    "AuthenticatedIdentity",
    "CommentCreate",
    "CommentOut",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PostCreate",
    "PostDetail",
    "PostSummary",
    "PostUpdate",
    "RegisterRequest",
    "TokenResponse",
]
