"""Blog post and comment endpoints. Reads, likes and comments are public; mutations need a token."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inkpost.api.deps import CurrentIdentity, require_role
from inkpost.core.database import get_db
from inkpost.models.user import Role
from inkpost.schemas.auth import AuthenticatedIdentity, MessageResponse
from inkpost.schemas.post import (
    CommentCreate,
    CommentOut,
    PostCreate,
    PostDetail,
    PostSummary,
    PostUpdate,
)
from inkpost.services import posts as post_service

router = APIRouter()

_AUTH_RESPONSES = {401: {"model": MessageResponse}}
_NOT_FOUND = {404: {"model": MessageResponse}}


@router.get("", response_model=list[PostSummary])
def list_posts(db: Annotated[Session, Depends(get_db)]) -> list[PostSummary]:
    """List post summaries, newest first."""
    return [PostSummary.model_validate(p) for p in post_service.list_posts(db)]


@router.post(
    "",
    response_model=PostDetail,
    status_code=status.HTTP_201_CREATED,
    responses={**_AUTH_RESPONSES, 400: {"model": MessageResponse}},
)
def create_post(
    body: PostCreate,
    db: Annotated[Session, Depends(get_db)],
    _identity: CurrentIdentity,
) -> PostDetail:
    post = post_service.create_post(db, body)
    return PostDetail.model_validate(post)


@router.get("/{slug}", response_model=PostDetail, responses=_NOT_FOUND)
def get_post(slug: str, db: Annotated[Session, Depends(get_db)]) -> PostDetail:
    """Return the full post and count one view."""
    return PostDetail.model_validate(post_service.get_post(db, slug))


@router.put(
    "/{slug}",
    response_model=PostDetail,
    responses={**_AUTH_RESPONSES, **_NOT_FOUND, 400: {"model": MessageResponse}},
)
def update_post(
    slug: str,
    body: PostUpdate,
    db: Annotated[Session, Depends(get_db)],
    _identity: CurrentIdentity,
) -> PostDetail:
    """Partially update a post. Changing the title changes the slug."""
    return PostDetail.model_validate(post_service.update_post(db, slug, body))


@router.delete(
    "/{slug}",
    response_model=MessageResponse,
    responses={**_AUTH_RESPONSES, **_NOT_FOUND, 403: {"model": MessageResponse}},
)
def delete_post(
    slug: str,
    db: Annotated[Session, Depends(get_db)],
    _identity: Annotated[AuthenticatedIdentity, Depends(require_role(Role.ADMIN, Role.EDITOR))],
) -> MessageResponse:
    post_service.delete_post(db, slug)
    return MessageResponse(msg="post deleted")


@router.put("/{slug}/like", response_model=PostDetail, responses=_NOT_FOUND)
def like_post(slug: str, db: Annotated[Session, Depends(get_db)]) -> PostDetail:
    return PostDetail.model_validate(post_service.like_post(db, slug))


@router.post(
    "/{slug}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
    responses=_NOT_FOUND,
)
def add_comment(
    slug: str,
    body: CommentCreate,
    db: Annotated[Session, Depends(get_db)],
) -> CommentOut:
    comment = post_service.add_comment(db, slug, body.author, body.content)
    return CommentOut.model_validate(comment)


@router.get("/{slug}/comments", response_model=list[CommentOut], responses=_NOT_FOUND)
def list_comments(slug: str, db: Annotated[Session, Depends(get_db)]) -> list[CommentOut]:
    """Comments on a post, newest first."""
    return [CommentOut.model_validate(c) for c in post_service.list_comments(db, slug)]
