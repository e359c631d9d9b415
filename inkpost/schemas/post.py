"""Pydantic schemas for blog posts and comments."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from inkpost.core.slug import slugify

PostCategory = Literal["Frontend", "Backend", "DevOps", "Career", "Other"]


def _non_blank(value: str, field: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field} must be non-empty")
    return stripped


class PostCreate(BaseModel):
    """Body for creating a post. The slug is derived from the title."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=255)
    summary: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    author: str | None = Field(default=None, max_length=255)
    thumbnail_url: str = Field(default="", max_length=2048)
    tags: list[str] = Field(default_factory=list)
    category: PostCategory

    @field_validator("title", "summary")
    @classmethod
    def validate_trimmed(cls, v: str, info: ValidationInfo) -> str:
        return _non_blank(v, info.field_name)

    @field_validator("title")
    @classmethod
    def validate_title_slug(cls, v: str) -> str:
        slugify(v)
        return v


class PostUpdate(BaseModel):
    """Partial update; only fields that are sent are changed."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    summary: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    author: str | None = Field(default=None, max_length=255)
    thumbnail_url: str | None = Field(default=None, max_length=2048)
    tags: list[str] | None = None
    category: PostCategory | None = None

    @field_validator("title", "summary")
    @classmethod
    def validate_trimmed(cls, v: str | None, info: ValidationInfo) -> str | None:
        if v is None:
            return None
        return _non_blank(v, info.field_name)

    @field_validator("title")
    @classmethod
    def validate_title_slug(cls, v: str | None) -> str | None:
        if v is not None:
            slugify(v)
        return v


class PostSummary(BaseModel):
    """List entry: everything except the body and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    summary: str
    author: str
    thumbnail_url: str
    category: str
    likes: int
    published_at: datetime


class CommentCreate(BaseModel):
    """Body for adding a comment to a post."""

    author: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)

    @field_validator("author", "content")
    @classmethod
    def validate_trimmed(cls, v: str, info: ValidationInfo) -> str:
        return _non_blank(v, info.field_name)


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    author: str
    content: str
    published_at: datetime


class PostDetail(PostSummary):
    """Full post as returned by read, like, create and update."""

    content: str
    tags: list[str]
    views: int
    updated_at: datetime
    comments: list[CommentOut] = Field(default_factory=list)
