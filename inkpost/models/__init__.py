"""SQLAlchemy ORM models."""

from inkpost.models.base import Base
from inkpost.models.post import Comment, Post
from inkpost.models.user import Role, User

__all__ = ["Base", "Comment", "Post", "Role", "User"]
