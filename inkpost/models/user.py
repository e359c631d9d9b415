"""ORM model for blog users (editors and admins who sign in to manage posts)."""

import enum

from sqlalchemy import Column, Integer, String

from inkpost.models.base import Base, TimestampMixin


class Role(str, enum.Enum):
    """Coarse-grained permission label stored on the user and embedded in tokens."""

    ADMIN = "admin"
    EDITOR = "editor"
    USER = "user"


ROLE_VALUES: frozenset[str] = frozenset(r.value for r in Role)


class User(TimestampMixin, Base):
    """
    User account for token authentication.

    password_hash is a bcrypt hash; the plaintext password is never stored.
    role: 'admin', 'editor' (default) or 'user'.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.EDITOR.value, server_default=Role.EDITOR.value)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r}, role={self.role!r})"
