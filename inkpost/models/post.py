"""ORM models for blog posts and their comments."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from inkpost.models.base import Base, utcnow

POST_CATEGORIES = ("Frontend", "Backend", "DevOps", "Career", "Other")


class Post(Base):
    """A published blog post, addressed by its unique slug."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    summary = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String(255), nullable=False, default="Anonymous")
    thumbnail_url = Column(String(2048), nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)
    category = Column(String(32), nullable=False)
    likes = Column(Integer, nullable=False, default=0, server_default="0")
    views = Column(Integer, nullable=False, default=0, server_default="0")
    published_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by=lambda: (Comment.published_at.desc(), Comment.id.desc()),
    )


class Comment(Base):
    """Reader comment attached to a post."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    published_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    post = relationship("Post", back_populates="comments")
