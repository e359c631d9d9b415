"""Post service: CRUD over blog posts and their comments, addressed by slug."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkpost.core.errors import DuplicateSlugError, PostNotFoundError
from inkpost.core.slug import slugify
from inkpost.models.post import Comment, Post
from inkpost.schemas.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Anonymous"


def _get_by_slug(db: Session, slug: str) -> Post:
    post = db.query(Post).filter(Post.slug == slug).first()
    if post is None:
        raise PostNotFoundError()
    return post


def _increment(db: Session, slug: str, column) -> Post:
    """Atomic counter bump in a single UPDATE; returns the refreshed post."""
    updated = (
        db.query(Post)
        .filter(Post.slug == slug)
        .update({column: column + 1}, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        raise PostNotFoundError()
    db.commit()
    post = _get_by_slug(db, slug)
    db.refresh(post)
    return post


def _commit_slug_change(db: Session, slug: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Post rejected: slug=%s already exists", slug)
        raise DuplicateSlugError() from e


def create_post(db: Session, data: PostCreate) -> Post:
    """Insert a post; the slug comes from the title. Raises DuplicateSlugError on collision."""
    slug = slugify(data.title)
    post = Post(
        title=data.title,
        slug=slug,
        summary=data.summary,
        content=data.content,
        author=(data.author or "").strip() or DEFAULT_AUTHOR,
        thumbnail_url=data.thumbnail_url,
        tags=list(data.tags),
        category=data.category,
    )
    db.add(post)
    _commit_slug_change(db, slug)
    db.refresh(post)
    logger.info("Created post id=%s slug=%s", post.id, post.slug)
    return post


def list_posts(db: Session) -> list[Post]:
    """All posts, newest first."""
    return db.query(Post).order_by(Post.published_at.desc(), Post.id.desc()).all()


def get_post(db: Session, slug: str, count_view: bool = True) -> Post:
    """Return the post for slug, counting a view unless count_view is False."""
    if count_view:
        return _increment(db, slug, Post.views)
    return _get_by_slug(db, slug)


def like_post(db: Session, slug: str) -> Post:
    return _increment(db, slug, Post.likes)


def update_post(db: Session, slug: str, patch: PostUpdate) -> Post:
    """
    Apply the fields present in patch. A new title re-derives the slug.

    Raises PostNotFoundError, or DuplicateSlugError when the new slug is taken.
    """
    post = _get_by_slug(db, slug)
    changes = patch.model_dump(exclude_unset=True, exclude_none=True)
    if "title" in changes:
        post.slug = slugify(changes["title"])
    if "author" in changes:
        changes["author"] = changes["author"].strip() or DEFAULT_AUTHOR
    for field, value in changes.items():
        setattr(post, field, value)
    _commit_slug_change(db, post.slug)
    db.refresh(post)
    logger.info("Updated post id=%s slug=%s fields=%s", post.id, post.slug, sorted(changes))
    return post


def delete_post(db: Session, slug: str) -> None:
    """Delete the post and its comments."""
    post = _get_by_slug(db, slug)
    post_id = post.id
    db.delete(post)
    db.commit()
    logger.info("Deleted post id=%s slug=%s", post_id, slug)


def add_comment(db: Session, slug: str, author: str, content: str) -> Comment:
    post = _get_by_slug(db, slug)
    comment = Comment(post_id=post.id, author=author.strip(), content=content.strip())
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def list_comments(db: Session, slug: str) -> list[Comment]:
    """Comments on the post, newest first."""
    post = _get_by_slug(db, slug)
    return (
        db.query(Comment)
        .filter(Comment.post_id == post.id)
        .order_by(Comment.published_at.desc(), Comment.id.desc())
        .all()
    )
