"""Database engine and session management."""

from collections.abc import Generator
from functools import lru_cache

from fastapi import Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inkpost.core.config import Settings, get_settings


def create_db_engine(settings: Settings) -> Engine:
    """Build an engine for settings.DATABASE_URL. In-memory SQLite shares one connection."""
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=settings.DEBUG, **kwargs)
    return create_engine(url, pool_pre_ping=True, echo=settings.DEBUG)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Session factory bound to the engine for the cached application settings."""
    return create_session_factory(create_db_engine(get_settings()))


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency that yields a DB session and closes it when done.

    Uses the session factory installed on app.state by create_app, falling back
    to the one built from the cached settings.
    """
    factory = getattr(request.app.state, "session_factory", None) or get_session_factory()
    db = factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
