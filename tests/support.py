"""Shared fixtures: settings and an in-memory SQLite database with all tables created."""

from sqlalchemy.orm import Session, sessionmaker

from inkpost.core.config import Settings
from inkpost.core.database import create_db_engine, create_session_factory
from inkpost.models import Base

TEST_SECRET = "inkpost-test-secret"


def make_settings(**overrides: object) -> Settings:
    """Settings for tests: in-memory SQLite, fixed secret, cheapest bcrypt cost."""
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session_factory(settings: Settings) -> sessionmaker[Session]:
    engine = create_db_engine(settings)
    Base.metadata.create_all(engine)
    return create_session_factory(engine)
