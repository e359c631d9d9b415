"""Core app configuration, database and security primitives."""

from inkpost.core.config import Settings, get_settings
from inkpost.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
