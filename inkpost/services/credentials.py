"""Credential store: user records with bcrypt password hashes and unique usernames."""

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkpost.core.errors import DuplicateUsernameError, InvalidCredentialsError
from inkpost.core.security import check_password_bytes, hash_password, verify_password
from inkpost.models.user import ROLE_VALUES, Role, User

if TYPE_CHECKING:
    from inkpost.core.config import Settings

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """Hash compared against when the username is unknown, so both failures cost one bcrypt check."""
    return hash_password("inkpost-no-such-user", rounds)


def _normalize_role(role: str | Role | None) -> str:
    if role is None:
        return Role.EDITOR.value
    value = role.value if isinstance(role, Role) else str(role).strip().lower()
    if value not in ROLE_VALUES:
        raise ValueError(f"role must be one of {sorted(ROLE_VALUES)}, got {role!r}")
    return value


class CredentialStore:
    """
    Owns user identity records.

    Passwords are hashed with a fresh bcrypt salt at BCRYPT_ROUNDS before they
    reach the database. Username uniqueness is enforced by the unique index on
    users.username, so registration is a single insert with no lookup first.
    """

    def __init__(self, db: Session, settings: "Settings") -> None:
        self._db = db
        self._settings = settings

    def register(
        self,
        username: str,
        password: str,
        role: str | Role | None = None,
    ) -> User:
        """
        Create a user with a hashed password. Role defaults to 'editor'.

        Raises DuplicateUsernameError if the username is taken; the existing
        record is left untouched. Raises ValueError for a blank username or a
        password longer than 72 bytes.
        """
        username = username.strip()
        if not username:
            raise ValueError("username must be non-empty")
        check_password_bytes(password)
        user = User(
            username=username,
            password_hash=hash_password(password, self._settings.BCRYPT_ROUNDS),
            role=_normalize_role(role),
        )
        self._db.add(user)
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            logger.info("Registration rejected: username=%s already exists", username)
            raise DuplicateUsernameError() from e
        self._db.refresh(user)
        logger.info("Registered user id=%s username=%s role=%s", user.id, user.username, user.role)
        return user

    def verify_credentials(self, username: str, password: str) -> User:
        """
        Return the user when the password matches its stored hash.

        Unknown username and wrong password raise the same InvalidCredentialsError.
        """
        user = self._db.query(User).filter(User.username == username.strip()).first()
        if user is None:
            verify_password(password, _dummy_hash(self._settings.BCRYPT_ROUNDS))
            logger.info("Login failed for username=%s", username.strip())
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed for username=%s", user.username)
            raise InvalidCredentialsError()
        return user

    def get_user(self, user_id: int) -> User | None:
        return self._db.get(User, user_id)

    def change_password(self, user: User, new_password: str) -> User:
        """Store a new hash (new salt) for user. The only path that rewrites password_hash."""
        check_password_bytes(new_password)
        user.password_hash = hash_password(new_password, self._settings.BCRYPT_ROUNDS)
        self._db.commit()
        self._db.refresh(user)
        logger.info("Password changed for user id=%s", user.id)
        return user

    def set_role(self, user: User, role: str | Role) -> User:
        """
        Change the user's role. The password hash is not touched.

        Tokens already issued keep their old role claim until they expire.
        """
        user.role = _normalize_role(role)
        self._db.commit()
        self._db.refresh(user)
        logger.info("Role changed for user id=%s to %s", user.id, user.role)
        return user
