"""
Create a user (e.g. the first admin) without going through the HTTP API. Run from project root:
  python -m inkpost.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m inkpost.scripts.create_user admin your-secure-password admin
"""
import argparse
import logging
import sys

from inkpost.core.config import get_settings
from inkpost.core.database import create_db_engine, create_session_factory
from inkpost.core.errors import DuplicateUsernameError
from inkpost.core.security import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
)
from inkpost.models.user import Role
from inkpost.services.credentials import CredentialStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Inkpost user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.EDITOR.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    if len(args.password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        print(f"Password must be at most {PASSWORD_MAX_BYTES} bytes.", file=sys.stderr)
        return 1

    settings = get_settings()
    db = create_session_factory(create_db_engine(settings))()
    try:
        user = CredentialStore(db, settings).register(username, args.password, args.role)
    except DuplicateUsernameError:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
