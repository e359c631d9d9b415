"""Password hashing and JWT creation/verification for authentication."""

from datetime import datetime, timedelta
from typing import Any

import bcrypt
import jwt

# Default bcrypt cost (rounds) when the caller does not pass one.
BCRYPT_ROUNDS = 10

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
# bcrypt only reads the first 72 bytes of its input.
PASSWORD_MAX_BYTES = 72

# Claims every access token must carry.
REQUIRED_CLAIMS = ["exp", "iat", "sub", "role"]


def check_password_bytes(plain_password: str) -> str:
    """Return plain_password, or raise ValueError when its UTF-8 form exceeds PASSWORD_MAX_BYTES."""
    if len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return plain_password


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Raises ValueError past PASSWORD_MAX_BYTES."""
    pw_bytes = check_password_bytes(plain_password).encode("utf-8")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Input longer than PASSWORD_MAX_BYTES never matches; it still costs one bcrypt check.
    """
    pw_bytes = plain_password.encode("utf-8")
    try:
        matched = bcrypt.checkpw(pw_bytes[:PASSWORD_MAX_BYTES], hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
    return matched and len(pw_bytes) <= PASSWORD_MAX_BYTES


def create_access_token(
    sub: str | int,
    role: str,
    *,
    secret: str,
    algorithm: str,
    expires_minutes: int,
    now: datetime,
) -> str:
    """Create a JWT access token with sub (user id), role, iat and exp."""
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    *,
    secret: str,
    algorithm: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat).

    When now is given, expiry is judged against it instead of the wall clock.
    Raises jwt.PyJWTError on invalid, expired or incomplete token.
    """
    options: dict[str, Any] = {"require": REQUIRED_CLAIMS}
    if now is not None:
        options["verify_exp"] = False
        options["verify_iat"] = False
    payload = jwt.decode(token, secret, algorithms=[algorithm], options=options)
    if now is not None:
        exp = payload["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise jwt.DecodeError("Expiration Time claim (exp) must be a number")
        if exp <= now.timestamp():
            raise jwt.ExpiredSignatureError("Signature has expired")
    return payload
