"""Domain errors raised by services and translated to HTTP responses in inkpost.main."""


class InkpostError(Exception):
    """Base class for errors that map to a fixed status code and client message."""

    status_code = 500
    default_message = "server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateUsernameError(InkpostError):
    """Raised when registering a username that already exists."""

    status_code = 400
    default_message = "user already exists"


class InvalidCredentialsError(InkpostError):
    """Unknown username or wrong password. Both cases share one message."""

    status_code = 400
    default_message = "invalid credentials"


class AuthError(InkpostError):
    status_code = 401


class MissingTokenError(AuthError):
    default_message = "no token"


class InvalidTokenError(AuthError):
    """Malformed, tampered or expired token. The reason is never sent to the client."""

    default_message = "invalid token"


class ForbiddenError(InkpostError):
    status_code = 403
    default_message = "forbidden"


class PostNotFoundError(InkpostError):
    status_code = 404
    default_message = "post not found"


class DuplicateSlugError(InkpostError):
    status_code = 400
    default_message = "a post with this title/slug already exists"


class InternalFailureError(InkpostError):
    """Unexpected store or signing failure. Logged server side, generic message to the client."""


class TokenSigningError(InternalFailureError):
    """Raised when a token cannot be signed (e.g. JWT_SECRET not configured)."""

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
