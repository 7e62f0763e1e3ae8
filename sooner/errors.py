"""
Error taxonomy for Sooner.

Domain code raises these; the API layer translates them into an HTTP status
and an ``{"error", "code"}`` body in one exception handler.
"""


class SoonerError(Exception):
    """Base class for all expected failures."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NotFound(SoonerError):
    """User or task absent."""

    status_code = 404
    code = "NOT_FOUND"


class Conflict(SoonerError):
    """Duplicate email. Clients expect 400 here, not 409."""

    status_code = 400
    code = "EMAIL_EXISTS"


class BadRequest(SoonerError):
    status_code = 400
    code = "BAD_REQUEST"


class Unauthenticated(SoonerError):
    """No credential was presented, or the credential was wrong."""

    status_code = 401
    code = "AUTH_REQUIRED"


class InvalidToken(SoonerError):
    """A token was presented but failed signature or expiry checks."""

    status_code = 401
    code = "INVALID_TOKEN"


class Forbidden(SoonerError):
    status_code = 403
    code = "FORBIDDEN"


class UpstreamError(SoonerError):
    """The reasoning service failed or answered with an unusable payload."""

    status_code = 502
    code = "UPSTREAM_ERROR"


class UpstreamTimeout(UpstreamError):
    status_code = 504
    code = "UPSTREAM_TIMEOUT"


class PersistenceError(SoonerError):
    """The document store could not be read or written."""

    status_code = 500
    code = "PERSISTENCE_ERROR"


__all__ = [
    "BadRequest",
    "Conflict",
    "Forbidden",
    "InvalidToken",
    "NotFound",
    "PersistenceError",
    "SoonerError",
    "Unauthenticated",
    "UpstreamError",
    "UpstreamTimeout",
]
