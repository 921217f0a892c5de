"""
Domain errors raised by services and repositories.
The API layer maps each kind to an HTTP status per endpoint; none of them leak to clients as 5xx.
"""


class SocialMediaError(Exception):
    """Base for all application errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationFailure(SocialMediaError):
    """Input violates a business rule (blank text, short password, unknown account, ...)."""


class AuthFailure(SocialMediaError):
    """Username/password pair does not match any account."""


class NotFound(SocialMediaError):
    """Lookup by id yielded no row."""


class StorageFailure(SocialMediaError):
    """Database rejected the statement or was unreachable. Cause is chained."""
