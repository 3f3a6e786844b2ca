"""
Catalog Errors

Error kinds surfaced to API clients.

Every error carries an ``extensions`` mapping with a machine-readable
``code`` and ``kind`` plus the offending argument(s) under ``invalidArgs``.
graphql-core copies the ``extensions`` attribute of an exception raised in a
resolver into the GraphQL error, so clients can branch on it without
parsing messages:

    {
        "message": "wrong credentials",
        "extensions": {"code": "BAD_USER_INPUT", "kind": "InvalidCredentials"}
    }
"""

from typing import Any


class ErrorCode:
    """Standard error codes (Apollo-compatible)."""

    BAD_USER_INPUT = "BAD_USER_INPUT"
    UNAUTHENTICATED = "UNAUTHENTICATED"


class CatalogError(Exception):
    """
    Base class for errors returned to API clients.

    Attributes:
        message: Human-readable message
        code: Error code for programmatic handling
        invalid_args: The offending argument value(s), if any
        details: Additional diagnostic fields
    """

    code = ErrorCode.BAD_USER_INPUT

    def __init__(
        self,
        message: str,
        invalid_args: Any = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.invalid_args = invalid_args
        self.details = details or {}

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def extensions(self) -> dict[str, Any]:
        extensions: dict[str, Any] = {"code": self.code, "kind": self.kind}
        if self.invalid_args is not None:
            extensions["invalidArgs"] = self.invalid_args
        extensions.update(self.details)
        return extensions

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for HTTP error bodies."""
        return {"message": self.message, **self.extensions}


class ValidationError(CatalogError):
    """Input was rejected (duplicate title, too-short names, ...)."""


class AlreadyExists(ValidationError):
    """The natural key (e.g. username) is already taken."""


class AuthenticationRequired(CatalogError):
    """A mutation needs a current user and the request has none."""

    code = ErrorCode.UNAUTHENTICATED

    def __init__(self, message: str = "not authenticated"):
        super().__init__(message)


class AuthenticationFailed(CatalogError):
    """The bearer token could not be verified."""

    code = ErrorCode.UNAUTHENTICATED

    def __init__(self, message: str = "invalid or expired token"):
        super().__init__(message)


class InvalidCredentials(CatalogError):
    """
    Login failed.

    Deliberately identical for unknown usernames and wrong passwords.
    """

    def __init__(self):
        super().__init__("wrong credentials")


class PersistenceFailure(CatalogError):
    """The store rejected a write; the original error is kept as ``cause``."""

    def __init__(self, message: str, invalid_args: Any = None, cause: Exception | None = None):
        details = {"cause": str(cause)} if cause is not None else None
        super().__init__(message, invalid_args=invalid_args, details=details)
        self.cause = cause
