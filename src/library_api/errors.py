from typing import Any


class LibraryError(Exception):
    """Base exception for catalog domain errors that map onto a client-facing status."""

    code: str = "internal_error"
    status_code: int = 500
    prefix: str = "error"

    def __init__(self, message: str | None = None, details: Any = None) -> None:
        self.message = message
        self.details = details
        super().__init__(f"{self.prefix}: {message}" if message else self.prefix)


class BadRequestError(LibraryError):
    """Raised when client input is invalid or violates the copies invariant."""

    code = "bad_request"
    status_code = 400
    prefix = "bad request"


class NotFoundError(LibraryError):
    """Raised when the referenced book does not exist."""

    code = "not_found"
    status_code = 404
    prefix = "not found"


class ConflictError(LibraryError):
    """Raised when a write violates a uniqueness constraint (duplicate isbn)."""

    code = "conflict"
    status_code = 409
    prefix = "conflict"
