from __future__ import annotations


class NoteboardError(Exception):
    """Base class for application errors."""


class NotAuthenticatedError(NoteboardError):
    """Raised before any store call when no user is attached to the request."""

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)


class AccessDeniedError(NoteboardError):
    """The record does not exist or is not visible/mutable by the caller.

    Both cases share one error so callers cannot probe for foreign ids.
    """


class BackendError(NoteboardError):
    """The record store could not be reached or rejected the request."""


class AuthError(NoteboardError):
    """An authentication flow failed; the message is safe to show to users."""
