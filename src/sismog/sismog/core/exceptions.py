from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class RemoteError(DomainError):
    """Raised by a collaborator (data service, identity service) when a call fails.

    The message is shown to the user verbatim.
    """

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class NotFoundError(RemoteError):
    """Raised when an update/delete targets an id that does not exist."""


class ConflictError(RemoteError):
    """Raised when a write violates a unique constraint."""


class PartialSuccessError(DomainError):
    """Raised when the record was saved but a later step (credential) failed."""
