"""Error taxonomy raised by the user lifecycle service."""

from __future__ import annotations


class UserServiceError(Exception):
    """Base class for failures reported to callers of :class:`UserService`."""

    code = "user_service_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(UserServiceError):
    """A required parameter is missing or malformed."""

    code = "invalid_input"


class InvalidEmailFormatError(UserServiceError):
    """An email address is present but fails the syntactic check."""

    code = "invalid_email_format"


class DuplicateEmailError(UserServiceError):
    """The email address is already registered to another user."""

    code = "duplicate_email"


class UserNotFoundError(UserServiceError):
    code = "not_found"


class InvalidStatusTransitionError(UserServiceError):
    """The requested status change is not allowed from the current status."""

    code = "invalid_status_transition"


class NotificationError(RuntimeError):
    """Raised by notifiers when a message could not be delivered."""


__all__ = [
    "DuplicateEmailError",
    "InvalidEmailFormatError",
    "InvalidInputError",
    "InvalidStatusTransitionError",
    "NotificationError",
    "UserNotFoundError",
    "UserServiceError",
]
