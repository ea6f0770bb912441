"""User lifecycle service: validation, persistence and notifications."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from .errors import (
    DuplicateEmailError,
    InvalidEmailFormatError,
    InvalidInputError,
    InvalidStatusTransitionError,
    UserNotFoundError,
)
from .models import ADULT_AGE, User, UserStatus
from .ports import Notifier, UserStore
from .validation import (
    validate_email_format,
    validate_identifier,
    validate_non_negative_age,
    validate_required_text,
)

logger = logging.getLogger("userhub.service")


class UserService:
    """Coordinate the user lifecycle on top of a store and a notifier.

    The service keeps no state of its own; every operation reads from and
    writes to the injected :class:`~userhub.ports.UserStore`. Notifications
    are dispatched after the write has succeeded and any failure while
    sending them is logged rather than reported to the caller.
    """

    def __init__(self, store: UserStore, notifier: Notifier) -> None:
        self._store = store
        self._notifier = notifier

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def create_user(self, name: Optional[str], email: Optional[str], age: Optional[int]) -> User:
        if not validate_required_text(name):
            raise InvalidInputError("Name must not be empty")
        if not validate_required_text(email):
            raise InvalidInputError("Email must not be empty")
        if not validate_non_negative_age(age):
            raise InvalidInputError("Age must be a non-negative integer")

        if not validate_email_format(email):
            raise InvalidEmailFormatError(f"Invalid email format: {email}")

        normalized_email = email.strip()
        if self._store.exists_by_email(normalized_email):
            raise DuplicateEmailError(f"A user with email {normalized_email} already exists")

        saved = self._store.create(
            User(id=None, name=name.strip(), email=normalized_email, age=age, status=UserStatus.ACTIVE)
        )
        logger.info("Created user %s <%s>", saved.id, saved.email)

        self._dispatch("welcome", self._notifier.send_welcome, email, name)
        return saved

    def update_user(self, user_id: Optional[int], name: Optional[str] = None, age: Optional[int] = None) -> User:
        """Apply a partial update to an existing user.

        A blank ``name`` is ignored. ``age`` is only applied when it is
        strictly positive, so an existing age can never be changed to zero
        through this operation.
        """

        user = self.get_user_by_id(user_id)

        if name is not None and name.strip():
            user = replace(user, name=name.strip())
        if age is not None and age > 0:
            if not validate_non_negative_age(age):
                raise InvalidInputError("Age is out of range")
            user = replace(user, age=age)

        updated = self._store.update(user)
        logger.info("Updated user %s", updated.id)
        return updated

    def deactivate_user(self, user_id: Optional[int]) -> User:
        user = self.get_user_by_id(user_id)

        if user.status is UserStatus.INACTIVE:
            raise InvalidStatusTransitionError(f"User {user.id} is already inactive")

        updated = self._store.update(user.deactivated())
        logger.info("Deactivated user %s", updated.id)

        self._dispatch("deactivation", self._notifier.send_deactivation, updated.email, updated.name)
        return updated

    def reactivate_user(self, user_id: Optional[int]) -> User:
        user = self.get_user_by_id(user_id)

        if user.status is not UserStatus.INACTIVE:
            raise InvalidStatusTransitionError(
                f"Only inactive users can be reactivated; user {user.id} is {user.status.value}"
            )

        updated = self._store.update(user.activated())
        logger.info("Reactivated user %s", updated.id)

        self._dispatch("reactivation", self._notifier.send_reactivation, updated.email, updated.name)
        return updated

    def delete_user(self, user_id: Optional[int]) -> None:
        user = self.get_user_by_id(user_id)
        self._store.delete(user)
        logger.info("Deleted user %s", user.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_user_by_id(self, user_id: Optional[int]) -> User:
        if not validate_identifier(user_id):
            raise InvalidInputError("User ID must be a positive integer")

        user = self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User not found. ID: {user_id}")
        return user

    def get_user_by_email(self, email: Optional[str]) -> User:
        if not validate_required_text(email):
            raise InvalidInputError("Email must not be empty")

        user = self._store.find_by_email(email.strip())
        if user is None:
            raise UserNotFoundError(f"User not found. Email: {email}")
        return user

    def list_active_users(self) -> List[User]:
        return self._store.find_by_status(UserStatus.ACTIVE)

    def search_users_by_name(self, fragment: Optional[str]) -> List[User]:
        if not validate_required_text(fragment):
            raise InvalidInputError("Search term must not be empty")
        return self._store.find_by_name_contains(fragment.strip())

    def count_active_users(self) -> int:
        return self._store.count_by_status(UserStatus.ACTIVE)

    def list_adult_users(self) -> List[User]:
        return self._store.find_by_age_at_least(ADULT_AGE)

    def list_adult_active_users(self) -> List[User]:
        return self._store.find_by_age_at_least_and_status(ADULT_AGE, UserStatus.ACTIVE)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _dispatch(self, kind: str, send: Callable[[str, str], None], email: str, name: str) -> None:
        try:
            send(email, name)
        except Exception:
            logger.warning("Failed to send %s notification to %s", kind, email, exc_info=True)


__all__ = ["UserService"]
