"""Capabilities consumed by :class:`userhub.service.UserService`."""

from __future__ import annotations

from typing import List, Optional, Protocol

from .models import User, UserStatus


class UserStore(Protocol):
    """Durable keyed record store for :class:`User` entities."""

    def create(self, user: User) -> User:
        """Persist ``user`` and return it with ``id`` and ``created_at`` assigned."""

    def find_by_id(self, user_id: int) -> Optional[User]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def find_by_name_contains(self, fragment: str) -> List[User]: ...

    def find_by_status(self, status: UserStatus) -> List[User]: ...

    def find_by_age_at_least(self, min_age: int) -> List[User]: ...

    def find_by_age_at_least_and_status(self, min_age: int, status: UserStatus) -> List[User]: ...

    def exists_by_email(self, email: str) -> bool: ...

    def count_by_status(self, status: UserStatus) -> int: ...

    def update(self, user: User) -> User: ...

    def delete(self, user: User) -> None: ...


class Notifier(Protocol):
    """Best-effort dispatch of account notifications.

    Implementations may raise; callers treat every message as fire-and-forget.
    """

    def send_welcome(self, email: str, name: str) -> None: ...

    def send_deactivation(self, email: str, name: str) -> None: ...

    def send_reactivation(self, email: str, name: str) -> None: ...


__all__ = ["Notifier", "UserStore"]
