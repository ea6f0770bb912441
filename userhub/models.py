"""Domain models for the user directory."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

ADULT_AGE = 18

# Integer columns are signed 64-bit.
MAX_STORED_INTEGER = 2**63 - 1


class UserStatus(str, Enum):
    """Lifecycle state of a user account.

    Only ``ACTIVE -> INACTIVE`` and ``INACTIVE -> ACTIVE`` are reachable.
    ``SUSPENDED`` is reserved and no operation moves a user into or out of it.
    """

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


@dataclass(frozen=True)
class User:
    """Represents a user account stored in the directory."""

    id: Optional[int]
    name: str
    email: str
    age: int
    status: UserStatus = UserStatus.ACTIVE
    created_at: Optional[datetime] = None

    def is_adult(self) -> bool:
        return self.age >= ADULT_AGE

    def activated(self) -> "User":
        return replace(self, status=UserStatus.ACTIVE)

    def deactivated(self) -> "User":
        return replace(self, status=UserStatus.INACTIVE)


__all__ = ["ADULT_AGE", "MAX_STORED_INTEGER", "User", "UserStatus"]
