"""SQLite-backed persistence for user accounts."""
from __future__ import annotations

import sqlite3
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .errors import DuplicateEmailError, UserNotFoundError
from .models import MAX_STORED_INTEGER, User, UserStatus


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the application database."""

    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "userhub.sqlite3").resolve(strict=False)


def _current_timestamp() -> datetime:
    return datetime.now(timezone.utc)


def _serialize_datetime(value: datetime) -> str:
    return value.isoformat()


def _parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value)


class Database:
    """Simple wrapper around SQLite implementing the ``UserStore`` capability.

    Every call opens its own connection so a single instance can be shared
    between threads. Email uniqueness is enforced by the schema, which backs
    the existence check performed by the service before inserting.
    """

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def initialize(self) -> None:
        """Create the required tables if they do not already exist."""

        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL CHECK (length(trim(name)) > 0),
                    email TEXT NOT NULL UNIQUE CHECK (length(trim(email)) > 0),
                    age INTEGER NOT NULL CHECK (age >= 0),
                    status TEXT NOT NULL DEFAULT 'ACTIVE'
                        CHECK (status IN ('ACTIVE', 'INACTIVE', 'SUSPENDED')),
                    created_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_users_status ON users(status);
                """
            )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, user: User) -> User:
        """Insert ``user`` and return the stored copy with its identifier."""

        created_at = user.created_at or _current_timestamp()

        with self._connect() as conn:
            try:
                cursor = conn.execute(
                    """
                    INSERT INTO users (name, email, age, status, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        user.name,
                        user.email,
                        user.age,
                        user.status.value,
                        _serialize_datetime(created_at),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                if self._is_email_conflict(exc):
                    raise DuplicateEmailError(f"A user with email {user.email} already exists") from exc
                raise

            user_id = cursor.lastrowid

        return replace(user, id=user_id, created_at=created_at)

    def update(self, user: User) -> User:
        if user.id is None:
            raise ValueError("Cannot update a user that has not been persisted")

        with self._connect() as conn:
            try:
                cursor = conn.execute(
                    "UPDATE users SET name = ?, email = ?, age = ?, status = ? WHERE id = ?",
                    (user.name, user.email, user.age, user.status.value, user.id),
                )
            except sqlite3.IntegrityError as exc:
                if self._is_email_conflict(exc):
                    raise DuplicateEmailError(f"A user with email {user.email} already exists") from exc
                raise
            if cursor.rowcount == 0:
                raise UserNotFoundError(f"User {user.id} not found")

        refreshed = self.find_by_id(user.id)
        if refreshed is None:
            raise UserNotFoundError(f"User {user.id} not found")
        return refreshed

    def delete(self, user: User) -> None:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM users WHERE id = ?", (user.id,))
            if cursor.rowcount == 0:
                raise UserNotFoundError(f"User {user.id} not found")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_by_id(self, user_id: int) -> Optional[User]:
        if not -MAX_STORED_INTEGER - 1 <= user_id <= MAX_STORED_INTEGER:
            return None
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def find_by_email(self, email: str) -> Optional[User]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def exists_by_email(self, email: str) -> bool:
        with self._connect() as conn:
            row = conn.execute("SELECT 1 FROM users WHERE email = ? LIMIT 1", (email,)).fetchone()
        return row is not None

    def find_by_name_contains(self, fragment: str) -> List[User]:
        # instr() keeps the match case-sensitive; LIKE would fold ASCII case.
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM users WHERE instr(name, ?) > 0 ORDER BY id",
                (fragment,),
            ).fetchall()
        return [self._row_to_user(row) for row in rows]

    def find_by_status(self, status: UserStatus) -> List[User]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM users WHERE status = ? ORDER BY id",
                (status.value,),
            ).fetchall()
        return [self._row_to_user(row) for row in rows]

    def find_by_age_at_least(self, min_age: int) -> List[User]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM users WHERE age >= ? ORDER BY id",
                (min_age,),
            ).fetchall()
        return [self._row_to_user(row) for row in rows]

    def find_by_age_at_least_and_status(self, min_age: int, status: UserStatus) -> List[User]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM users WHERE age >= ? AND status = ? ORDER BY id",
                (min_age, status.value),
            ).fetchall()
        return [self._row_to_user(row) for row in rows]

    def count_by_status(self, status: UserStatus) -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS total FROM users WHERE status = ?",
                (status.value,),
            ).fetchone()
        return int(row["total"])

    def list_users(self) -> List[User]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY id").fetchall()
        return [self._row_to_user(row) for row in rows]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _is_email_conflict(exc: sqlite3.IntegrityError) -> bool:
        return "users.email" in str(exc)

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=int(row["id"]),
            name=str(row["name"]),
            email=str(row["email"]),
            age=int(row["age"]),
            status=UserStatus(row["status"]),
            created_at=_parse_datetime(str(row["created_at"])),
        )


__all__ = ["Database", "resolve_database_path"]
