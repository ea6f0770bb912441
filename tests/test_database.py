from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from userhub.database import Database, resolve_database_path
from userhub.errors import DuplicateEmailError, InvalidInputError, UserNotFoundError
from userhub.models import User, UserStatus
from userhub.notifications import LoggingNotifier
from userhub.service import UserService


@pytest.fixture()
def database(tmp_path: Path) -> Database:
    db_path = tmp_path / "userhub.sqlite3"
    db = Database(db_path)
    db.initialize()
    return db


def _new_user(name: str, email: str, age: int = 30) -> User:
    return User(id=None, name=name, email=email, age=age)


def test_create_assigns_identifier_and_timestamp(database: Database) -> None:
    user = database.create(_new_user("Alice", "alice@example.com"))

    assert user.id is not None
    assert user.created_at is not None
    assert user.created_at.tzinfo is not None

    stored = database.find_by_id(user.id)
    assert stored == user


def test_initialize_is_idempotent(database: Database) -> None:
    database.create(_new_user("Alice", "alice@example.com"))
    database.initialize()
    assert len(database.list_users()) == 1


def test_unique_constraint_rejects_duplicate_email(database: Database) -> None:
    database.create(_new_user("Alice", "alice@example.com"))
    with pytest.raises(DuplicateEmailError):
        database.create(_new_user("Imposter", "alice@example.com"))


def test_email_lookups(database: Database) -> None:
    database.create(_new_user("Alice", "alice@example.com"))

    assert database.exists_by_email("alice@example.com") is True
    assert database.exists_by_email("ALICE@example.com") is False
    assert database.find_by_email("alice@example.com").name == "Alice"
    assert database.find_by_email("bob@example.com") is None


def test_name_search_is_case_sensitive(database: Database) -> None:
    for name, email in (("Anna", "anna@example.com"), ("Annika", "annika@example.com"), ("Bob", "bob@example.com")):
        database.create(_new_user(name, email))

    assert [user.name for user in database.find_by_name_contains("Ann")] == ["Anna", "Annika"]
    assert database.find_by_name_contains("ann") == []
    assert [user.name for user in database.find_by_name_contains("o")] == ["Bob"]


def test_status_and_age_queries(database: Database) -> None:
    alice = database.create(_new_user("Alice", "alice@example.com", 17))
    bob = database.create(_new_user("Bob", "bob@example.com", 18))
    carol = database.create(_new_user("Carol", "carol@example.com", 40))
    database.update(carol.deactivated())

    assert [user.id for user in database.find_by_status(UserStatus.ACTIVE)] == [alice.id, bob.id]
    assert database.count_by_status(UserStatus.ACTIVE) == 2
    assert database.count_by_status(UserStatus.SUSPENDED) == 0
    assert [user.id for user in database.find_by_age_at_least(18)] == [bob.id, carol.id]
    assert [user.id for user in database.find_by_age_at_least_and_status(18, UserStatus.ACTIVE)] == [bob.id]


def test_update_persists_changes(database: Database) -> None:
    user = database.create(_new_user("Alice", "alice@example.com"))

    updated = database.update(replace(user, name="Alicia", age=31, status=UserStatus.INACTIVE))

    assert updated.name == "Alicia"
    assert updated.age == 31
    assert updated.status is UserStatus.INACTIVE
    assert updated.created_at == user.created_at


def test_update_and_delete_missing_user(database: Database) -> None:
    ghost = User(id=42, name="Ghost", email="ghost@example.com", age=1)
    with pytest.raises(UserNotFoundError):
        database.update(ghost)
    with pytest.raises(UserNotFoundError):
        database.delete(ghost)


def test_delete_removes_row(database: Database) -> None:
    user = database.create(_new_user("Alice", "alice@example.com"))
    database.delete(user)
    assert database.find_by_id(user.id) is None


def test_resolve_database_path_prefers_explicit_value(tmp_path: Path) -> None:
    explicit = tmp_path / "custom.sqlite3"
    assert resolve_database_path(str(explicit)) == explicit.resolve()
    assert resolve_database_path(None).name == "userhub.sqlite3"


def test_find_by_id_outside_integer_range_returns_none(database: Database) -> None:
    assert database.find_by_id(2**63) is None
    assert database.find_by_id(-(2**63) - 1) is None


def test_service_handles_oversized_integers(database: Database) -> None:
    service = UserService(database, LoggingNotifier())

    with pytest.raises(UserNotFoundError):
        service.get_user_by_id(2**63)
    with pytest.raises(InvalidInputError):
        service.create_user("Al", "al@example.com", 2**63)

    assert database.list_users() == []
