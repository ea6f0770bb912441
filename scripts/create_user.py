import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userhub.database import Database, resolve_database_path
from userhub.errors import UserServiceError
from userhub.notifications import LoggingNotifier
from userhub.service import UserService


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a userhub user")
    parser.add_argument("name", help="Display name for the user")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("age", type=int, help="Age in years")
    parser.add_argument(
        "--db",
        dest="db_path",
        default=None,
        help="Path to the SQLite database (defaults to USERHUB_DB_PATH or data/userhub.sqlite3)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    db_env = args.db_path or os.getenv("USERHUB_DB_PATH")
    db_path = resolve_database_path(db_env)

    database = Database(db_path)
    database.initialize()
    service = UserService(database, LoggingNotifier())

    try:
        user = service.create_user(args.name, args.email, args.age)
    except UserServiceError as exc:  # duplicates, etc.
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Created user #{user.id}: {user.name} <{user.email}> (age {user.age}, {user.status.value})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
