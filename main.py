"""Command-line interface for the userhub service."""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from userhub.config import Settings, load_settings
from userhub.database import Database
from userhub.errors import UserServiceError
from userhub.notifications import build_notifier
from userhub.service import UserService

logger = logging.getLogger("userhub.main")

_KNOWN_COMMANDS = {"serve", "init-db", "create-user", "list-users"}


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="userhub user directory utilities")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML configuration file (defaults to USERHUB_CONFIG or config/userhub.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    subparsers.add_parser("init-db", help="Initialise the user database")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP service")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address for the API")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port for the API (default: 8000)")

    create_parser = subparsers.add_parser("create-user", help="Register a new user")
    create_parser.add_argument("name", help="Display name for the user")
    create_parser.add_argument("email", help="Unique email address")
    create_parser.add_argument("age", type=int, help="Age in years")

    subparsers.add_parser("list-users", help="Print every registered user")

    args_list = list(argv) if argv is not None else sys.argv[1:]
    global_options: list[str] = []
    if args_list[:1] == ["--config"] and len(args_list) >= 2:
        global_options, args_list = args_list[:2], args_list[2:]

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args([*global_options, *args_list])
        if first not in _KNOWN_COMMANDS:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args([*global_options, *args_list])
            args_list = ["serve", *args_list]
    return parser.parse_args([*global_options, *args_list])


def _initialise_database(settings: Settings) -> Database:
    database = Database(settings.database_path)
    database.initialize()
    logger.info("Database initialised at %s", settings.database_path)
    return database


def _serve(*, database: Database, settings: Settings, host: str, port: int) -> None:
    from userhub.api import create_app
    import uvicorn

    logger.info("Starting userhub API on http://%s:%s", host, port)
    app = create_app(store=database, notifier=build_notifier(settings), settings=settings)
    uvicorn.run(app, host=host, port=port, log_level="info")


def _create_user(service: UserService, name: str, email: str, age: int) -> int:
    try:
        user = service.create_user(name, email, age)
    except UserServiceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Created user #{user.id}: {user.name} <{user.email}>")
    return 0


def _list_users(database: Database) -> None:
    users = database.list_users()
    if not users:
        print("No users are currently registered.")
        return

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':>4}  {'Name':<24}  {'Email':<32}  {'Age':>3}  {'Status':<9}  Created")
    print("-" * 96)
    for user in users:
        created = user.created_at.strftime("%Y-%m-%d %H:%M:%S %Z") if user.created_at else ""
        print(
            f"{user.id:>4}  {user.name:<24}  {user.email:<32}  {user.age:>3}  {user.status.value:<9}  {created}"
        )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    args = _parse_args(argv)
    settings = load_settings(Path(args.config) if args.config else None)
    database = _initialise_database(settings)

    if args.command == "serve":
        _serve(database=database, settings=settings, host=args.host, port=args.port)
    elif args.command == "create-user":
        service = UserService(database, build_notifier(settings))
        return _create_user(service, args.name, args.email, args.age)
    elif args.command == "list-users":
        _list_users(database)
    elif args.command == "init-db":
        print("Database initialisation complete.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
