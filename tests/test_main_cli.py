from pathlib import Path

import pytest

from main import _parse_args, main


def test_default_command_invokes_serve() -> None:
    args = _parse_args([])
    assert args.command == "serve"


def test_default_command_accepts_options_without_subcommand() -> None:
    args = _parse_args(["--host", "0.0.0.0", "--port", "8080"])
    assert args.command == "serve"
    assert args.host == "0.0.0.0"
    assert args.port == 8080


def test_config_option_precedes_implicit_serve() -> None:
    args = _parse_args(["--config", "settings.yaml"])
    assert args.command == "serve"
    assert args.config == "settings.yaml"
    assert args.port == 8000


def test_create_user_subcommand_parses_age() -> None:
    args = _parse_args(["create-user", "Alice", "alice@example.com", "30"])
    assert args.command == "create-user"
    assert (args.name, args.email, args.age) == ("Alice", "alice@example.com", 30)


def test_create_and_list_users(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("USERHUB_DB_PATH", str(tmp_path / "cli.sqlite3"))
    monkeypatch.setenv("USERHUB_CONFIG", str(tmp_path / "absent.yaml"))
    monkeypatch.delenv("USERHUB_NOTIFIER", raising=False)

    assert main(["create-user", "Alice", "alice@example.com", "30"]) == 0
    assert main(["create-user", "Alice", "alice@example.com", "31"]) == 1
    assert main(["list-users"]) == 0

    captured = capsys.readouterr()
    assert "Created user #1: Alice <alice@example.com>" in captured.out
    assert "already exists" in captured.err
    assert "1 user(s) found:" in captured.out
