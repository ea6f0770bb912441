"""The storage and service layers must import without the web stack installed."""

from __future__ import annotations

import importlib
import sys

import pytest


def _forget_userhub(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(sys.modules):
        if name == "userhub" or name.startswith("userhub."):
            monkeypatch.delitem(sys.modules, name)


def test_core_modules_import_without_fastapi(monkeypatch: pytest.MonkeyPatch) -> None:
    _forget_userhub(monkeypatch)
    monkeypatch.setitem(sys.modules, "fastapi", None)

    package = importlib.import_module("userhub")
    database_module = importlib.import_module("userhub.database")

    assert package.UserService.__module__ == "userhub.service"
    assert hasattr(database_module, "Database")
    assert "userhub.api" not in sys.modules


def test_create_app_needs_fastapi_only_when_called(monkeypatch: pytest.MonkeyPatch) -> None:
    _forget_userhub(monkeypatch)
    monkeypatch.setitem(sys.modules, "fastapi", None)

    package = importlib.import_module("userhub")

    with pytest.raises(ImportError):
        package.create_app()
