"""Configuration management for the user directory service."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from .database import resolve_database_path

NOTIFIER_KINDS = frozenset({"log", "webhook"})


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the service."""

    database_path: Path
    notifier: str = "log"
    webhook_url: Optional[str] = None
    webhook_timeout: float = 10.0

    @staticmethod
    def from_dict(data: Dict[str, object], base_path: Path | None = None) -> "Settings":
        """Create :class:`Settings` from raw dictionary data."""
        raw_db_path = data.get("database_path")
        if raw_db_path:
            candidate = Path(str(raw_db_path)).expanduser()
            if not candidate.is_absolute() and base_path is not None:
                candidate = base_path / candidate
            database_path = candidate.resolve(strict=False)
        else:
            database_path = resolve_database_path(None)

        notifier_raw = data.get("notifier") or {}
        if isinstance(notifier_raw, str):
            notifier_raw = {"kind": notifier_raw}
        if not isinstance(notifier_raw, dict):
            raise ValueError("The 'notifier' section must be a mapping or a notifier name")

        webhook_url = notifier_raw.get("webhook_url")
        return Settings(
            database_path=database_path,
            notifier=str(notifier_raw.get("kind", "log")).strip().lower(),
            webhook_url=str(webhook_url).strip() if webhook_url else None,
            webhook_timeout=_parse_timeout(notifier_raw.get("timeout", 10.0)),
        )


def _parse_timeout(value: object) -> float:
    try:
        timeout = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid notifier timeout: {value!r}") from exc
    if timeout <= 0:
        raise ValueError("Notifier timeout must be positive")
    return timeout


def _validate(settings: Settings) -> Settings:
    if settings.notifier not in NOTIFIER_KINDS:
        raise ValueError(
            f"Unknown notifier '{settings.notifier}'; expected one of: {', '.join(sorted(NOTIFIER_KINDS))}"
        )
    if settings.notifier == "webhook" and not settings.webhook_url:
        raise ValueError("The webhook notifier requires a webhook URL")
    return settings


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Load settings from a YAML file and apply environment overrides."""
    env = os.environ if environ is None else environ
    path = config_path or resolve_config_path(env.get("USERHUB_CONFIG"))

    raw: Dict[str, object] = {}
    if path.is_file():
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
        if not isinstance(raw, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")

    settings = Settings.from_dict(raw, base_path=path.parent)

    db_env = env.get("USERHUB_DB_PATH")
    notifier_env = env.get("USERHUB_NOTIFIER")
    webhook_env = env.get("USERHUB_WEBHOOK_URL")
    timeout_env = env.get("USERHUB_WEBHOOK_TIMEOUT")

    settings = Settings(
        database_path=resolve_database_path(db_env) if db_env else settings.database_path,
        notifier=notifier_env.strip().lower() if notifier_env else settings.notifier,
        webhook_url=webhook_env.strip() if webhook_env else settings.webhook_url,
        webhook_timeout=_parse_timeout(timeout_env) if timeout_env else settings.webhook_timeout,
    )
    return _validate(settings)


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "userhub.yaml").resolve(strict=False)
    return candidate


__all__ = ["Settings", "load_settings", "resolve_config_path"]
