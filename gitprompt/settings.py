"""Settings file and environment overrides."""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from gitprompt.errors import SettingsError

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime knobs; every field is optional."""

    timeout: float | None = None
    max_workers: int | None = None
    debug: bool = False


def settings_path(env: Mapping[str, str]) -> Path:
    explicit = env.get("GITPROMPT_SETTINGS")
    if explicit:
        return Path(explicit)
    config_home = env.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "gitprompt" / "settings.json"


def _load_file(path: Path) -> dict[str, object]:
    if not path.is_file():
        return {}

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Invalid JSON in {path}") from exc

    if not isinstance(raw, dict):
        raise SettingsError(f"Invalid settings format in {path}")
    return raw


def _expect_timeout(value: object) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise SettingsError(f"Invalid timeout: {value!r}")
    return float(value)


def _expect_max_workers(value: object) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise SettingsError(f"Invalid max_workers: {value!r}")
    return value


def _parse_number(name: str, text: str, kind: type) -> object:
    try:
        return kind(text)
    except ValueError as exc:
        raise SettingsError(f"Invalid {name}: {text!r}") from exc


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Load settings.json, then apply GITPROMPT_* environment overrides."""
    env = os.environ if env is None else env
    raw = _load_file(settings_path(env))

    timeout: object = raw.get("timeout")
    max_workers: object = raw.get("max_workers")
    debug: object = raw.get("debug", False)

    if env.get("GITPROMPT_TIMEOUT"):
        timeout = _parse_number("GITPROMPT_TIMEOUT", env["GITPROMPT_TIMEOUT"], float)
    if env.get("GITPROMPT_MAX_WORKERS"):
        max_workers = _parse_number("GITPROMPT_MAX_WORKERS", env["GITPROMPT_MAX_WORKERS"], int)
    if env.get("GITPROMPT_DEBUG"):
        debug = env["GITPROMPT_DEBUG"].strip().lower() in _TRUE_VALUES

    if not isinstance(debug, bool):
        raise SettingsError(f"Invalid debug: {debug!r}")

    return Settings(
        timeout=_expect_timeout(timeout),
        max_workers=_expect_max_workers(max_workers),
        debug=debug,
    )
