"""Settings file I/O for meetroom.

Manages a JSON settings file at XDG_CONFIG_HOME/meetroom/settings.json.
Source code typed into the code panel is never written here.

Import as: import meetroom.io.settings
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from meetroom.core.execution import DEFAULT_EXECUTE_URL
from meetroom.core.languages import DEFAULT_LANGUAGE


@dataclass(frozen=True)
class RunnerConfig:
    execute_url: str = DEFAULT_EXECUTE_URL
    # None: wait on the execution service as long as the transport does.
    request_timeout: float | None = None
    default_language: str = DEFAULT_LANGUAGE
    call_layout: str = "speaker-left"


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / meetroom / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "meetroom" / "settings.json"


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_config_path()
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: dict) -> None:
    """Atomic write of settings dict to JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def load_setting(key: str, default=None):
    """Load a single setting by key. Returns default if absent."""
    return load_settings().get(key, default)


def save_setting(key: str, value) -> None:
    """Save a single setting by key (merge into existing settings)."""
    data = load_settings()
    data[key] = value
    save_settings(data)


def _optional_float(raw) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def load_runner_config(**overrides) -> RunnerConfig:
    """Build RunnerConfig from settings; non-None overrides win (CLI flags)."""
    data = load_settings()
    values = {
        "execute_url": str(data.get("execute_url") or DEFAULT_EXECUTE_URL),
        "request_timeout": _optional_float(data.get("request_timeout")),
        "default_language": str(data.get("default_language") or DEFAULT_LANGUAGE),
        "call_layout": str(data.get("call_layout") or RunnerConfig.call_layout),
    }
    for key, value in overrides.items():
        if key not in values:
            raise TypeError(f"Unknown runner config field: {key}")
        if value is not None:
            values[key] = value
    values["request_timeout"] = _optional_float(values["request_timeout"])
    return RunnerConfig(**values)
