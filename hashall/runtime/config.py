"""Persistent JSON config helpers.

Stores default algorithm, job count, buffer size, output format and the
hidden-file preference. All access is defensive: malformed or missing config
falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "hashall"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> bool:
    """Persist config data as pretty-printed JSON.

    Returns ``False`` instead of raising when the file cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except OSError:
        return False
    return True


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_default_algorithm() -> str | None:
    """Persisted algorithm name, unvalidated; ``None`` when unset/invalid."""
    return _load_string("algorithm")


def load_default_format() -> str | None:
    return _load_string("format")


def load_default_buffer() -> str | None:
    """Persisted buffer size. Integers are accepted and returned as text."""
    value = load_config().get("buffer")
    if isinstance(value, bool):
        return None
    if isinstance(value, int) and value > 0:
        return str(value)
    return _load_string("buffer")


def load_default_jobs() -> int | None:
    """Persisted worker count; booleans and values below 1 are ignored."""
    value = load_config().get("jobs")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 1 else None


def load_show_hidden() -> bool:
    """Return persisted hidden-file preference, defaulting to ``True``.

    Only explicit boolean values are accepted.
    """
    value = load_config().get("show_hidden")
    return value if isinstance(value, bool) else True


def save_defaults(
    *,
    algorithm: str | None = None,
    jobs: int | None = None,
    buffer: str | None = None,
    output_format: str | None = None,
    show_hidden: bool | None = None,
) -> bool:
    """Merge the given (non-``None``) defaults into the persisted config."""
    config = load_config()
    updates = {
        "algorithm": algorithm,
        "jobs": jobs,
        "buffer": buffer,
        "format": output_format,
        "show_hidden": show_hidden,
    }
    for key, value in updates.items():
        if value is not None:
            config[key] = value
    return save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_default_algorithm",
    "load_default_format",
    "load_default_buffer",
    "load_default_jobs",
    "load_show_hidden",
    "save_defaults",
]
