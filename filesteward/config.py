"""Persistent JSON config helpers.

Stores transfer defaults, the op names enabled for bulk plans, and the CLI
log level. All access is defensive: malformed or missing config falls back
to built-in defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "filesteward"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_STREAM = True
DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_LOG_LEVEL = "WARNING"
ALL_BULK_OPS = ("create", "copy", "remove", "cut", "rename")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are ignored so a read-only config location never breaks
    a steward call.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_stream() -> bool:
    """Return whether non-blocking copy/cut stream file bytes by default.

    Only explicit boolean values are accepted.
    """
    value = load_config().get("stream")
    return value if isinstance(value, bool) else DEFAULT_STREAM


def save_stream(stream: bool) -> None:
    config = load_config()
    config["stream"] = bool(stream)
    save_config(config)


def load_chunk_size() -> int:
    """Return the streaming chunk size in bytes.

    Booleans, non-integers and non-positive values fall back to the default.
    """
    value = load_config().get("chunk_size")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_CHUNK_SIZE
    return value


def save_chunk_size(chunk_size: int) -> None:
    if chunk_size <= 0:
        return
    config = load_config()
    config["chunk_size"] = int(chunk_size)
    save_config(config)


def load_bulk_ops() -> frozenset[str]:
    """Return the op names bulk plans may use.

    Unknown names are dropped; a missing or empty list enables every op.
    """
    value = load_config().get("bulk_ops")
    if not isinstance(value, list):
        return frozenset(ALL_BULK_OPS)
    names = {item.strip().lower() for item in value if isinstance(item, str)}
    enabled = frozenset(name for name in names if name in ALL_BULK_OPS)
    return enabled or frozenset(ALL_BULK_OPS)


def save_bulk_ops(names: list[str]) -> None:
    normalized = [name for name in ALL_BULK_OPS if name in {str(item).strip().lower() for item in names}]
    config = load_config()
    config["bulk_ops"] = normalized
    save_config(config)


def load_log_level() -> int:
    """Return the configured logging level, defaulting to ``WARNING``."""
    value = load_config().get("log_level")
    name = value.strip().upper() if isinstance(value, str) else DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.getLevelName(DEFAULT_LOG_LEVEL)
