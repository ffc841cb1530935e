"""Persistent JSON config helpers.

Stores the directory shortcut table and resolves where per-session state lives.
Reads are defensive: malformed or missing config falls back to empty. Writes
raise ``ConfigWriteError``.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

from .errors import ConfigWriteError, InvalidShortcutError

logger = logging.getLogger(__name__)

APP_NAME = "smartcd"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "SMARTCD_CONFIG"
CACHE_DIR_ENV_VAR = "SMARTCD_CACHE_DIR"
SESSION_ENV_VAR = "SMARTCD_SESSION"

DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_CACHE_DIR = Path(user_cache_dir(APP_NAME, appauthor=False)) / "sessions"


def _env_path(name: str, default: Path) -> Path:
    value = os.environ.get(name, "").strip()
    return Path(value).expanduser() if value else default


CONFIG_PATH = _env_path(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)


def cache_dir() -> Path:
    """Return the directory holding per-shell-session cache files."""
    return _env_path(CACHE_DIR_ENV_VAR, DEFAULT_CACHE_DIR)


def session_id() -> str:
    """Identify the invoking shell session.

    ``$SMARTCD_SESSION`` wins (the shell wrapper exports ``$$``); otherwise
    the parent process id, which is the shell that ran us.
    """
    value = os.environ.get(SESSION_ENV_VAR, "").strip()
    return value if value else str(os.getppid())


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


def write_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Raises ``ConfigWriteError`` when the file cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        raise ConfigWriteError(f"failed to write config {CONFIG_PATH}: {exc}") from exc
    logger.debug("wrote config %s", CONFIG_PATH)


def is_shortcut_name(name: str) -> bool:
    """Return whether ``name`` can be used as a shortcut key."""
    return bool(name) and name.isprintable() and not any(ch.isspace() for ch in name) and not name.startswith("-")


def _load_shortcut_table() -> dict[str, object]:
    value = load_config().get("shortcuts")
    return value if isinstance(value, dict) else {}


def load_shortcuts(category: str) -> dict[str, list[str]]:
    """Load shortcuts for ``category`` with strict validation.

    Invalid names, non-list values, and lists containing non-strings are
    dropped.
    """
    raw_category = _load_shortcut_table().get(category)
    if not isinstance(raw_category, dict):
        return {}

    shortcuts: dict[str, list[str]] = {}
    for name, tokens in raw_category.items():
        if not isinstance(name, str) or not is_shortcut_name(name):
            continue
        if not isinstance(tokens, list) or not tokens:
            continue
        if not all(isinstance(token, str) for token in tokens):
            continue
        shortcuts[name] = list(tokens)
    return shortcuts


def save_shortcut(category: str, name: str, tokens: Sequence[str]) -> None:
    """Persist one shortcut, replacing any existing entry with that name.

    Raises ``InvalidShortcutError`` for unusable names and
    ``ConfigWriteError`` when the table cannot be saved.
    """
    if not is_shortcut_name(name):
        raise InvalidShortcutError(name)
    config = load_config()
    table = _load_shortcut_table()
    entries = table.get(category)
    if not isinstance(entries, dict):
        entries = {}
    entries[name] = [str(token) for token in tokens]
    table[category] = entries
    config["shortcuts"] = table
    write_config(config)


def delete_shortcut(category: str, name: str) -> bool:
    """Remove one shortcut; return whether it existed.

    Raises ``ConfigWriteError`` when the table cannot be saved.
    """
    config = load_config()
    table = _load_shortcut_table()
    entries = table.get(category)
    if not isinstance(entries, dict) or name not in entries:
        return False
    del entries[name]
    table[category] = entries
    config["shortcuts"] = table
    write_config(config)
    return True
