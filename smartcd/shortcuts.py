"""Directory shortcuts: named, stored argument lists expanded before parsing."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from . import config

logger = logging.getLogger(__name__)

DIRECTORY_SHORTCUTS = "dirAliases"


def expand_shortcut(args: Sequence[str], table: Mapping[str, Sequence[str]]) -> list[str]:
    """Replace the first positional token with its stored tokens.

    Flags before the shortcut name are kept in place. Tokens that do not name
    a shortcut leave ``args`` unchanged.
    """
    expanded = list(args)
    skip_value = False
    for index, token in enumerate(expanded):
        if skip_value:
            skip_value = False
            continue
        if token in ("-u", "--up"):
            skip_value = True
            continue
        if token.startswith("-") and token != "-":
            continue
        stored = table.get(token)
        if stored is None:
            return expanded
        logger.debug("expanding shortcut %r to %s", token, list(stored))
        return expanded[:index] + list(stored) + expanded[index + 1 :]
    return expanded


def load_directory_shortcuts() -> dict[str, list[str]]:
    return config.load_shortcuts(DIRECTORY_SHORTCUTS)


def add_directory_shortcut(name: str, target: str) -> None:
    """Store ``target`` (an absolute directory) under ``name``."""
    config.save_shortcut(DIRECTORY_SHORTCUTS, name, [target])


def delete_directory_shortcut(name: str) -> bool:
    return config.delete_shortcut(DIRECTORY_SHORTCUTS, name)
