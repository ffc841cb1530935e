"""Shell quoting for emitted ``cd`` commands."""

from __future__ import annotations

import re

_SAFE_TOKEN = re.compile(r"[A-Za-z0-9_@%+=:,./-]+")
# Characters that keep their special meaning inside POSIX double quotes.
_DOUBLE_QUOTE_SPECIALS = re.compile(r'(["$`])')


def is_simple(path: str) -> bool:
    """Return whether ``path`` is safe as a bare shell word."""
    return _SAFE_TOKEN.fullmatch(path) is not None


def double_quote(path: str) -> str:
    """Wrap ``path`` in double quotes so the shell reads it back unchanged.

    Backslashes are doubled before the quote/dollar/backtick escapes are
    added, which keeps Windows-style separators intact under msys/mingw shells.
    """
    escaped = path.replace("\\", "\\\\")
    escaped = _DOUBLE_QUOTE_SPECIALS.sub(r"\\\1", escaped)
    return f'"{escaped}"'


def quote(path: str) -> str:
    """Return ``path`` bare when simple, otherwise double-quoted."""
    if is_simple(path):
        return path
    return double_quote(path)


def cd_command(path: str, plain: bool = False) -> str:
    """Render the ``cd`` command for ``path``.

    An empty path is the bare ``cd`` (go home). ``plain`` leaves simple paths
    unquoted.
    """
    if not path:
        return "cd"
    if plain:
        return f"cd {quote(path)}"
    return f"cd {double_quote(path)}"
