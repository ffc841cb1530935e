"""Error taxonomy for smartcd.

Every failure a user can hit during one invocation derives from
``SmartCdError``; the CLI reports ``str(error)`` on stderr and exits non-zero.
"""

from __future__ import annotations


class SmartCdError(Exception):
    """Base exception for smartcd-specific errors."""


class PathResolutionError(SmartCdError):
    """Composed path could not be converted to an absolute path."""


class ShellCacheError(SmartCdError):
    """Shell-session cache storage is unavailable."""


class CacheDecodeError(ShellCacheError):
    """Shell-session cache file exists but does not decode."""


class HistoryCorruptError(SmartCdError):
    """Persisted navigation history failed to deserialize."""

    def __init__(self, message: str) -> None:
        super().__init__(f"failed to get struct data: {message}")
        self.decode_message = message


class NoSuchAncestorError(SmartCdError):
    """No ancestor of the working directory has the requested name."""

    def __init__(self, target_name: str, arg_name: str = "PARENT_DIR") -> None:
        super().__init__(f"{arg_name} must be a parent directory")
        self.target_name = target_name


class UnknownShortcutError(SmartCdError):
    """Shortcut name is not in the shortcut table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"shortcut {name!r} does not exist")
        self.name = name


class InvalidShortcutError(SmartCdError):
    """Shortcut name cannot be stored or typed as a single shell word."""

    def __init__(self, name: str) -> None:
        super().__init__(f"invalid shortcut name: {name!r}")
        self.name = name


class ConfigWriteError(SmartCdError):
    """Persistent config file could not be written."""
