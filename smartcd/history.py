"""Navigation history for ``cd -``.

Keeps the two most recent working directories for a shell session and
resolves the previous-directory target from them. Storage is delegated to a
``ShellCache``-like object exposing ``get_struct``/``put_struct``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from .errors import CacheDecodeError, HistoryCorruptError
from .quoting import cd_command

logger = logging.getLogger(__name__)

HISTORY_CACHE_KEY = "smartcd.history"
MAX_HISTORY = 2


class StructStore(Protocol):
    """Key/value struct storage used for history persistence."""

    def get_struct(self, key: str) -> object | None: ...

    def put_struct(self, key: str, value: object) -> None: ...


class History:
    """Bounded, insertion-ordered list of absolute directory paths.

    Adjacent duplicates are suppressed and the oldest entries are trimmed
    from the front once an append exceeds ``max_entries``. Entries loaded from
    storage are kept as recorded until the next append.
    """

    def __init__(self, entries: Iterable[str] = (), max_entries: int = MAX_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self.entries: list[str] = list(entries)

    def _trim(self) -> None:
        overflow = len(self.entries) - self.max_entries
        if overflow > 0:
            del self.entries[:overflow]

    def append(self, directory: str) -> bool:
        """Record ``directory``; return ``False`` when it repeats the newest entry."""
        if self.entries and self.entries[-1] == directory:
            return False
        self.entries.append(directory)
        self._trim()
        return True

    def previous(self, current: str) -> str | None:
        """Return the newest entry that differs from ``current``."""
        for entry in reversed(self.entries):
            if entry != current:
                return entry
        return None

    def to_struct(self) -> dict[str, object]:
        return {"entries": list(self.entries)}

    @classmethod
    def from_struct(cls, data: object) -> History:
        """Build a history from its persisted form.

        Raises ``HistoryCorruptError`` when ``data`` has the wrong shape.
        """
        if not isinstance(data, dict):
            raise HistoryCorruptError(f"expected history object, got {type(data).__name__}")
        entries = data.get("entries", [])
        if not isinstance(entries, list) or not all(isinstance(entry, str) for entry in entries):
            raise HistoryCorruptError("history entries must be a list of strings")
        return cls(entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, History):
            return NotImplemented
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"History({self.entries!r})"


def append(history: History, current_working_directory: str) -> bool:
    """Apply the history update policy; return whether a save is needed."""
    return history.append(current_working_directory)


def load_history(store: StructStore) -> History:
    """Read the session history, empty when nothing was recorded yet."""
    try:
        data = store.get_struct(HISTORY_CACHE_KEY)
    except CacheDecodeError as exc:
        raise HistoryCorruptError(str(exc)) from exc
    if data is None:
        return History()
    return History.from_struct(data)


def save_history(store: StructStore, history: History) -> None:
    store.put_struct(HISTORY_CACHE_KEY, history.to_struct())


def record_directory(store: StructStore, current_working_directory: str, history: History | None = None) -> History:
    """Append the pre-navigation working directory and persist on change.

    ``history`` skips the load when the caller already read it.
    """
    if history is None:
        history = load_history(store)
    if history.append(current_working_directory):
        save_history(store, history)
        logger.debug("history is now %s", history.entries)
    else:
        logger.debug("history unchanged, %s already newest", current_working_directory)
    return history


def resolve_previous(history: History, current_working_directory: str, plain: bool = False) -> str:
    """Resolve ``cd -`` against ``history``.

    Entries equal to the current directory are skipped; with nothing left the
    result is the bare ``cd`` (go home).
    """
    target = history.previous(current_working_directory)
    if target is None:
        return "cd"
    return cd_command(target, plain=plain)
