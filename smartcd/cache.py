"""Per-shell-session key/value store.

One JSON object per session file; values are plain JSON structs. Writes are
read-modify-write with last-writer-wins semantics across shells.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from . import config
from .errors import CacheDecodeError, ShellCacheError

logger = logging.getLogger(__name__)


class ShellCache:
    """Get/put JSON structs by key for one shell session."""

    def __init__(self, directory: Path, session: str) -> None:
        self.directory = Path(directory)
        self.session = session

    @classmethod
    def for_current_session(cls) -> ShellCache:
        """Build the cache for the invoking shell from config/env settings."""
        return cls(config.cache_dir(), config.session_id())

    @property
    def path(self) -> Path:
        safe_session = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in self.session)
        return self.directory / f"{safe_session or 'default'}.json"

    def _read(self) -> dict[str, object]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise ShellCacheError(f"failed to get shell cache: {exc}") from exc

        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise CacheDecodeError(f"failed to unmarshal cache data: {exc}") from exc
        if not isinstance(data, dict):
            raise CacheDecodeError(
                f"failed to unmarshal cache data: expected JSON object, got {type(data).__name__}"
            )
        return data

    def get_struct(self, key: str) -> object | None:
        """Return the struct stored under ``key`` or ``None`` when absent."""
        return self._read().get(key)

    def put_struct(self, key: str, value: object) -> None:
        """Store ``value`` under ``key``.

        A corrupt session file is overwritten rather than blocking the write.
        """
        try:
            data = self._read()
        except CacheDecodeError as exc:
            logger.warning("replacing unreadable shell cache %s: %s", self.path, exc)
            data = {}
        data[key] = value
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise ShellCacheError(f"failed to put shell cache: {exc}") from exc
        logger.debug("stored %s in %s", key, self.path)
