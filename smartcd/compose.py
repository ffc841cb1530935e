"""Path composition: ascend count, path and sub-path segments to one target.

Filesystem access goes through a ``FileSystem`` object so callers (and tests)
decide what ``stat`` and ``getcwd`` mean.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .errors import PathResolutionError

logger = logging.getLogger(__name__)

PARENT_DIR_TOKEN = ".."


class FileSystem(Protocol):
    """Filesystem capability consumed by the path composer."""

    def stat(self, path: str) -> os.stat_result: ...

    def getcwd(self) -> str: ...


class LocalFileSystem:
    """``FileSystem`` backed by the real ``os`` module."""

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def getcwd(self) -> str:
        return os.getcwd()


@dataclass(frozen=True)
class NavigationRequest:
    """Raw navigation arguments collected for one invocation."""

    ascend_count: int = 0
    path: str | None = None
    sub_path: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.ascend_count < 0:
            raise ValueError(f"ascend count must be >= 0, got {self.ascend_count}")
        if self.sub_path and self.path is None:
            raise ValueError("sub path segments require a path")


def parent_prefix(ascend_count: int) -> str:
    """Return ``ascend_count`` parent-directory tokens joined as one path.

    Zero yields ``""``, which the quoting layer renders as a bare ``cd``.
    """
    if ascend_count < 0:
        raise ValueError(f"ascend count must be >= 0, got {ascend_count}")
    if ascend_count == 0:
        return ""
    return os.path.join(*([PARENT_DIR_TOKEN] * ascend_count))


def join_segments(*segments: str) -> str:
    """Join path segments, keeping every one of them.

    Unlike ``os.path.join``, a later segment with a leading separator does not
    discard what came before: ``("..", "/abs")`` gives ``../abs``. Only the
    first non-empty segment may be absolute.
    """
    parts = [segment for segment in segments if segment]
    if not parts:
        return ""
    separators = os.sep + (os.altsep or "")
    return os.path.join(parts[0], *(part.lstrip(separators) for part in parts[1:]))


def absolute_path(path: str, cwd: str) -> str:
    """Return ``path`` made absolute against ``cwd``.

    Raises ``PathResolutionError`` when the path cannot be resolved.
    """
    try:
        return os.path.abspath(os.path.join(cwd, path))
    except (OSError, TypeError, ValueError) as exc:
        raise PathResolutionError(f"failed to transform file path: {exc}") from exc


def directory_for(path: str, fs: FileSystem) -> str:
    """Return the containing directory when ``path`` stats as a non-directory.

    A failed stat leaves the path unchanged; the target may not exist yet.
    """
    try:
        info = fs.stat(path)
    except (OSError, ValueError) as exc:
        logger.debug("stat(%s) failed, keeping path: %s", path, exc)
        return path
    if stat.S_ISDIR(info.st_mode):
        return path
    parent = os.path.dirname(path)
    logger.debug("%s is not a directory, using %s", path, parent)
    return parent


def compose(
    ascend_count: int = 0,
    path: str | None = None,
    sub_path: Sequence[str] = (),
    fs: FileSystem | None = None,
    cwd: str | None = None,
) -> str:
    """Compose the navigation target for one request.

    Without ``path`` the result is just the parent prefix (``""`` when
    ``ascend_count`` is zero) and no filesystem access happens. With ``path``
    the prefix, ``path`` and every ``sub_path`` segment are joined with
    ``join_segments`` (a leading separator never drops earlier parts), made
    absolute against ``cwd`` (default: ``fs.getcwd()``) and, if the result is
    an existing non-directory, replaced by its containing directory.
    """
    prefix = parent_prefix(ascend_count)
    if path is None:
        if sub_path:
            raise ValueError("sub path segments require a path")
        return prefix

    if fs is None:
        fs = LocalFileSystem()
    if cwd is None:
        try:
            cwd = fs.getcwd()
        except OSError as exc:
            raise PathResolutionError(f"failed to transform file path: {exc}") from exc

    target = absolute_path(join_segments(prefix, path, *sub_path), cwd)
    return directory_for(target, fs)


def compose_request(request: NavigationRequest, fs: FileSystem | None = None, cwd: str | None = None) -> str:
    """``compose`` for a ``NavigationRequest``."""
    return compose(request.ascend_count, request.path, request.sub_path, fs=fs, cwd=cwd)
