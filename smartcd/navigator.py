"""Navigation orchestration: compose/resolve a target, emit it, update history.

The invoking shell is modelled as a ``ShellEnvironment``: it knows the working
directory, owns the session cache, and evaluates the single emitted line.
"""

from __future__ import annotations

import logging
import os
import shlex
import sys
from typing import Protocol, TextIO

from .ancestors import ancestor_names, resolve_ancestor
from .cache import ShellCache
from .compose import FileSystem, LocalFileSystem, NavigationRequest, compose_request
from .errors import PathResolutionError
from .history import StructStore, load_history, record_directory, resolve_previous
from .quoting import cd_command

logger = logging.getLogger(__name__)


class ShellEnvironment(Protocol):
    """What the navigator needs from the invoking shell."""

    cache: StructStore

    def getwd(self) -> str: ...

    def emit(self, line: str) -> None: ...


class ProcessShellEnvironment:
    """``ShellEnvironment`` for a real process: ``os.getcwd`` and stdout."""

    def __init__(self, cache: StructStore | None = None, stream: TextIO | None = None) -> None:
        self.cache = cache if cache is not None else ShellCache.for_current_session()
        self._stream = stream

    def getwd(self) -> str:
        try:
            return os.getcwd()
        except OSError as exc:
            raise PathResolutionError(f"failed to get working directory: {exc}") from exc

    def emit(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()


class Navigator:
    """Runs one navigation command against a shell environment."""

    def __init__(self, env: ShellEnvironment, fs: FileSystem | None = None, plain: bool = False) -> None:
        self.env = env
        self.fs = fs if fs is not None else LocalFileSystem()
        self.plain = plain

    def change_directory(self, request: NavigationRequest) -> str:
        """Emit the ``cd`` for ``request`` and record the pre-cd directory.

        The command is emitted before history is touched, so a corrupt
        history still leaves the shell with a usable ``cd``.
        """
        cwd = self.env.getwd()
        target = compose_request(request, fs=self.fs, cwd=cwd)
        command = cd_command(target, plain=self.plain)
        self.env.emit(command)
        record_directory(self.env.cache, cwd)
        return command

    def previous(self) -> str:
        """Emit ``cd`` to the previous directory (``cd -``)."""
        cwd = self.env.getwd()
        history = load_history(self.env.cache)
        command = resolve_previous(history, cwd, plain=self.plain)
        self.env.emit(command)
        record_directory(self.env.cache, cwd, history=history)
        return command

    def parent(self, target_name: str) -> str:
        """Emit ``cd`` to the nearest ancestor named ``target_name``."""
        command = resolve_ancestor(self.env.getwd(), target_name, plain=self.plain)
        self.env.emit(command)
        return command

    def show_history(self) -> str:
        """Emit a shell line printing the recorded history, oldest first."""
        history = load_history(self.env.cache)
        if not history.entries:
            command = "true"
        else:
            command = "printf '%s\\n' " + " ".join(shlex.quote(entry) for entry in history.entries)
        self.env.emit(command)
        return command

    def parent_candidates(self) -> list[str]:
        return ancestor_names(self.env.getwd())
