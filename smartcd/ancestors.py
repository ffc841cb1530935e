"""Ancestor search: jump to the nearest parent directory with a given name."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from .errors import NoSuchAncestorError
from .quoting import cd_command

logger = logging.getLogger(__name__)


def iter_ancestors(working_directory: str) -> Iterator[str]:
    """Yield ancestors of ``working_directory``, nearest first, root last.

    The working directory itself is never yielded.
    """
    current = os.path.normpath(working_directory) if working_directory else working_directory
    directory = os.path.dirname(current)
    if directory == current:
        return
    while True:
        yield directory
        parent = os.path.dirname(directory)
        if parent == directory:
            return
        directory = parent


def find_ancestor(working_directory: str, target_name: str) -> str:
    """Return the nearest ancestor whose base name is ``target_name``.

    Raises ``NoSuchAncestorError`` for an empty name, for a name that only
    matches the working directory itself, and when no ancestor matches.
    """
    if not target_name:
        raise NoSuchAncestorError(target_name)
    for ancestor in iter_ancestors(working_directory):
        if os.path.basename(ancestor) == target_name:
            logger.debug("ancestor %r of %s is %s", target_name, working_directory, ancestor)
            return ancestor
    raise NoSuchAncestorError(target_name)


def resolve_ancestor(working_directory: str, target_name: str, plain: bool = False) -> str:
    """Return the ``cd`` command for the nearest ancestor named ``target_name``."""
    return cd_command(find_ancestor(working_directory, target_name), plain=plain)


def ancestor_names(working_directory: str) -> list[str]:
    """List ancestor base names root-first for completion.

    The filesystem root has no base name and is left out.
    """
    names = [os.path.basename(ancestor) for ancestor in iter_ancestors(working_directory)]
    return [name for name in reversed(names) if name]
