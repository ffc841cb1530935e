"""Public package surface for smartcd.

Exports ``main`` for programmatic CLI invocation.
Navigation logic lives in ``compose``, ``history`` and ``ancestors``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
