"""Public package surface for hashall.

Exports ``main`` for programmatic CLI invocation.
The hashing engine lives in submodules under ``hashall``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
