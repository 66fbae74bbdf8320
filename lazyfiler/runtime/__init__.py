"""Public runtime orchestration entry points.

This package groups the interactive bootstrap (`run_filer`), the engine that
owns navigation and operation state, and its collaborators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .engine import FilerEngine


def run_filer(*args, **kwargs):
    """Lazily import the bootstrap to avoid terminal setup on import."""
    from .app import run_filer as _run_filer

    return _run_filer(*args, **kwargs)


def __getattr__(name: str):
    if name == "FilerEngine":
        from .engine import FilerEngine as _FilerEngine

        return _FilerEngine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["run_filer", "FilerEngine"]
