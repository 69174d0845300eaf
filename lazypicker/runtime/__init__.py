"""Public runtime orchestration entry points.

This package groups the picker session bootstrap (`Picker`, `run_session`)
and the lower-level event loop used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import Picker
    from .config import PickerConfig


def run_session(*args, **kwargs):
    """Lazily import session runner to avoid package-import cycles."""
    from .loop import run_session as _run_session

    return _run_session(*args, **kwargs)


def __getattr__(name: str):
    if name in {"Picker", "select", "multi_select"}:
        from . import app as _app

        return getattr(_app, name)
    if name in {"PickerConfig", "load_picker_config"}:
        from . import config as _config

        return getattr(_config, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Picker",
    "PickerConfig",
    "load_picker_config",
    "multi_select",
    "run_session",
    "select",
]
