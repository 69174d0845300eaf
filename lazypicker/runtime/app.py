"""Embeddable picker entry points.

``Picker`` binds a ``PickerConfig`` and opens the controlling terminal for
each call; ``select``/``multi_select`` are one-shot conveniences.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from dataclasses import replace

from ..errors import EmptyInputError
from ..render import TerminalSurface
from ..state import SelectionState
from .config import PickerConfig, load_picker_config
from .controller import resolve_multi, resolve_single
from .loop import run_session
from .terminal import open_terminal_surface

SurfaceFactory = Callable[[], AbstractContextManager[TerminalSurface]]


class Picker:
    def __init__(
        self,
        config: PickerConfig | None = None,
        surface_factory: SurfaceFactory = open_terminal_surface,
    ) -> None:
        self.config = config or PickerConfig()
        self.surface_factory = surface_factory

    def _run(self, items: Sequence[str] | None, config: PickerConfig) -> SelectionState:
        if not items:
            raise EmptyInputError()
        with self.surface_factory() as surface:
            return run_session(items, config, surface)

    def select(self, items: Sequence[str]) -> str:
        """Let the user pick one item and return it.

        Raises ``EmptyInputError``, ``EmptyResultError`` or ``AbortedByUserError``.
        """
        config = replace(self.config, multi_select=False)
        state = self._run(items, config)
        return items[resolve_single(state)]

    def multi_select(self, items: Sequence[str], max_selected: int | None = None) -> list[str]:
        """Let the user mark several items; returns them in input order."""
        config = self.config.with_overrides(multi_select=True, max_selected=max_selected)
        state = self._run(items, config)
        return [items[idx] for idx in resolve_multi(state)]


def select(items: Sequence[str], **options: object) -> str:
    """Pick one item using persisted defaults overridden by ``options``."""
    return Picker(load_picker_config(**options)).select(items)


def multi_select(items: Sequence[str], max_selected: int | None = None, **options: object) -> list[str]:
    return Picker(load_picker_config(**options)).multi_select(items, max_selected=max_selected)


__all__ = ["Picker", "select", "multi_select"]
