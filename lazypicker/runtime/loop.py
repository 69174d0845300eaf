"""Main interactive event loop for a picker session.

Each iteration blocks for exactly one key, applies it through the
controller, publishes a fresh snapshot, and renders before reading again.
Matching runs synchronously inside the key handler, so the query and the
result list on screen always belong together.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import partial

from ..errors import AbortedByUserError, EmptyInputError
from ..render import Renderer, TerminalSurface
from ..search.matcher import Matcher
from ..state import SelectionState
from ..ui_theme import resolve_theme
from .config import PickerConfig
from .controller import SelectionController, SessionStatus
from .resize import CHECK_RESIZE_INTERVAL_SECONDS, ResizeWatcher, SnapshotSlot

logger = logging.getLogger(__name__)

_KEY_ALIASES = {
    "ENTER_CR": "ENTER",
    "ENTER_LF": "ENTER",
}


def normalize_key(key: str) -> str:
    return _KEY_ALIASES.get(key, key)


def run_main_loop(
    controller: SelectionController,
    renderer: Renderer,
    surface: TerminalSurface,
    slot: SnapshotSlot,
) -> SessionStatus:
    """Render, then read and apply keys until the session leaves ``ACTIVE``."""
    snapshot = controller.state.snapshot()
    slot.publish(snapshot)
    renderer.render(snapshot)
    while controller.status is SessionStatus.ACTIVE:
        key = surface.read_key()
        if key == "":
            continue
        status = controller.handle_key(normalize_key(key))
        if status is not SessionStatus.ACTIVE:
            break
        snapshot = controller.state.snapshot()
        slot.publish(snapshot)
        renderer.render(snapshot)
    return controller.status


def run_session(
    items: Sequence[str] | None,
    config: PickerConfig,
    surface: TerminalSurface,
    *,
    resize_interval_seconds: float = CHECK_RESIZE_INTERVAL_SECONDS,
) -> SelectionState:
    """Run one interactive session on ``surface`` and return its final state.

    Raises ``EmptyInputError`` before drawing anything when ``items`` is empty
    and ``AbortedByUserError`` when the user cancels.
    """
    if not items:
        raise EmptyInputError()

    with Matcher(
        items,
        order_by=config.order_by,
        normalize=config.normalize,
        normalizer=config.normalizer,
    ) as matcher:
        state = SelectionState(results=matcher.match(""), total_count=len(matcher))
        renderer = Renderer(
            surface,
            reverse=config.reverse,
            theme=resolve_theme(config.theme, no_color=config.no_color),
        )
        controller = SelectionController(
            state,
            matcher,
            page_size=renderer.page_size,
            reverse=config.reverse,
            multi_select=config.multi_select,
            max_selected=config.max_selected,
        )
        slot = SnapshotSlot()
        watcher = ResizeWatcher(surface.poll_resize, partial(renderer.render_latest, slot), resize_interval_seconds)
        logger.debug("starting session with %d candidates", len(matcher))
        watcher.start()
        try:
            status = run_main_loop(controller, renderer, surface, slot)
        finally:
            watcher.stop()

    logger.debug("session ended: %s", status.value)
    if status is SessionStatus.ABORTED:
        raise AbortedByUserError()
    return state


__all__ = ["normalize_key", "run_main_loop", "run_session"]
