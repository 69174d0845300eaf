"""Background redraw on terminal resize.

The input loop publishes an immutable snapshot after every state change; the
watcher thread only ever reads the most recently published one, and reads it
inside the renderer's lock so a redraw can never replay an older frame.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..state import StateSnapshot

logger = logging.getLogger(__name__)

CHECK_RESIZE_INTERVAL_SECONDS = 0.1


class SnapshotSlot:
    """Single-reference holder swapped whole by the writer."""

    def __init__(self) -> None:
        self._snapshot: StateSnapshot | None = None

    def publish(self, snapshot: StateSnapshot) -> None:
        self._snapshot = snapshot

    @property
    def latest(self) -> StateSnapshot | None:
        return self._snapshot


class ResizeWatcher:
    """Poll for terminal resizes on a daemon thread and redraw when one occurs.

    ``redraw_latest`` draws whatever snapshot is current at the time it runs
    and returns ``None`` when nothing has been published yet.
    """

    def __init__(
        self,
        poll_resize: Callable[[], bool],
        redraw_latest: Callable[[], object | None],
        interval_seconds: float = CHECK_RESIZE_INTERVAL_SECONDS,
    ) -> None:
        self._poll_resize = poll_resize
        self._redraw_latest = redraw_latest
        self._interval_seconds = interval_seconds
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def tick(self) -> bool:
        """Check once; return whether a redraw happened."""
        if not self._poll_resize():
            return False
        return self._redraw_latest() is not None

    def _run(self) -> None:
        while not self._stop.wait(self._interval_seconds):
            try:
                self.tick()
            except OSError:
                logger.debug("resize redraw failed; stopping watcher", exc_info=True)
                return

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="lazypicker-resize", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join()


__all__ = ["CHECK_RESIZE_INTERVAL_SECONDS", "SnapshotSlot", "ResizeWatcher"]
