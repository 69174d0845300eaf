"""Terminal control and the cell-based drawing surface used by the picker.

``TerminalController`` owns the raw-mode and alternate-screen lifecycle.
``AnsiTerminalSurface`` buffers one frame of character cells and writes it
out with ANSI escape sequences on ``flush``.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import termios
import threading
import tty
from collections.abc import Iterator
from dataclasses import dataclass

from ..input import read_key

logger = logging.getLogger(__name__)

DEFAULT_TTY_PATH = "/dev/tty"
FALLBACK_SIZE = (80, 24)


class TerminalController:
    """Manage terminal mode transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and clear it.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[2J")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state."""
        # Reset attributes, show cursor, and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


@dataclass(frozen=True)
class CellStyle:
    fg: int | None = None
    bg: int | None = None
    bold: bool = False


BLANK_STYLE = CellStyle()


def sgr_sequence(style: CellStyle) -> str:
    """Return the SGR escape selecting ``style`` from a reset state."""
    codes = ["0"]
    if style.bold:
        codes.append("1")
    if style.fg is not None:
        codes.append(f"38;5;{style.fg}")
    if style.bg is not None:
        codes.append(f"48;5;{style.bg}")
    return f"\x1b[{';'.join(codes)}m"


class AnsiTerminalSurface:
    """Terminal Surface backed by a tty file descriptor pair.

    Cells are staged in memory by ``set_cell`` and only reach the terminal on
    ``flush``, which rewrites every row so a frame never shows partial state.
    """

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._cells: dict[tuple[int, int], tuple[str, CellStyle]] = {}
        self._input_cursor: tuple[int, int] | None = None
        self._known_size = self.size()
        self._size_lock = threading.Lock()

    def size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` for the current terminal geometry."""
        try:
            columns, lines = os.get_terminal_size(self.stdout_fd)
        except OSError:
            columns, lines = shutil.get_terminal_size(FALLBACK_SIZE)
        return lines, columns

    def poll_resize(self) -> bool:
        """Return whether the size changed since the previous poll."""
        current = self.size()
        with self._size_lock:
            if current == self._known_size:
                return False
            logger.debug("terminal resized from %s to %s", self._known_size, current)
            self._known_size = current
            return True

    def read_key(self, timeout_ms: int | None = None) -> str:
        return read_key(self.stdin_fd, timeout_ms=timeout_ms)

    def clear(self) -> None:
        self._cells.clear()
        self._input_cursor = None

    def set_cell(
        self,
        row: int,
        col: int,
        char: str,
        fg: int | None = None,
        bg: int | None = None,
        bold: bool = False,
    ) -> None:
        if row < 0 or col < 0:
            return
        self._cells[(row, col)] = (char, CellStyle(fg, bg, bold))

    def set_input_cursor(self, row: int, col: int) -> None:
        self._input_cursor = (row, col)

    def compose(self) -> str:
        """Build the escape stream for the staged frame."""
        rows, cols = self.size()
        out: list[str] = ["\x1b[?25l"]
        for row in range(rows):
            out.append(f"\x1b[{row + 1};1H")
            style = BLANK_STYLE
            out.append(sgr_sequence(style))
            for col in range(cols):
                char, cell_style = self._cells.get((row, col), (" ", BLANK_STYLE))
                if not char:
                    # Right half of a wide character drawn in the previous column.
                    continue
                if cell_style != style:
                    out.append(sgr_sequence(cell_style))
                    style = cell_style
                out.append(char)
            out.append("\x1b[0m")
        if self._input_cursor is not None:
            cursor_row, cursor_col = self._input_cursor
            out.append(f"\x1b[{cursor_row + 1};{cursor_col + 1}H\x1b[?25h")
        return "".join(out)

    def flush(self) -> None:
        data = self.compose().encode("utf-8")
        view = memoryview(data)
        while view:
            written = os.write(self.stdout_fd, view)
            view = view[written:]


@contextlib.contextmanager
def open_terminal_surface(tty_path: str = DEFAULT_TTY_PATH) -> Iterator[AnsiTerminalSurface]:
    """Open the controlling tty, switch it to raw mode, and yield a surface.

    Reading keys from the tty rather than stdin leaves stdin free for
    candidate input piped in by the caller.
    """
    fd = os.open(tty_path, os.O_RDWR | os.O_NOCTTY)
    try:
        controller = TerminalController(stdin_fd=fd, stdout_fd=fd)
        with controller.raw_mode():
            yield AnsiTerminalSurface(stdin_fd=fd, stdout_fd=fd)
    finally:
        os.close(fd)


__all__ = [
    "DEFAULT_TTY_PATH",
    "TerminalController",
    "CellStyle",
    "sgr_sequence",
    "AnsiTerminalSurface",
    "open_terminal_surface",
]
