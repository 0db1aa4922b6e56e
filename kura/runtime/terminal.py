"""Terminal control for the file-manager session.

Owns the raw-mode lifecycle (alternate screen, hidden cursor) and the kitty
graphics calls the image viewer uses on terminals that support them.
"""

from __future__ import annotations

import base64
import contextlib
import os
from pathlib import Path
import termios
import tty

ENTER_TUI = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI = b"\x1b[?25h\x1b[?1049l"
KITTY_DELETE_ALL = b"\x1b_Ga=d,d=A,q=2;\x1b\\"


def kitty_place_file_payload(image_path: Path, col: int, row: int, width_cells: int, height_cells: int) -> bytes:
    """Kitty command that transmits ``image_path`` by file name into a cell box.

    The cursor is saved and restored around the placement so the next frame
    starts where it expects.
    """
    encoded_path = base64.b64encode(str(image_path).encode("utf-8")).decode("ascii")
    move = f"\x1b[{max(1, row)};{max(1, col)}H"
    place = f"\x1b_Ga=T,t=f,f=100,q=2,c={max(1, width_cells)},r={max(1, height_cells)};{encoded_path}\x1b\\"
    return f"\x1b7{move}{place}\x1b8".encode("ascii")


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def _write(self, payload: bytes) -> None:
        os.write(self.stdout_fd, payload)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._write(ENTER_TUI)

    def disable_tui_mode(self) -> None:
        self._write(LEAVE_TUI)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def supports_kitty_graphics(self) -> bool:
        """Guess kitty graphics support from ``TERM`` and ``KITTY_WINDOW_ID``."""
        return os.environ.get("TERM", "") == "xterm-kitty" or bool(os.environ.get("KITTY_WINDOW_ID"))

    def kitty_clear_images(self) -> None:
        self._write(KITTY_DELETE_ALL)

    def kitty_draw_png(self, image_path: Path, col: int, row: int, width_cells: int, height_cells: int) -> None:
        """Draw a PNG file at 1-based cell coordinates, scaled into the cell box."""
        self._write(kitty_place_file_payload(image_path, col, row, width_cells, height_cells))

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket the session with TUI enter/exit, restoring the tty on errors."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
