"""Main interactive event loop for the terminal UI.

Each iteration syncs terminal geometry into the controller, expires stale
status messages, redraws when state changed, then reads at most one key and
hands it to the controller. Feature logic lives in ``AppController``.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..controller import AppController
from ..input import read_key
from ..mode import ImageView
from ..render import content_rows_for_height, draw_frame, image_geometry
from ..ui_theme import UITheme
from ..viewer import supports_kitty_format
from .terminal import TerminalController

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 120

KittyPlacement = tuple[str, int, int, int, int]


def normalize_enter(key: str, skip_next_lf: bool) -> tuple[str | None, bool]:
    """Fold ``ENTER_CR``/``ENTER_LF`` into ``ENTER``.

    A CR immediately followed by LF counts once. Returns the key to dispatch
    (``None`` to drop it) and the updated skip flag.
    """
    if skip_next_lf and key == "ENTER_LF":
        return None, False
    if key == "ENTER_CR":
        return "ENTER", True
    if key == "ENTER_LF":
        return "ENTER", False
    return key, False


def kitty_placement(controller: AppController, columns: int, lines: int) -> KittyPlacement | None:
    """Where the current image should be drawn out of band, if anywhere."""
    mode = controller.mode
    if not isinstance(mode, ImageView) or not supports_kitty_format(mode.file_path):
        return None
    geometry = image_geometry(controller, columns, lines)
    if geometry is None:
        return None
    return (str(mode.file_path), *geometry)


def sync_kitty_image(
    terminal: TerminalController,
    shown: KittyPlacement | None,
    wanted: KittyPlacement | None,
) -> KittyPlacement | None:
    """Clear or redraw the kitty image when its placement changed; returns what is shown now."""
    if wanted == shown:
        return shown
    if shown is not None:
        terminal.kitty_clear_images()
    if wanted is not None:
        path, col, row, width_cells, height_cells = wanted
        terminal.kitty_draw_png(Path(path), col=col, row=row, width_cells=width_cells, height_cells=height_cells)
    return wanted


def run_main_loop(
    controller: AppController,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
) -> None:
    """Run the interactive loop until the controller reports quit."""
    kitty_enabled = terminal.supports_kitty_graphics()
    shown_image: KittyPlacement | None = None
    skip_next_lf = False

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            controller.set_viewport_rows(content_rows_for_height(term.lines))
            controller.expire_status()

            if controller.dirty:
                wanted = kitty_placement(controller, term.columns, term.lines) if kitty_enabled else None
                draw_frame(controller, term.columns, term.lines, theme, kitty_images=wanted is not None)
                shown_image = sync_kitty_image(terminal, shown_image, wanted)
                controller.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                # CTRL_C arrives as a key token in raw mode; a stray signal is ignored.
                continue
            if key == "":
                continue
            dispatched, skip_next_lf = normalize_enter(key, skip_next_lf)
            if dispatched is None:
                continue
            if controller.handle_key(dispatched):
                logger.info("quit requested")
                break

        sync_kitty_image(terminal, shown_image, None)
