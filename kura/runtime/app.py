"""Runtime composition: builds the controller and terminal, then runs the loop."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..controller import AppController
from ..ui_theme import resolve_theme
from .config import AppOptions
from .loop import run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_controller(start_directory: Path, options: AppOptions) -> AppController:
    """Open both panes on ``start_directory`` with the configured settings."""
    return AppController.create(
        start_directory,
        options.sort_order,
        text_style=options.style,
        no_color=options.no_color,
    )


def run_filer(start_directory: Path, options: AppOptions) -> None:
    """Run the interactive session; requires a terminal on stdin and stdout.

    Raises ``SystemExit`` when not attached to a terminal and lets
    ``FilesystemError`` propagate when the start directory cannot be listed.
    """
    stdin_fd = sys.stdin.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(sys.stdout.fileno()):
        raise SystemExit("kura needs an interactive terminal")

    controller = build_controller(start_directory, options)
    theme = resolve_theme(options.theme_name, no_color=options.no_color)
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    logger.info("session start in %s", controller.active_pane.current_directory)
    run_main_loop(controller, terminal, stdin_fd, theme)
