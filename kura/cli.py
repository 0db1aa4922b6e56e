"""Command-line front door for kura.

Parses CLI options, merges them over the config file, resolves the start
directory, and dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .errors import FilesystemError
from .filesystem import SortOrder
from .runtime import AppOptions, load_config, run_filer
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(log_file: str | None, level: int = logging.INFO) -> logging.Handler | None:
    """Attach a file handler to the ``kura`` logger when ``log_file`` is set.

    The terminal belongs to the UI while running, so nothing is logged to
    stderr.
    """
    if not log_file:
        return None
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    package_logger = logging.getLogger("kura")
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    return handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kura",
        description="Two-pane terminal file manager with vim-style keys.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--style", default=None, help="Pygments style name for the text viewer.")
    parser.add_argument(
        "--sort",
        default=None,
        choices=[order.value for order in SortOrder],
        help="Initial sort order for both panes.",
    )
    parser.add_argument("--log-file", default=None, metavar="PATH", help="Append log records to PATH.")
    return parser


def resolve_start_directory(raw: str | None, default_path: Path | None = None) -> Path:
    """Return the directory to open; a file path opens its parent.

    Raises ``SystemExit`` when the path does not exist.
    """
    if default_path is None:
        default_path = Path.cwd()
    path = Path(raw).expanduser() if raw else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    return path if path.is_dir() else path.parent


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch kura.

    ``default_path`` and ``argv`` are primarily for tests; when omitted the
    current working directory and ``sys.argv`` are used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    start_directory = resolve_start_directory(args.path, default_path)
    options = AppOptions.resolve(
        load_config(),
        theme=args.theme,
        style=args.style,
        sort=args.sort,
        no_color=args.no_color,
    )
    try:
        run_filer(start_directory, options)
    except FilesystemError as exc:
        raise SystemExit(str(exc)) from exc
