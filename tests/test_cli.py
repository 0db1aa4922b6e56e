"""CLI argument, default-path, and logging setup tests.

Verifies how ``kura.cli.main`` resolves the start directory and options
before handing off to the runtime.
"""

from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from kura import cli
from kura.errors import FilesystemError
from kura.filesystem import SortOrder


class CliTests(unittest.TestCase):
    def test_main_defaults_to_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                with mock.patch("kura.cli.load_config", return_value={}), mock.patch(
                    "kura.cli.run_filer"
                ) as run_filer:
                    cli.main(argv=[])
            finally:
                os.chdir(previous_cwd)

        run_filer.assert_called_once()
        start, options = run_filer.call_args.args
        self.assertEqual(start.resolve(), root)
        self.assertEqual(options.style, "monokai")
        self.assertIs(options.sort_order, SortOrder.NAME)
        self.assertFalse(options.no_color)

    def test_file_argument_opens_its_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            target = root / "notes.txt"
            target.write_text("hi\n", encoding="utf-8")
            with mock.patch("kura.cli.load_config", return_value={}), mock.patch(
                "kura.cli.run_filer"
            ) as run_filer:
                cli.main(default_path=root / "unused", argv=[str(target), "--sort", "size", "--no-color"])

        start, options = run_filer.call_args.args
        self.assertEqual(start, root)
        self.assertIs(options.sort_order, SortOrder.SIZE)
        self.assertTrue(options.no_color)

    def test_missing_path_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("kura.cli.run_filer") as run_filer:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(argv=[str(Path(tmp) / "missing")])
        run_filer.assert_not_called()
        self.assertIn("Path not found", str(ctx.exception))

    def test_unlistable_start_directory_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            error = FilesystemError(root, "Permission denied")
            with mock.patch("kura.cli.load_config", return_value={}), mock.patch(
                "kura.cli.run_filer", side_effect=error
            ):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(argv=[str(root)])
        self.assertIn("Permission denied", str(ctx.exception))

    def test_log_file_handler_writes_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "kura.log"
            handler = cli.configure_logging(str(log_path))
            try:
                logging.getLogger("kura.test").info("hello log")
                handler.flush()
                self.assertIn("hello log", log_path.read_text(encoding="utf-8"))
            finally:
                logging.getLogger("kura").removeHandler(handler)
                handler.close()

        self.assertIsNone(cli.configure_logging(None))


if __name__ == "__main__":
    unittest.main()
