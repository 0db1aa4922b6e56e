"""Text document loading, relative line numbers, and image decoding."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from PIL import Image

from kura.errors import DecodeError
from kura.viewer import (
    clamp_scroll_line,
    load_text_document,
    probe_image,
    relative_line_label,
    render_half_blocks,
    viewport_top,
)
from kura.viewer.syntax import DEFAULT_STYLE, colorize_lines, normalize_style, sanitize_terminal_text
from kura.viewer.text import COLORIZE_MAX_FILE_BYTES


class RelativeLineTests(unittest.TestCase):
    def test_current_line_shows_its_own_index(self) -> None:
        self.assertEqual(relative_line_label(10, 10), 10)
        self.assertEqual(relative_line_label(13, 10), 3)
        self.assertEqual(relative_line_label(7, 10), 3)
        self.assertEqual(relative_line_label(0, 0), 0)

    def test_clamp_and_viewport(self) -> None:
        self.assertEqual(clamp_scroll_line(-3, 20), 0)
        self.assertEqual(clamp_scroll_line(25, 20), 19)
        self.assertEqual(clamp_scroll_line(4, 0), 0)
        self.assertEqual(viewport_top(10, 100, 20), 10)
        self.assertEqual(viewport_top(95, 100, 20), 80)
        self.assertEqual(viewport_top(3, 5, 20), 0)


class TextDocumentTests(unittest.TestCase):
    def test_plain_document_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.txt"
            path.write_text("one\ntwo\nthree\n", encoding="utf-8")
            document = load_text_document(path, no_color=True)

        self.assertEqual(document.lines, ("one", "two", "three"))
        self.assertEqual(document.rendered_lines, document.lines)
        self.assertEqual(document.total_lines, 3)

    def test_highlighted_rows_stay_aligned_with_source_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "mod.py"
            path.write_text("\n\ndef f():\n    return 1\n\n", encoding="utf-8")
            document = load_text_document(path)

        self.assertEqual(len(document.rendered_lines), document.total_lines)
        self.assertIn("def", document.rendered_lines[2])

    def test_binary_file_raises_decode_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blob.bin"
            path.write_bytes(b"abc\x00def")
            with self.assertRaises(DecodeError):
                load_text_document(path)

    def test_files_over_colorize_limit_are_shown_plain(self) -> None:
        line = "value = 1\n"
        count = COLORIZE_MAX_FILE_BYTES // len(line) + 1
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "big.py"
            path.write_text(line * count, encoding="utf-8")
            with mock.patch("kura.viewer.text.colorize_lines") as colorize:
                document = load_text_document(path)

        colorize.assert_not_called()
        self.assertEqual(document.total_lines, count)
        self.assertEqual(document.rendered_lines, document.lines)

    @unittest.skipUnless(hasattr(os, "mkfifo"), "named pipes unavailable")
    def test_named_pipe_is_refused_without_reading(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "pipe"
            os.mkfifo(path)
            with self.assertRaisesRegex(DecodeError, "not a regular file"):
                load_text_document(path)

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\n"), "a\\x1b[2Jb\n")

    def test_unknown_style_falls_back(self) -> None:
        self.assertEqual(normalize_style("no-such-style"), DEFAULT_STYLE)
        self.assertEqual(colorize_lines("", Path("x.txt")), [])


class ImageTests(unittest.TestCase):
    def test_probe_and_render_half_blocks(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "red.png"
            Image.new("RGB", (8, 8), (255, 0, 0)).save(path)

            self.assertEqual(probe_image(path), (8, 8))
            rows = render_half_blocks(path, 4, 2)

        self.assertEqual(len(rows), 2)
        self.assertIn("\033[38;2;255;0;0m", rows[0])
        self.assertEqual(rows[0].count("▀"), 4)

    @unittest.skipUnless(hasattr(os, "mkfifo"), "named pipes unavailable")
    def test_named_pipe_with_image_suffix_is_refused(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "pipe.png"
            os.mkfifo(path)
            with self.assertRaisesRegex(DecodeError, "not a regular file"):
                probe_image(path)

    def test_corrupt_image_raises_decode_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.png"
            path.write_bytes(b"not really a png")
            with self.assertRaises(DecodeError):
                probe_image(path)


if __name__ == "__main__":
    unittest.main()
