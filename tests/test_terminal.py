"""Raw-mode lifecycle and kitty payloads written by ``TerminalController``."""

from __future__ import annotations

import base64
from pathlib import Path
import termios
import unittest
from unittest import mock

from kura.runtime.terminal import (
    ENTER_TUI,
    KITTY_DELETE_ALL,
    LEAVE_TUI,
    TerminalController,
    kitty_place_file_payload,
)


class KittyPayloadTests(unittest.TestCase):
    def test_payload_moves_cursor_and_names_file_in_base64(self) -> None:
        payload = kitty_place_file_payload(Path("/srv/cat.png"), 41, 3, 40, 21)

        encoded = base64.b64encode(b"/srv/cat.png").decode("ascii")
        self.assertTrue(payload.startswith(b"\x1b7\x1b[3;41H"))
        self.assertIn(f"c=40,r=21;{encoded}".encode("ascii"), payload)
        self.assertTrue(payload.endswith(b"\x1b\\\x1b8"))

    def test_degenerate_boxes_are_clamped_to_one_cell(self) -> None:
        payload = kitty_place_file_payload(Path("x.png"), 0, -2, 0, 0)

        self.assertIn(b"\x1b[1;1H", payload)
        self.assertIn(b"c=1,r=1;", payload)


class TerminalControllerTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("kura.runtime.terminal.termios.tcgetattr", return_value=["saved"])
        patcher.start()
        self.addCleanup(patcher.stop)
        self.terminal = TerminalController(stdin_fd=5, stdout_fd=6)

    def test_tui_mode_round_trip_restores_saved_attributes(self) -> None:
        with mock.patch("kura.runtime.terminal.tty.setraw") as setraw, mock.patch(
            "kura.runtime.terminal.os.write"
        ) as write, mock.patch("kura.runtime.terminal.termios.tcsetattr") as tcsetattr:
            with self.terminal.raw_mode():
                setraw.assert_called_once_with(5, termios.TCSAFLUSH)

        self.assertEqual([c.args for c in write.call_args_list], [(6, ENTER_TUI), (6, LEAVE_TUI)])
        tcsetattr.assert_called_once_with(5, termios.TCSAFLUSH, ["saved"])

    def test_raw_mode_leaves_tui_when_body_raises(self) -> None:
        with mock.patch.object(self.terminal, "enable_tui_mode"), mock.patch.object(
            self.terminal, "disable_tui_mode"
        ) as disable:
            with self.assertRaises(ValueError):
                with self.terminal.raw_mode():
                    raise ValueError("bad frame")

        disable.assert_called_once_with()

    def test_kitty_detection(self) -> None:
        cases = [
            ({"TERM": "xterm-kitty"}, True),
            ({"TERM": "xterm-256color", "KITTY_WINDOW_ID": "3"}, True),
            ({"TERM": "screen-256color"}, False),
            ({}, False),
        ]
        for env, expected in cases:
            with self.subTest(env=env), mock.patch.dict("kura.runtime.terminal.os.environ", env, clear=True):
                self.assertIs(self.terminal.supports_kitty_graphics(), expected)

    def test_clear_and_draw_write_to_stdout_fd(self) -> None:
        with mock.patch("kura.runtime.terminal.os.write") as write:
            self.terminal.kitty_clear_images()
            self.terminal.kitty_draw_png(Path("/srv/cat.png"), col=2, row=4, width_cells=10, height_cells=5)

        self.assertEqual(write.call_args_list[0].args, (6, KITTY_DELETE_ALL))
        self.assertEqual(
            write.call_args_list[1].args,
            (6, kitty_place_file_payload(Path("/srv/cat.png"), 2, 4, 10, 5)),
        )


if __name__ == "__main__":
    unittest.main()
