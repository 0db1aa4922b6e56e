"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Printable characters are returned as themselves (multi-byte UTF-8 included);
special keys become upper-case tokens such as ``ENTER_CR``, ``ESC`` or ``UP``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x15": "CTRL_U",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _next_byte(fd: int, timeout_ms: int | None) -> bytes | None:
    """Pushed-back byte first, then stdin; blocks forever when ``timeout_ms`` is None."""
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    if timeout_ms is None:
        return os.read(fd, 1) or None
    return _read_ready_byte(fd, timeout_ms)


def _utf8_continuation_count(lead: int) -> int:
    """Return how many continuation bytes follow UTF-8 lead byte ``lead``."""
    if lead >= 0xF0:
        return 3
    if lead >= 0xE0:
        return 2
    if lead >= 0xC0:
        return 1
    return 0


def _decode_text(fd: int, first: bytes) -> str:
    data = first
    for _ in range(_utf8_continuation_count(first[0])):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    """Decode the remainder of an ``ESC [`` sequence."""
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    token = _CSI_FINAL_TOKENS.get(seq)
    if token is not None:
        return token
    if seq.isdigit():
        # ``ESC [ 3 ~`` style sequences (delete, page keys); only the final byte matters.
        payload = seq
        while True:
            part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return "ESC"
            if part == b"~":
                break
            payload += part
            if len(payload) > 16:
                return "ESC"
        if payload == b"3":
            return "DELETE"
        if payload in {b"1", b"7"}:
            return "HOME"
        if payload in {b"4", b"8"}:
            return "END"
        return "ESC"
    return "ESC"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input or the stream is
    closed.
    """
    ch = _next_byte(fd, timeout_ms)
    if ch is None:
        return ""

    token = _CONTROL_TOKENS.get(ch)
    if token is not None:
        return token

    if ch != b"\x1b":
        return _decode_text(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _CSI_FINAL_TOKENS.get(final, "ESC")
    _PENDING_BYTES.append(seq)
    return "ESC"
