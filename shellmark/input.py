"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Printable input comes back as the character itself; everything else is an
upper-case token such as ``"UP"``, ``"CTRL_K"`` or ``"ESC"``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x0b": "CTRL_K",
    b"\x0f": "CTRL_O",
    b"\x15": "CTRL_U",
    b"\x08": "CTRL_BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"3": "DELETE",
    b"11": "F1",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = lead
    for _ in range(_utf8_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    params = b""
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part == b"[" and not params:
            # Linux console function keys: ESC [ [ A .. ESC [ [ E
            params = part
            continue
        if part == b"~":
            return _CSI_TILDE_KEYS.get(params, "ESC")
        if 0x40 <= part[0] <= 0x7E:
            if params == b"[":
                return "F1" if part == b"A" else "ESC"
            if params:
                return "ESC"
            return _CSI_FINAL_KEYS.get(part, "ESC")
        params += part
        if len(params) > 16:
            return "ESC"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input or the stream
    is closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        return _read_utf8_char(fd, ch)

    # Escape / arrow / function key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"O":
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq == b"P":
            return "F1"
        if seq is not None and seq in _CSI_FINAL_KEYS:
            return _CSI_FINAL_KEYS[seq]
        return "ESC"
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    return _read_csi(fd)


KEY_TOKENS: tuple[str, ...] = tuple(
    dict.fromkeys(
        [
            *_CONTROL_KEYS.values(),
            *_CSI_FINAL_KEYS.values(),
            *_CSI_TILDE_KEYS.values(),
            "ESC",
        ]
    )
)
