"""Keyboard input: non-canonical terminal mode and escape-sequence decoding."""

from __future__ import annotations

import os
import select
from contextlib import contextmanager
from typing import Iterator

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[5~": "pgup",
    "\x1b[6~": "pgdown",
}
# Longest first so "\x1b[5~" is not read as an unknown "\x1b[5".
_SEQUENCES_BY_LENGTH = sorted(ESCAPE_SEQUENCES.items(), key=lambda item: -len(item[0]))

CONTROL_KEYS = {
    "\x03": "ctrl+c",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    " ": "space",
}


def _csi_length(data: str, start: int) -> int:
    # CSI: ESC [ params... final byte in 0x40-0x7E
    index = start + 2
    while index < len(data):
        if "\x40" <= data[index] <= "\x7e":
            return index - start + 1
        index += 1
    return len(data) - start


def decode_keys(data: str) -> list[str]:
    keys: list[str] = []
    index = 0
    while index < len(data):
        char = data[index]
        if char != "\x1b":
            keys.append(CONTROL_KEYS.get(char, char))
            index += 1
            continue

        for sequence, name in _SEQUENCES_BY_LENGTH:
            if data.startswith(sequence, index):
                keys.append(name)
                index += len(sequence)
                break
        else:
            if data.startswith("\x1b[", index):
                # Unrecognised CSI sequence; pass it through whole.
                length = _csi_length(data, index)
                keys.append(data[index : index + length])
                index += length
            else:
                keys.append("esc")
                index += 1
    return keys


def poll_keys(fd: int, timeout: float) -> list[str]:
    """Wait up to ``timeout`` seconds for input and decode whatever arrived."""
    ready, _, _ = select.select([fd], [], [], timeout)
    if not ready:
        return []
    try:
        raw = os.read(fd, 64)
    except OSError:
        return []
    return decode_keys(raw.decode("utf-8", errors="ignore"))


@contextmanager
def terminal_input(fd: int | None) -> Iterator[bool]:
    """Put ``fd`` in non-canonical, no-echo mode for the duration.

    Yields whether keyboard input is available. ISIG stays on so Ctrl+C
    still raises KeyboardInterrupt. Rich Live's alternate screen keeps
    working over SSH because output processing is left untouched.
    """
    if fd is None:
        yield False
        return

    try:
        import termios
    except ImportError:
        yield False
        return

    try:
        old_settings = termios.tcgetattr(fd)
    except termios.error:
        yield False
        return

    new = termios.tcgetattr(fd)
    new[3] &= ~(termios.ICANON | termios.ECHO)
    new[6][termios.VMIN] = 0
    new[6][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSADRAIN, new)
    try:
        yield True
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
