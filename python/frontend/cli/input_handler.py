"""Single-keypress reader for the terminal frontend.

Returns action strings without waiting for Enter. Arrow keys and WASD
move the selected piece, digits pick a piece by id (``0`` is piece 10)
and Tab cycles through pieces. Works on macOS / Linux (tty+termios)
and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

_MOVES: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
}

_ACTIONS: dict[str, str] = {
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "v": "solve",
    "n": "hint",
    "\t": "next",
    "\r": "enter",
    "\n": "enter",
}

_ARROWS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map one raw character to its action string."""
    if ch.isdigit():
        return f"piece:{int(ch) or 10}"
    low = ch.lower()
    if low in _MOVES:
        return _MOVES[low]
    return _ACTIONS.get(low, "")


# -- platform readers ----------------------------------------------------------


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def _next(wait: float | None) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        # os.read is unbuffered, so select() still sees the rest of an
        # escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        ch = _next(timeout)
        if ch is None:
            return None
        if ch != "\x1b":
            return _resolve(ch)
        if _next(0.1) != "[":
            return "quit"  # bare Escape
        return _ARROWS.get(_next(0.1) or "", "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    end = None if timeout is None else time.monotonic() + timeout
    while not msvcrt.kbhit():
        if end is not None and time.monotonic() >= end:
            return None
        time.sleep(0.02)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(
            msvcrt.getwch(), ""
        )
    if ch == "\x1b":
        return "quit"
    return _resolve(ch)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action string.

    Possible return values:
        "up", "down", "left", "right"  — move the selected piece
        "piece:<id>"                   — select piece 1–10
        "next"                         — Tab, select the next piece
        "solve"                        — v, replay the optimal solution
        "hint"                         — n, play one optimal move
        "restart"                      — r
        "quit"                         — q / Ctrl-C / Escape
        "enter"                        — Enter / Return
        ""                             — unrecognised key
    """
    key = _read(None)
    assert key is not None
    return key


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but ``None`` if nothing is pressed in *timeout* s."""
    return _read(timeout)
