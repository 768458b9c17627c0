"""Single-keypress reader for the CLI frontend.

Arrow keys and WASD come back as orthogonal moves; everything else is a
named action or the raw printable character. Digits stay raw so screens
can give them their own meaning (keypad directions, menu choices).
"""

from __future__ import annotations

import os
import sys


def _read_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_read = _read_windows if os.name == "nt" else _read_unix


_ACTIONS: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "u": "undo",
    "r": "restart",
    "q": "quit",
    "h": "help",
    "?": "help",
    "\x03": "quit",  # Ctrl-C
    "\r": "enter",
    "\n": "enter",
    " ": "enter",
}

_ARROWS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _ACTIONS.get(ch.lower() if ch.isalpha() else ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


def get_key() -> str:
    """Block for one keypress and return its action string.

    Returns "up" / "down" / "left" / "right", "undo", "restart", "quit",
    "help", "enter", a raw printable character, or "" for anything else.
    A bare Escape counts as "quit".
    """
    ch = _read()
    if ch == "\x1b":
        if _read() == "[":
            return _ARROWS.get(_read(), "")
        return "quit"
    return resolve(ch)
