"""Keypress decoding for the picker."""

from __future__ import annotations

import enum


class Key(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    BACKSPACE = "backspace"
    SPACE = "space"
    ENTER = "enter"
    SELECT_ALL = "a"
    INVERT = "i"
    TOGGLE_DIRECTORY = "d"
    EXPAND = "m"
    COLLAPSE = "h"
    COPY_PATH = "c"


_SEQUENCES: dict[str, Key] = {
    "\x1b[A": Key.UP,
    "\x1bOA": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1bOB": Key.DOWN,
    "\x1b[C": Key.RIGHT,
    "\x1bOC": Key.RIGHT,
    "\x1b[D": Key.LEFT,
    "\x1bOD": Key.LEFT,
    # Windows console arrows as reported by click.getchar()
    "\xe0H": Key.UP,
    "\xe0P": Key.DOWN,
    "\xe0M": Key.RIGHT,
    "\xe0K": Key.LEFT,
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\r\n": Key.ENTER,
    " ": Key.SPACE,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}

_LETTERS: dict[str, Key] = {
    key.value: key for key in Key if len(key.value) == 1
}


def decode_key(raw: str) -> Key | None:
    """Map raw terminal input to a :class:`Key`; unknown input yields None."""
    if raw in _SEQUENCES:
        return _SEQUENCES[raw]
    return _LETTERS.get(raw)
