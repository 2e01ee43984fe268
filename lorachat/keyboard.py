"""On-screen keyboard layouts and key hit-testing."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from lorachat.geometry import Box, Point, box_intersect

KEY_WIDTH = 30
KEY_TEXT_SIZE = 3
# RGB565 colours of the key faces and borders.
KEY_COLOR = 0xFFFF
KEY_BORDER_COLOR = 0xF81F


@dataclass(frozen=True)
class Key:
    """One key; ``u`` is its width in key units (a letter key is 1u)."""

    key: str
    col: int
    row: int
    u: int = 1


@dataclass(frozen=True)
class Keyboard:
    """An ordered set of keys."""

    keys: tuple[Key, ...]

    def __iter__(self) -> Iterator[Key]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)


def _layout(rows: list[str], mode_key: str) -> Keyboard:
    keys = [
        Key(char, col, row)
        for row, chars in enumerate(rows)
        for col, char in enumerate(chars)
    ]
    bottom = len(rows)
    keys += [
        Key(mode_key, 0, bottom, 1),
        Key(" ", 1, bottom, 7),
        Key("<", 8, bottom, 2),
    ]
    return Keyboard(tuple(keys))


REGULAR = _layout(["qwertyuiop", "asdfghjkl!", "zxcvbnm,.?"], "#")
NUMERIC = _layout(["!@#$%^&*()", "1234567890", "~`_-+={}[]"], "A")


def x_coord(key_col: int) -> int:
    """Left edge of a key column in keyboard coordinates."""
    return KEY_WIDTH * key_col


def y_coord(key_row: int) -> int:
    """Top edge of a key row in keyboard coordinates."""
    return KEY_WIDTH * key_row


def key_location(k: Key) -> Point:
    """Top-left corner of ``k`` in keyboard coordinates."""
    return Point(x_coord(k.col), y_coord(k.row), 0)


def check_keypress(p: Point, board: Keyboard) -> Key | None:
    """Return the key under ``p`` (in the keyboard's frame), or None."""
    for k in board:
        corner = key_location(k)
        if box_intersect(p, Box(corner.x, corner.y, KEY_WIDTH * k.u, KEY_WIDTH)):
            return k
    return None