"""Position type alias and coordinate helpers.

Board layout (row, column), both 0-based:
    row 0 = rank 8 (Black's back rank), row 7 = rank 1 (White's back rank)
    column 0 = file a, column 7 = file h

So ``(7, 4)`` is e1 and ``(0, 4)`` is e8.
"""

from __future__ import annotations

from typing import TypeAlias

Position: TypeAlias = tuple[int, int]

_FILES = "abcdefgh"


def in_bounds(row: int, col: int) -> bool:
    """Whether *row*, *col* lies on the 8x8 board."""
    return 0 <= row < 8 and 0 <= col < 8


def is_valid_position(pos: object) -> bool:
    """Whether *pos* is a well-formed, on-board ``(row, col)`` pair."""
    if not isinstance(pos, tuple) or len(pos) != 2:
        return False
    row, col = pos
    if type(row) is not int or type(col) is not int:
        return False
    return in_bounds(row, col)


def square_name(pos: Position) -> str:
    """Human-readable name, e.g. ``(4, 4)`` -> 'e4'."""
    row, col = pos
    return f"{_FILES[col]}{8 - row}"


def parse_square(name: str) -> Position:
    """Parse square name, e.g. 'e4' -> ``(4, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return (8 - int(name[1]), _FILES.index(name[0]))
