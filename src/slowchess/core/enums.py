"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def home_row(self) -> int:
        """Board row of this side's back rank (row 0 is rank 8)."""
        return 7 if self is Color.WHITE else 0

    @property
    def pawn_direction(self) -> int:
        """Row delta of a single pawn step."""
        return -1 if self is Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds."""

    KING = auto()
    QUEEN = auto()
    ROOK = auto()
    BISHOP = auto()
    KNIGHT = auto()
    PAWN = auto()


class GameState(IntEnum):
    """Game phase as seen by the side to move.

    Derived from two facts only: is the side to move in check, and does it
    have at least one legal move.
    """

    PLAYING = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.CHECKMATE, GameState.STALEMATE)

    def __str__(self) -> str:
        return self.name.lower()
