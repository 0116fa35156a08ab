"""Function-style call surface used by hosting applications.

The host owns the :class:`Board` and passes it into each call; nothing
here keeps a reference to it afterwards.
"""

from __future__ import annotations

from slowchess.core.board import Board
from slowchess.core.piece import Piece
from slowchess.core.types import Position


def new_game() -> Board:
    """Fresh board in the standard starting position, White to move."""
    return Board.initial()


def legal_moves(board: Board, pos: Position) -> set[Position]:
    """Destinations to highlight after *pos* is selected."""
    return board.legal_moves(pos)


def make_move(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """Play a move; ``False`` means illegal and the board is unchanged."""
    return board.make_move(from_pos, to_pos)


def get(board: Board, pos: Position) -> Piece | None:
    return board.get(pos)
