"""Simplified algebraic notation for the move history."""

from __future__ import annotations

from typing import TYPE_CHECKING

from slowchess.core.enums import PieceKind
from slowchess.core.types import Position, square_name

if TYPE_CHECKING:
    from slowchess.core.board import Board


def is_en_passant_capture(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """Whether moving *from_pos* -> *to_pos* is an en-passant capture."""
    piece = board.get(from_pos)
    return (
        piece is not None
        and piece.kind == PieceKind.PAWN
        and board.en_passant is not None
        and to_pos == board.en_passant
        and from_pos[1] != to_pos[1]
    )


def move_to_notation(board: Board, from_pos: Position, to_pos: Position) -> str:
    """Notation for a move given the *board* before the move.

    Piece letter, ``x`` on captures, destination square: ``Nf3``, ``e4``,
    ``xd5`` for a pawn capture, ``Qxh7``. No disambiguation and no
    check / mate suffixes; castling reads as the king move (``Kg1``).
    """
    piece = board.get(from_pos)
    if piece is None:
        return f"{square_name(from_pos)}→{square_name(to_pos)}"

    is_capture = board.get(to_pos) is not None or is_en_passant_capture(
        board, from_pos, to_pos
    )
    return f"{piece.letter}{'x' if is_capture else ''}{square_name(to_pos)}"
