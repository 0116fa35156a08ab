"""Chess rules engine: board, move generation, game state and notation.

Quick start::

    from slowchess.core import new_game, legal_moves, make_move, parse_square

    board = new_game()
    print(legal_moves(board, parse_square("e2")))
    make_move(board, parse_square("e2"), parse_square("e4"))
"""

from slowchess.core.api import get, legal_moves, make_move, new_game
from slowchess.core.board import Board
from slowchess.core.castling import CastlingRights
from slowchess.core.enums import Color, GameState, PieceKind
from slowchess.core.move_generator import MoveGenerator
from slowchess.core.notation import move_to_notation
from slowchess.core.piece import Piece
from slowchess.core.rules import Rules
from slowchess.core.types import (
    Position,
    in_bounds,
    is_valid_position,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameState",
    "PieceKind",
    # Types / helpers
    "Position",
    "in_bounds",
    "is_valid_position",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CastlingRights",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Notation
    "move_to_notation",
    # Call surface
    "get",
    "legal_moves",
    "make_move",
    "new_game",
]
