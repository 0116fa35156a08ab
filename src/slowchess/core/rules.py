"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from slowchess.core.enums import GameState
from slowchess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from slowchess.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Product policy: no draw by repetition, no fifty-move rule,
    # no insufficient-material draws.

    @staticmethod
    def is_in_check(board: Board) -> bool:
        return MoveGenerator(board).is_in_check(board.turn)

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        return Rules.evaluate(board) == GameState.CHECKMATE

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        return Rules.evaluate(board) == GameState.STALEMATE

    @staticmethod
    def evaluate(board: Board) -> GameState:
        """Game state for the side to move, computed from scratch.

        Ignores ``board.state`` so it can be used to recompute it.
        """
        gen = MoveGenerator(board)
        in_check = gen.is_in_check(board.turn)
        has_moves = gen.has_legal_move(board.turn)

        if in_check:
            return GameState.CHECK if has_moves else GameState.CHECKMATE
        return GameState.PLAYING if has_moves else GameState.STALEMATE
