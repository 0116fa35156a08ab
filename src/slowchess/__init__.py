"""slowchess: a small chess rules engine with a hosting-session layer."""

from slowchess.config import GameSettings
from slowchess.core import Board, Color, GameState, legal_moves, make_move, new_game

__version__ = "0.2.2"

__all__ = [
    "Board",
    "Color",
    "GameSettings",
    "GameState",
    "legal_moves",
    "make_move",
    "new_game",
]
