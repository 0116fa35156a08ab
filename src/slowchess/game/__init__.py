"""Game management layer — controller, players, session persistence.

Quick start::

    from slowchess.core import Color
    from slowchess.game import ComputerPlayer, GameController, HumanPlayer
    from slowchess.engine import HeuristicPolicy

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=ComputerPlayer(Color.BLACK, HeuristicPolicy()),
    )
"""

from slowchess.game.controller import GameController, GameEvents
from slowchess.game.interfaces import IGameController, IPlayer, SessionPhase
from slowchess.game.player import ComputerPlayer, HumanPlayer
from slowchess.game.storage import (
    SavedGame,
    SaveFormatError,
    default_save_path,
    load_game,
    save_game,
)

__all__ = [
    # Interfaces
    "IGameController",
    "IPlayer",
    "SessionPhase",
    # Concrete
    "ComputerPlayer",
    "GameController",
    "GameEvents",
    "HumanPlayer",
    # Persistence
    "SaveFormatError",
    "SavedGame",
    "default_save_path",
    "load_game",
    "save_game",
]
