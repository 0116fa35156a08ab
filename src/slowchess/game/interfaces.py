"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on concrete players.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from slowchess.core.enums import Color

if TYPE_CHECKING:
    from slowchess.core.board import Board
    from slowchess.core.types import Position
    from slowchess.engine.policy import MoveChoice


# ── Session phase FSM states ─────────────────────────────────────────────────


class SessionPhase(IntEnum):
    """Finite-state-machine states for a hosted game session."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # computer is choosing
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or computer)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, board: Board) -> MoveChoice | None:
        """Begin the move-selection process on a copy of the game board.

        Returns the chosen move when it is known immediately, or ``None``
        when the move will arrive later through the controller (humans,
        background workers).
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (no-op for humans)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, white: IPlayer, black: IPlayer) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, from_pos: Position, to_pos: Position) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""
