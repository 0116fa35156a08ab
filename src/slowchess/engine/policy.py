"""Move-selection policies and their shared protocol.

A policy picks one move among the legal moves of the side to move.  It
never looks ahead; anything smarter belongs in a different policy.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from slowchess.core.enums import PieceKind
from slowchess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from slowchess.core.board import Board
    from slowchess.core.types import Position

CENTER_SQUARES: frozenset[Position] = frozenset({(3, 3), (3, 4), (4, 3), (4, 4)})

DEFAULT_CAPTURE_VALUES: dict[PieceKind, int] = {
    PieceKind.QUEEN: 900,
    PieceKind.ROOK: 500,
    PieceKind.BISHOP: 300,
    PieceKind.KNIGHT: 300,
    PieceKind.PAWN: 100,
    PieceKind.KING: 0,
}


@dataclass(slots=True, frozen=True)
class MoveChoice:
    """A move picked by a policy."""

    from_pos: Position
    to_pos: Position
    score: int


class IMovePolicy(Protocol):
    """Protocol for opponent move selection."""

    def choose(self, board: Board) -> MoveChoice | None: ...


@dataclass(slots=True)
class HeuristicPolicy:
    """Greedy one-ply picker: capture value + center bonus + random jitter.

    Args:
        rng: Source of the tiebreak; a fresh ``random.Random`` by default.
        jitter: Random bonus is drawn from ``range(jitter)``; 0 disables it.
        center_bonus: Added when the destination is d4, e4, d5 or e5.
        capture_values: Score for capturing each piece kind.
    """

    rng: random.Random = field(default_factory=random.Random)
    jitter: int = 30
    center_bonus: int = 20
    capture_values: dict[PieceKind, int] = field(
        default_factory=lambda: dict(DEFAULT_CAPTURE_VALUES)
    )

    def score(self, board: Board, from_pos: Position, to_pos: Position) -> int:
        """Deterministic part of a move's score."""
        total = 0
        captured = board.get(to_pos)
        if captured is not None:
            total += self.capture_values.get(captured.kind, 0)
        if to_pos in CENTER_SQUARES:
            total += self.center_bonus
        return total

    def choose(self, board: Board) -> MoveChoice | None:
        best: MoveChoice | None = None
        for from_pos, to_pos in MoveGenerator(board).all_legal_moves():
            total = self.score(board, from_pos, to_pos)
            if self.jitter > 0:
                total += self.rng.randrange(self.jitter)
            if best is None or total > best.score:
                best = MoveChoice(from_pos, to_pos, total)
        return best
