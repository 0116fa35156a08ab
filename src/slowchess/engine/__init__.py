"""Opponent move selection: policy protocol, heuristic picker, Qt worker."""

from slowchess.engine.policy import (
    CENTER_SQUARES,
    DEFAULT_CAPTURE_VALUES,
    HeuristicPolicy,
    IMovePolicy,
    MoveChoice,
)

__all__ = [
    "CENTER_SQUARES",
    "DEFAULT_CAPTURE_VALUES",
    "HeuristicPolicy",
    "IMovePolicy",
    "MoveChoice",
]
