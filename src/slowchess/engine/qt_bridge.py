"""Qt bridge to run a move policy in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from slowchess.core.board import Board
from slowchess.engine.policy import HeuristicPolicy, IMovePolicy

_LOGGER = logging.getLogger(__name__)


class PolicyWorker(QObject):
    """Thread-affine worker that picks opponent moves on demand.

    The owner sends a *copy* of its board; results come back as
    ``(request_id, from_pos, to_pos)`` and are applied by the owner on its
    own thread.  The worker never touches the owner's board.
    """

    move_ready = pyqtSignal(int, object, object)
    request_cancelled = pyqtSignal(int)
    no_move = pyqtSignal(int)
    policy_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_policy")

    def __init__(self, policy: IMovePolicy | None = None) -> None:
        super().__init__()
        self._policy: IMovePolicy = policy if policy is not None else HeuristicPolicy()
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, board_obj: object, request_id: int) -> None:
        """Choose a move for the side to move in *board_obj* and emit it."""
        if not isinstance(board_obj, Board):
            self.policy_error.emit(request_id, "Policy received invalid board")
            return

        self._cancel_event.clear()
        try:
            choice = self._policy.choose(board_obj)
        except Exception as exc:
            _LOGGER.exception("Move policy failed for request %d", request_id)
            self.policy_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.request_cancelled.emit(request_id)
            return

        if choice is None:
            _LOGGER.warning("Move policy found no move for request %d", request_id)
            self.no_move.emit(request_id)
            return

        self.move_ready.emit(request_id, choice.from_pos, choice.to_pos)

    @pyqtSlot()
    def cancel(self) -> None:
        """Drop the result of the request in progress."""
        self._cancel_event.set()

    def set_policy(self, policy: IMovePolicy) -> None:
        """Swap the policy (takes effect on the next request)."""
        self._policy = policy
