"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from slowchess.core.enums import Color
from slowchess.game.interfaces import IPlayer

if TYPE_CHECKING:
    from slowchess.core.board import Board
    from slowchess.engine.policy import IMovePolicy, MoveChoice


class HumanPlayer(IPlayer):
    """A human participant; moves come from square selection.

    ``request_move`` is a no-op because humans pick moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, board: Board) -> MoveChoice | None:
        return None  # Human moves arrive via controller.select()/submit_move()

    def cancel(self) -> None:
        pass


class ComputerPlayer(IPlayer):
    """A computer participant driven by a move policy.

    With only a *policy* the move is chosen synchronously and returned from
    :meth:`request_move`.  With *on_request_move* the work is handed off
    (e.g. to a :class:`~slowchess.engine.qt_bridge.PolicyWorker`) and the
    result must later be passed to ``GameController.submit_move``.

    Args:
        color: Side the computer plays.
        policy: Synchronous move picker.
        name: Display name.
        on_request_move: ``(Board) -> None``, asynchronous hand-off.
        on_cancel: ``() -> None``, called to abort a pending request.
    """

    __slots__ = ("_color", "_name", "_policy", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        policy: IMovePolicy | None = None,
        name: str = "Computer",
        on_request_move: Callable[[Board], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._policy = policy
        self._name = name
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, board: Board) -> MoveChoice | None:
        if self._on_request_move is not None:
            self._on_request_move(board)
            return None
        if self._policy is not None:
            return self._policy.choose(board)
        return None

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
