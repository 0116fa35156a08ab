"""GameController — the hosting side of a chess game.

Owns the single :class:`Board`, turns square selections into moves,
prompts computer players and notifies listeners through callbacks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from slowchess.config import GameSettings
from slowchess.core.board import Board
from slowchess.core.enums import Color, GameState
from slowchess.core.types import Position
from slowchess.engine.policy import HeuristicPolicy
from slowchess.game.interfaces import IGameController, IPlayer, SessionPhase
from slowchess.game.player import ComputerPlayer, HumanPlayer
from slowchess.game.storage import SavedGame, default_save_path, save_game

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Position, Position, str, Board], None]  # from, to, notation
StateCallback = Callable[[GameState], None]
PhaseCallback = Callable[[SessionPhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_state_changed: list[StateCallback] = field(default_factory=list)
    on_game_over: list[StateCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a game: selection, move submission, undo, listeners.

    Thread-safety: methods must be called from a single thread (the
    owner's).  Background policies hand their result back through
    :meth:`submit_move` on that thread.
    """

    __slots__ = (
        "_board",
        "_players",
        "_phase",
        "_selected",
        "_highlights",
        "_snapshots",
        "_last_moves",
        "_save_path",
        "events",
    )

    def __init__(self) -> None:
        self._board = Board.initial()
        self._players: dict[Color, IPlayer] = {}
        self._phase = SessionPhase.NOT_STARTED
        self._selected: Position | None = None
        self._highlights: set[Position] = set()
        self._snapshots: list[Board] = []
        self._last_moves: list[tuple[Position, Position]] = []
        self._save_path: Path | None = None
        self.events = GameEvents()

    @classmethod
    def from_settings(cls, settings: GameSettings) -> GameController:
        """Controller with players built from *settings*, game started."""
        ctrl = cls()
        ctrl._save_path = settings.save_path
        white, black = _build_players(
            settings, settings.vs_computer, settings.computer_color
        )
        ctrl.new_game(white, black)
        return ctrl

    @classmethod
    def from_saved(
        cls, saved: SavedGame, settings: GameSettings | None = None
    ) -> GameController:
        """Controller resuming *saved*; policy tuning comes from *settings*."""
        settings = settings or GameSettings()
        ctrl = cls()
        ctrl._save_path = settings.save_path
        white, black = _build_players(
            settings, saved.vs_computer, saved.computer_color
        )
        ctrl.new_game(white, black, board=saved.board, last_move=saved.last_move)
        return ctrl

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def selected(self) -> Position | None:
        return self._selected

    @property
    def highlights(self) -> set[Position]:
        return set(self._highlights)

    @property
    def last_move(self) -> tuple[Position, Position] | None:
        return self._last_moves[-1] if self._last_moves else None

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._board.turn)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    @property
    def vs_computer(self) -> bool:
        return any(not p.is_human for p in self._players.values())

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        board: Board | None = None,
        last_move: tuple[Position, Position] | None = None,
    ) -> None:
        """Start a game; pass *board* (and *last_move*) to resume one."""
        self._cancel_computer()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._board = board if board is not None else Board.initial()
        self._snapshots = []
        self._last_moves = [last_move] if last_move is not None else []
        self._clear_selection()
        _LOGGER.info("New game: %s (white) vs %s (black)", white.name, black.name)

        if self._board.state.is_terminal:
            self._set_phase(SessionPhase.GAME_OVER)
            return
        self._prompt_current_player()

    def select(self, pos: Position) -> bool:
        """Handle a click on *pos*. Returns True if it completed a move.

        Clicking an own piece selects it and highlights its legal
        destinations; clicking a highlighted square plays the move;
        anything else clears or replaces the selection.
        """
        if self._phase != SessionPhase.AWAITING_MOVE:
            return False
        cp = self.current_player
        if cp is not None and not cp.is_human:
            return False

        if self._selected is not None and pos in self._highlights:
            from_pos = self._selected
            self._clear_selection()
            return self.submit_move(from_pos, pos)

        self._clear_selection()
        piece = self._board.get(pos)
        if piece is not None and piece.color == self._board.turn:
            moves = self._board.legal_moves(pos)
            if moves:
                self._selected = pos
                self._highlights = moves
        return False

    def submit_move(self, from_pos: Position, to_pos: Position) -> bool:
        if self._phase not in (SessionPhase.AWAITING_MOVE, SessionPhase.THINKING):
            return False
        if not self._apply(from_pos, to_pos):
            return False
        if self._phase != SessionPhase.GAME_OVER:
            self._prompt_current_player()
        return True

    def play_computer_move(self) -> bool:
        """Ask the current computer player for a move and play it.

        For hosts that drive computer-vs-computer games one ply at a time.
        """
        cp = self.current_player
        if cp is None or cp.is_human or self._phase == SessionPhase.GAME_OVER:
            return False
        choice = cp.request_move(self._board.copy())
        if choice is None:
            return False
        return self._apply(choice.from_pos, choice.to_pos)

    def undo_move(self) -> bool:
        """Take back the last move (and the computer's reply before it).

        Refused once the game has ended.
        """
        if self._phase == SessionPhase.GAME_OVER or not self._snapshots:
            return False

        self._cancel_computer()
        self._restore()
        cp = self.current_player
        if cp is not None and not cp.is_human and self._snapshots:
            self._restore()

        self._clear_selection()
        _LOGGER.debug("Undo: %d moves remain", len(self._board.move_history))
        self._set_phase(SessionPhase.AWAITING_MOVE)
        cp = self.current_player
        if cp is not None and not cp.is_human:
            self._prompt_current_player()
        return True

    def save(self, path: Path | None = None) -> Path:
        """Write the session to disk and return the file used.

        Defaults to the configured save path, then to
        :func:`~slowchess.game.storage.default_save_path`.
        """
        target = path or self._save_path or default_save_path()
        computer = next((p for p in self._players.values() if not p.is_human), None)
        save_game(
            target,
            self._board,
            vs_computer=computer is not None,
            computer_color=computer.color if computer is not None else Color.BLACK,
            last_move=self.last_move,
        )
        return target

    # ── Internal helpers ─────────────────────────────────────────────────

    def _apply(self, from_pos: Position, to_pos: Position) -> bool:
        snapshot = self._board.copy()
        previous_state = self._board.state
        if not self._board.make_move(from_pos, to_pos):
            return False

        self._snapshots.append(snapshot)
        self._last_moves.append((from_pos, to_pos))
        self._clear_selection()
        notation = self._board.move_history[-1]
        self._emit_move(from_pos, to_pos, notation)

        state = self._board.state
        if state != previous_state:
            self._emit_state(state)
        if state.is_terminal:
            _LOGGER.info(
                "Game over after %d moves: %s", len(self._board.move_history), state
            )
            self._emit_game_over(state)
        return True

    def _restore(self) -> None:
        self._board = self._snapshots.pop()
        self._last_moves.pop()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            self._set_phase(SessionPhase.AWAITING_MOVE)
            return

        if cp.is_human:
            self._set_phase(SessionPhase.AWAITING_MOVE)
            return

        self._set_phase(SessionPhase.THINKING)
        choice = cp.request_move(self._board.copy())
        if choice is None:
            return  # answer arrives later through submit_move
        if not self._apply(choice.from_pos, choice.to_pos):
            _LOGGER.warning(
                "%s chose an illegal move %r -> %r",
                cp.name,
                choice.from_pos,
                choice.to_pos,
            )
            return
        if self._phase != SessionPhase.GAME_OVER:
            self._set_phase(SessionPhase.AWAITING_MOVE)

    def _cancel_computer(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human and self._phase == SessionPhase.THINKING:
            cp.cancel()

    def _clear_selection(self) -> None:
        self._selected = None
        self._highlights = set()

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, from_pos: Position, to_pos: Position, notation: str) -> None:
        for cb in self.events.on_move:
            cb(from_pos, to_pos, notation, self._board)

    def _emit_state(self, state: GameState) -> None:
        for cb in self.events.on_state_changed:
            cb(state)

    def _emit_game_over(self, state: GameState) -> None:
        self._set_phase(SessionPhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(state)


def _build_players(
    settings: GameSettings, vs_computer: bool, computer_color: Color
) -> tuple[IPlayer, IPlayer]:
    players: dict[Color, IPlayer] = {}
    for color in Color:
        if vs_computer and color == computer_color:
            policy = HeuristicPolicy(
                jitter=settings.policy_jitter,
                center_bonus=settings.center_bonus,
            )
            players[color] = ComputerPlayer(color, policy)
        else:
            players[color] = HumanPlayer(color)
    return players[Color.WHITE], players[Color.BLACK]
