"""Save / load a game session as JSON.

The file holds the full board (placement, side to move, rights, en-passant
target, history, state) plus session options.  Loading re-checks the
board invariants, since the rules engine trusts its input.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from slowchess.core.board import Board
from slowchess.core.castling import CastlingRights
from slowchess.core.enums import Color, GameState, PieceKind
from slowchess.core.piece import Piece
from slowchess.core.rules import Rules
from slowchess.core.types import Position, parse_square, square_name

_LOGGER = logging.getLogger(__name__)

SAVE_FILE_NAME = "slowchess_save.json"
FORMAT_VERSION = 1

_CASTLING_FIELDS = (
    "white_kingside",
    "white_queenside",
    "black_kingside",
    "black_queenside",
)


class SaveFormatError(ValueError):
    """Raised when a save file is malformed or describes an invalid board."""


@dataclass(slots=True)
class SavedGame:
    """Everything needed to resume a session."""

    board: Board
    vs_computer: bool = True
    computer_color: Color = Color.BLACK
    last_move: tuple[Position, Position] | None = None


def default_save_path() -> Path:
    """Save file location inside the platform's application data directory."""
    from PyQt6.QtCore import QStandardPaths

    location = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppLocalDataLocation
    )
    base = Path(location) if location else Path.home()
    return base / SAVE_FILE_NAME


# ── Serialisation ────────────────────────────────────────────────────────────


def board_to_dict(board: Board) -> dict[str, Any]:
    return {
        "squares": [
            "".join(str(p) if p is not None else "." for p in row)
            for row in board.squares
        ],
        "turn": str(board.turn),
        "state": str(board.state),
        "move_history": list(board.move_history),
        "castling": {
            name: getattr(board.castling, name) for name in _CASTLING_FIELDS
        },
        "en_passant": (
            square_name(board.en_passant) if board.en_passant is not None else None
        ),
    }


def board_from_dict(data: Any) -> Board:
    """Rebuild a :class:`Board` and validate its invariants."""
    if not isinstance(data, dict):
        raise SaveFormatError("Board must be a JSON object")

    board = Board.empty()
    rows = data.get("squares")
    if not isinstance(rows, list) or len(rows) != 8:
        raise SaveFormatError("Board must have 8 rows")
    for row_idx, row_text in enumerate(rows):
        if not isinstance(row_text, str) or len(row_text) != 8:
            raise SaveFormatError(f"Row {row_idx} must be an 8-character string")
        for col_idx, ch in enumerate(row_text):
            if ch == ".":
                continue
            try:
                board.place((row_idx, col_idx), Piece.from_char(ch))
            except ValueError as exc:
                raise SaveFormatError(str(exc)) from None

    board.turn = _parse_enum(Color, data.get("turn"), "turn")
    board.state = _parse_enum(GameState, data.get("state"), "state")

    history = data.get("move_history")
    if not isinstance(history, list) or not all(isinstance(m, str) for m in history):
        raise SaveFormatError("move_history must be a list of strings")
    board.move_history = list(history)

    castling = data.get("castling")
    if not isinstance(castling, dict):
        raise SaveFormatError("castling must be an object")
    flags: list[bool] = []
    for name in _CASTLING_FIELDS:
        value = castling.get(name)
        if not isinstance(value, bool):
            raise SaveFormatError(f"castling.{name} must be a boolean")
        flags.append(value)
    board.castling = CastlingRights(*flags)

    ep = data.get("en_passant")
    if ep is not None:
        if not isinstance(ep, str):
            raise SaveFormatError("en_passant must be a square name or null")
        board.en_passant = _parse_square(ep, "en_passant")

    validate_board(board)
    return board


def validate_board(board: Board) -> None:
    """Raise :class:`SaveFormatError` unless *board* is playable."""
    for color in Color:
        kings = [
            p for p in board.pieces(color) if p.kind == PieceKind.KING
        ]
        if len(kings) != 1:
            raise SaveFormatError(f"Expected one {color} king, found {len(kings)}")

    for col in range(8):
        for row in (0, 7):
            piece = board.squares[row][col]
            if piece is not None and piece.kind == PieceKind.PAWN:
                raise SaveFormatError(f"Pawn on back rank at {square_name((row, col))}")

    if board.en_passant is not None:
        row, col = board.en_passant
        # Target sits behind a pawn of the side that just moved
        expected_row = 2 if board.turn == Color.WHITE else 5
        pawn_row = row + (1 if board.turn == Color.WHITE else -1)
        pawn = board.get((pawn_row, col))
        if (
            row != expected_row
            or board.get(board.en_passant) is not None
            or pawn is None
            or pawn.kind != PieceKind.PAWN
            or pawn.color != board.turn.opposite
        ):
            raise SaveFormatError(
                f"Inconsistent en-passant target {square_name(board.en_passant)}"
            )

    for color in Color:
        home = color.home_row
        king = board.get((home, 4))
        king_home = (
            king is not None and king.kind == PieceKind.KING and king.color == color
        )
        for col, held in (
            (7, board.castling.kingside(color)),
            (0, board.castling.queenside(color)),
        ):
            rook = board.get((home, col))
            rook_home = (
                rook is not None and rook.kind == PieceKind.ROOK and rook.color == color
            )
            if held and not (king_home and rook_home):
                raise SaveFormatError(
                    f"{color} castling right held without king and rook at home"
                )

    if board.in_check(board.turn.opposite):
        raise SaveFormatError(f"{board.turn.opposite} king is in check off-turn")

    expected = Rules.evaluate(board)
    if board.state != expected:
        raise SaveFormatError(f"Stored state {board.state} but position is {expected}")


# ── File I/O ─────────────────────────────────────────────────────────────────


def save_game(
    path: Path,
    board: Board,
    *,
    vs_computer: bool = True,
    computer_color: Color = Color.BLACK,
    last_move: tuple[Position, Position] | None = None,
) -> None:
    payload = {
        "version": FORMAT_VERSION,
        "board": board_to_dict(board),
        "vs_computer": vs_computer,
        "computer_color": str(computer_color),
        "last_move": (
            [square_name(last_move[0]), square_name(last_move[1])]
            if last_move is not None
            else None
        ),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    _LOGGER.info("Saved game (%d moves) to %s", len(board.move_history), path)


def load_game(path: Path) -> SavedGame:
    """Read and validate a save file written by :func:`save_game`."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        _LOGGER.warning("Save file %s is not valid JSON", path)
        raise SaveFormatError(f"Invalid JSON in {path}: {exc}") from exc

    try:
        saved = _saved_from_payload(payload)
    except SaveFormatError as exc:
        _LOGGER.warning("Rejected save file %s: %s", path, exc)
        raise

    _LOGGER.info("Loaded game (%d moves) from %s", len(saved.board.move_history), path)
    return saved


def _saved_from_payload(payload: Any) -> SavedGame:
    if not isinstance(payload, dict):
        raise SaveFormatError("Save file must contain a JSON object")
    if payload.get("version") != FORMAT_VERSION:
        raise SaveFormatError(f"Unsupported save version: {payload.get('version')!r}")

    board = board_from_dict(payload.get("board"))

    vs_computer = payload.get("vs_computer", True)
    if not isinstance(vs_computer, bool):
        raise SaveFormatError("vs_computer must be a boolean")
    computer_color = _parse_enum(
        Color, payload.get("computer_color", "black"), "computer_color"
    )

    last_move: tuple[Position, Position] | None = None
    raw_last = payload.get("last_move")
    if raw_last is not None:
        if (
            not isinstance(raw_last, list)
            or len(raw_last) != 2
            or not all(isinstance(s, str) for s in raw_last)
        ):
            raise SaveFormatError("last_move must be a pair of square names")
        last_move = (
            _parse_square(raw_last[0], "last_move"),
            _parse_square(raw_last[1], "last_move"),
        )

    return SavedGame(
        board=board,
        vs_computer=vs_computer,
        computer_color=computer_color,
        last_move=last_move,
    )


# ── Helpers ──────────────────────────────────────────────────────────────────


def _parse_enum(enum_cls: Any, value: object, field_name: str) -> Any:
    if not isinstance(value, str):
        raise SaveFormatError(f"{field_name} must be a string")
    try:
        return enum_cls[value.upper()]
    except KeyError:
        raise SaveFormatError(f"Invalid {field_name}: {value!r}") from None


def _parse_square(name: str, field_name: str) -> Position:
    try:
        return parse_square(name)
    except ValueError:
        raise SaveFormatError(f"Invalid {field_name} square: {name!r}") from None
