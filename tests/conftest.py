"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from slowchess.core.board import Board
from slowchess.core.castling import CastlingRights
from slowchess.core.enums import Color
from slowchess.core.piece import Piece
from slowchess.core.rules import Rules
from slowchess.core.types import Position

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

BoardFactory = Callable[..., Board]


def _board_from_rows(
    rows: list[str],
    turn: Color = Color.WHITE,
    castling: CastlingRights | None = None,
    en_passant: Position | None = None,
) -> Board:
    """Build a board from 8 strings, rank 8 first ('.' = empty)."""
    assert len(rows) == 8 and all(len(r) == 8 for r in rows)
    board = Board.empty(turn)
    for row, text in enumerate(rows):
        for col, ch in enumerate(text):
            if ch != ".":
                board.place((row, col), Piece.from_char(ch))
    if castling is not None:
        board.castling = castling
    board.en_passant = en_passant
    board.state = Rules.evaluate(board)
    return board


@pytest.fixture
def board_from_rows() -> BoardFactory:
    """Factory fixture: ``board_from_rows(rows, turn=..., castling=...)``."""
    return _board_from_rows


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal/slot tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
