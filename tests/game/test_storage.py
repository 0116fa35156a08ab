"""Tests for JSON save / load of game sessions."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from slowchess.core.board import Board
from slowchess.core.castling import CastlingRights
from slowchess.core.enums import Color, GameState
from slowchess.core.types import parse_square
from slowchess.game.storage import (
    FORMAT_VERSION,
    SAVE_FILE_NAME,
    SaveFormatError,
    board_from_dict,
    board_to_dict,
    default_save_path,
    load_game,
    save_game,
)


def _after(*moves: str) -> Board:
    board = Board.initial()
    for mv in moves:
        assert board.make_move(parse_square(mv[:2]), parse_square(mv[2:])), mv
    return board


class TestBoardDict:
    def test_initial_layout(self) -> None:
        data = board_to_dict(Board.initial())
        assert data["squares"][0] == "rnbqkbnr"
        assert data["squares"][4] == "........"
        assert data["squares"][7] == "RNBQKBNR"
        assert data["turn"] == "white"
        assert data["state"] == "playing"
        assert data["en_passant"] is None
        assert all(data["castling"].values())

    def test_round_trip_mid_game(self) -> None:
        board = _after("e2e4", "c7c5", "g1f3", "d7d6", "f1b5")
        restored = board_from_dict(board_to_dict(board))
        assert restored == board
        assert restored.state == GameState.CHECK

    def test_en_passant_target_kept(self) -> None:
        board = _after("e2e4")
        data = board_to_dict(board)
        assert data["en_passant"] == "e3"
        assert board_from_dict(data).en_passant == parse_square("e3")

    def test_survives_json(self) -> None:
        board = _after("d2d4", "g8f6", "c1g5")
        text = json.dumps(board_to_dict(board))
        assert board_from_dict(json.loads(text)) == board


class TestValidation:
    def _data(self) -> dict[str, Any]:
        return board_to_dict(Board.initial())

    def test_not_an_object(self) -> None:
        with pytest.raises(SaveFormatError):
            board_from_dict(["rnbqkbnr"])

    def test_wrong_row_count(self) -> None:
        data = self._data()
        data["squares"] = data["squares"][:7]
        with pytest.raises(SaveFormatError, match="8 rows"):
            board_from_dict(data)

    def test_bad_piece_char(self) -> None:
        data = self._data()
        data["squares"][4] = "...x...."
        with pytest.raises(SaveFormatError, match="piece character"):
            board_from_dict(data)

    def test_bad_turn(self) -> None:
        data = self._data()
        data["turn"] = "green"
        with pytest.raises(SaveFormatError, match="turn"):
            board_from_dict(data)

    def test_extra_king(self) -> None:
        data = self._data()
        data["squares"][4] = "....K..."
        with pytest.raises(SaveFormatError, match="one white king"):
            board_from_dict(data)

    def test_missing_king(self) -> None:
        data = self._data()
        data["squares"][0] = "rnbq.bnr"
        data["castling"] = {k: False for k in data["castling"]}
        with pytest.raises(SaveFormatError, match="black king"):
            board_from_dict(data)

    def test_pawn_on_back_rank(self) -> None:
        data = self._data()
        data["squares"][0] = "rnbqkbnP"
        data["castling"]["black_kingside"] = False
        with pytest.raises(SaveFormatError, match="back rank"):
            board_from_dict(data)

    def test_castling_right_without_rook(self) -> None:
        data = self._data()
        data["squares"][7] = "RNBQKBN."
        with pytest.raises(SaveFormatError, match="castling"):
            board_from_dict(data)

    def test_castling_flag_must_be_bool(self) -> None:
        data = self._data()
        data["castling"]["white_kingside"] = 1
        with pytest.raises(SaveFormatError, match="white_kingside"):
            board_from_dict(data)

    def test_stale_state(self) -> None:
        data = self._data()
        data["state"] = "checkmate"
        with pytest.raises(SaveFormatError, match="Stored state"):
            board_from_dict(data)

    def test_inconsistent_en_passant(self) -> None:
        data = self._data()
        data["en_passant"] = "e3"
        with pytest.raises(SaveFormatError, match="en-passant"):
            board_from_dict(data)

    def test_side_not_to_move_in_check(self, board_from_rows) -> None:
        board = board_from_rows(
            ["....k...", "........", "........", "....r...",
             "........", "........", "........", "....K..."],
            turn=Color.BLACK,
        )
        with pytest.raises(SaveFormatError, match="off-turn"):
            board_from_dict(board_to_dict(board))

    def test_custom_position_accepted(self, board_from_rows) -> None:
        board = board_from_rows(
            ["r...k..r", "pppppppp", "........", "........",
             "........", "........", "PPPPPPPP", "R...K..R"],
            castling=CastlingRights(),
        )
        assert board_from_dict(board_to_dict(board)) == board


class TestFileIO:
    def test_save_and_load(self, tmp_path: Path) -> None:
        board = _after("e2e4", "e7e5")
        path = tmp_path / "nested" / SAVE_FILE_NAME
        save_game(
            path,
            board,
            vs_computer=True,
            computer_color=Color.WHITE,
            last_move=(parse_square("e7"), parse_square("e5")),
        )
        saved = load_game(path)
        assert saved.board == board
        assert saved.vs_computer is True
        assert saved.computer_color == Color.WHITE
        assert saved.last_move == (parse_square("e7"), parse_square("e5"))

    def test_file_layout(self, tmp_path: Path) -> None:
        path = tmp_path / "save.json"
        save_game(path, Board.initial(), vs_computer=False)
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["version"] == FORMAT_VERSION
        assert payload["vs_computer"] is False
        assert payload["computer_color"] == "black"
        assert payload["last_move"] is None
        assert payload["board"]["squares"][6] == "PPPPPPPP"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SaveFormatError, match="Invalid JSON"):
            load_game(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(SaveFormatError, match="Invalid JSON"):
            load_game(path)

    def test_unknown_version(self, tmp_path: Path) -> None:
        path = tmp_path / "future.json"
        save_game(path, Board.initial())
        payload = json.loads(path.read_text(encoding="utf-8"))
        payload["version"] = FORMAT_VERSION + 1
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(SaveFormatError, match="version"):
            load_game(path)

    def test_bad_last_move(self, tmp_path: Path) -> None:
        path = tmp_path / "save.json"
        save_game(path, Board.initial())
        payload = json.loads(path.read_text(encoding="utf-8"))
        payload["last_move"] = ["e2", "z9"]
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(SaveFormatError, match="last_move"):
            load_game(path)

    def test_missing_file_propagates(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_game(tmp_path / "absent.json")

    def test_default_save_path(self, qapp: object) -> None:
        path = default_save_path()
        assert path.name == SAVE_FILE_NAME
