"""Tests for Rules: check, checkmate and stalemate detection."""

from slowchess.core.board import Board
from slowchess.core.enums import Color, GameState
from slowchess.core.rules import Rules
from slowchess.core.types import parse_square


def _play(board: Board, *moves: str) -> None:
    for mv in moves:
        assert board.make_move(parse_square(mv[:2]), parse_square(mv[2:])), mv


STALEMATE_ROWS = [
    "........",
    "........",
    "........",
    "........",
    "........",
    "kq......",
    "........",
    "K.......",
]


class TestCheck:
    def test_start_is_playing(self) -> None:
        board = Board.initial()
        assert not Rules.is_in_check(board)
        assert Rules.evaluate(board) == GameState.PLAYING

    def test_queen_check(self) -> None:
        board = Board.initial()
        _play(board, "e2e4", "f7f5", "d1h5")
        assert board.state == GameState.CHECK
        assert Rules.is_in_check(board)
        assert not Rules.is_checkmate(board)

    def test_check_clears_after_block(self) -> None:
        board = Board.initial()
        _play(board, "e2e4", "f7f5", "d1h5", "g7g6")
        assert board.state == GameState.PLAYING

    def test_only_check_resolving_moves(self) -> None:
        board = Board.initial()
        _play(board, "e2e4", "f7f5", "d1h5")
        assert board.legal_moves(parse_square("a7")) == set()
        assert board.legal_moves(parse_square("g7")) == {parse_square("g6")}


class TestCheckmate:
    def test_fools_mate(self) -> None:
        board = Board.initial()
        _play(board, "f2f3", "e7e5", "g2g4", "d8h4")
        assert board.state == GameState.CHECKMATE
        assert board.turn == Color.WHITE
        assert Rules.is_checkmate(board)
        assert board.move_history == ["f3", "e5", "g4", "Qh4"]

    def test_no_moves_after_mate(self) -> None:
        board = Board.initial()
        _play(board, "f2f3", "e7e5", "g2g4", "d8h4")
        for row in range(8):
            for col in range(8):
                assert board.legal_moves((row, col)) == set()

    def test_moves_rejected_after_mate(self) -> None:
        board = Board.initial()
        _play(board, "f2f3", "e7e5", "g2g4", "d8h4")
        before = board.copy()
        assert board.make_move(parse_square("a2"), parse_square("a3")) is False
        assert board == before

    def test_back_rank_mate(self, board_from_rows) -> None:
        board = board_from_rows(
            ["......k.", ".....ppp", "........", "........",
             "........", "........", "........", "R...K..."],
        )
        assert board.make_move(parse_square("a1"), parse_square("a8"))
        assert board.state == GameState.CHECKMATE


class TestStalemate:
    def test_king_with_no_safe_square(self, board_from_rows) -> None:
        board = board_from_rows(STALEMATE_ROWS)
        assert not Rules.is_in_check(board)
        assert Rules.evaluate(board) == GameState.STALEMATE
        assert Rules.is_stalemate(board)
        assert board.legal_moves(parse_square("a1")) == set()

    def test_reached_by_a_move(self, board_from_rows) -> None:
        rows = list(STALEMATE_ROWS)
        rows[5] = "k......."
        rows[4] = ".q......"
        board = board_from_rows(rows, turn=Color.BLACK)
        assert board.make_move(parse_square("b4"), parse_square("b3"))
        assert board.state == GameState.STALEMATE
        assert board.make_move(parse_square("a1"), parse_square("b1")) is False

    def test_evaluate_ignores_stored_state(self, board_from_rows) -> None:
        board = board_from_rows(STALEMATE_ROWS)
        board.state = GameState.PLAYING
        assert Rules.evaluate(board) == GameState.STALEMATE
