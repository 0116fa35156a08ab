"""Tests for Qt policy bridge worker."""

from __future__ import annotations

import random

import pytest
from PyQt6.QtTest import QSignalSpy

from slowchess.core.board import Board
from slowchess.core.move_generator import MoveGenerator
from slowchess.engine.policy import HeuristicPolicy, MoveChoice
from slowchess.engine.qt_bridge import PolicyWorker

pytestmark = pytest.mark.usefixtures("qapp")


class _CancellingPolicy:
    def __init__(self, worker: PolicyWorker) -> None:
        self._worker = worker

    def choose(self, board: Board) -> MoveChoice | None:
        from_pos, to_pos = MoveGenerator(board).all_legal_moves()[0]
        self._worker.cancel()
        return MoveChoice(from_pos, to_pos, 0)


class _NoMovePolicy:
    def choose(self, _board: Board) -> MoveChoice | None:
        return None


class _BrokenPolicy:
    def choose(self, _board: Board) -> MoveChoice | None:
        raise RuntimeError("policy exploded")


class TestPolicyWorker:
    def test_emits_move_ready(self) -> None:
        worker = PolicyWorker(HeuristicPolicy(rng=random.Random(3)))
        ready = QSignalSpy(worker.move_ready)
        board = Board.initial()

        worker.request_move(board, 5)

        assert len(ready) == 1
        request_id, from_pos, to_pos = ready[0]
        assert request_id == 5
        assert (from_pos, to_pos) in MoveGenerator(board).all_legal_moves()

    def test_emits_cancelled_when_request_is_cancelled(self) -> None:
        worker = PolicyWorker()
        worker.set_policy(_CancellingPolicy(worker))

        cancelled = QSignalSpy(worker.request_cancelled)
        ready = QSignalSpy(worker.move_ready)

        worker.request_move(Board.initial(), 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(ready) == 0

    def test_cancel_does_not_stick_to_next_request(self) -> None:
        worker = PolicyWorker(HeuristicPolicy(rng=random.Random(0)))
        worker.cancel()
        ready = QSignalSpy(worker.move_ready)

        worker.request_move(Board.initial(), 8)

        assert len(ready) == 1

    def test_emits_no_move_when_policy_returns_none(self) -> None:
        worker = PolicyWorker(_NoMovePolicy())

        no_move = QSignalSpy(worker.no_move)
        ready = QSignalSpy(worker.move_ready)
        errors = QSignalSpy(worker.policy_error)

        worker.request_move(Board.initial(), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(ready) == 0
        assert len(errors) == 0

    def test_emits_error_on_exception(self) -> None:
        worker = PolicyWorker(_BrokenPolicy())
        errors = QSignalSpy(worker.policy_error)

        worker.request_move(Board.initial(), 13)

        assert len(errors) == 1
        assert errors[0][0] == 13
        assert "exploded" in errors[0][1]

    def test_rejects_non_board_payload(self) -> None:
        worker = PolicyWorker()
        errors = QSignalSpy(worker.policy_error)

        worker.request_move("not a board", 17)

        assert len(errors) == 1
        assert errors[0][0] == 17
