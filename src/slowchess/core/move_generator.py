"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from slowchess.core.enums import Color, PieceKind
from slowchess.core.notation import is_en_passant_capture
from slowchess.core.types import Position, in_bounds, is_valid_position

if TYPE_CHECKING:
    from slowchess.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[Position, ...]]:
    targets: dict[Position, tuple[Position, ...]] = {}
    for row in range(8):
        for col in range(8):
            targets[(row, col)] = tuple(
                (row + dr, col + dc)
                for dr, dc in offsets
                if in_bounds(row + dr, col + dc)
            )
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[tuple[Position, ...], ...]]:
    rays_per_square: dict[Position, tuple[tuple[Position, ...], ...]] = {}
    for row in range(8):
        for col in range(8):
            square_rays: list[tuple[Position, ...]] = []
            for dr, dc in directions:
                r, c = row + dr, col + dc
                ray: list[Position] = []
                while in_bounds(r, c):
                    ray.append((r, c))
                    r += dr
                    c += dc
                square_rays.append(tuple(ray))
            rays_per_square[(row, col)] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS = {
    PieceKind.BISHOP: _BISHOP_RAYS,
    PieceKind.ROOK: _ROOK_RAYS,
    PieceKind.QUEEN: _QUEEN_RAYS,
}


class MoveGenerator:
    """Generates moves for a given :class:`Board`.

    Legality is checked by cloning the board per candidate destination and
    relocating the piece on the clone; the original board is never touched.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def piece_moves(self, pos: Position) -> set[Position]:
        """Pseudo-legal destinations for the piece on *pos*.

        Does not consider whether the move leaves the mover's king attacked.
        """
        if not is_valid_position(pos):
            return set()
        piece = self._board.get(pos)
        if piece is None:
            return set()

        moves: set[Position] = set()
        if piece.kind == PieceKind.PAWN:
            self._gen_pawn(pos, piece.color, moves)
        elif piece.kind == PieceKind.KNIGHT:
            self._gen_steps(pos, piece.color, _KNIGHT_TARGETS[pos], moves)
        elif piece.kind == PieceKind.KING:
            self._gen_steps(pos, piece.color, _KING_TARGETS[pos], moves)
            self._gen_castling(pos, piece.color, moves)
        else:
            self._gen_sliding(pos, piece.color, _SLIDER_RAYS[piece.kind][pos], moves)
        return moves

    def legal_moves(self, pos: Position) -> set[Position]:
        """Destinations that do not leave the mover's own king attacked.

        Empty unless *pos* holds a piece of the side to move and the game
        is still running.
        """
        board = self._board
        if board.state.is_terminal or not is_valid_position(pos):
            return set()
        piece = board.get(pos)
        if piece is None or piece.color != board.turn:
            return set()
        return self.safe_moves(pos)

    def safe_moves(self, pos: Position) -> set[Position]:
        """Filter :meth:`piece_moves` by king safety, ignoring turn and state."""
        piece = self._board.get(pos)
        if piece is None:
            return set()

        legal: set[Position] = set()
        for to in self.piece_moves(pos):
            trial = self._board.copy()
            if is_en_passant_capture(self._board, pos, to):
                # The passed pawn leaves the board too
                trial.squares[pos[0]][to[1]] = None
            trial.relocate(pos, to)
            if not MoveGenerator(trial).is_in_check(piece.color):
                legal.add(to)
        return legal

    def all_legal_moves(
        self, color: Color | None = None
    ) -> list[tuple[Position, Position]]:
        """Every legal ``(from, to)`` pair for *color* (default: side to move).

        Ordered by source square (row-major) then destination.
        """
        board = self._board
        if color is None:
            color = board.turn
        if board.state.is_terminal:
            return []

        pairs: list[tuple[Position, Position]] = []
        for from_pos, piece in board.occupied():
            if piece.color != color:
                continue
            for to in sorted(self.safe_moves(from_pos)):
                pairs.append((from_pos, to))
        return pairs

    def has_legal_move(self, color: Color) -> bool:
        """Whether *color* has at least one king-safe move."""
        for from_pos, piece in self._board.occupied():
            if piece.color == color and self.safe_moves(from_pos):
                return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_pos = self._board.king_position(color)
        if king_pos is None:
            return False
        return self.is_attacked(king_pos, color.opposite)

    def is_attacked(self, pos: Position, by_color: Color) -> bool:
        """Is *pos* attacked by any piece of *by_color*?

        Pawns and kings are matched by their capture pattern directly so
        that castling generation is never re-entered from here.
        """
        if not is_valid_position(pos):
            return False
        board = self._board
        row, col = pos

        # Pawns attack diagonally forward only
        pawn_row = row - by_color.pawn_direction
        for dc in (-1, 1):
            if in_bounds(pawn_row, col + dc):
                p = board.get((pawn_row, col + dc))
                if p is not None and p.color == by_color and p.kind == PieceKind.PAWN:
                    return True

        # Kings attack adjacent squares only
        for sq in _KING_TARGETS[pos]:
            p = board.get(sq)
            if p is not None and p.color == by_color and p.kind == PieceKind.KING:
                return True

        for sq in _KNIGHT_TARGETS[pos]:
            p = board.get(sq)
            if p is not None and p.color == by_color and p.kind == PieceKind.KNIGHT:
                return True

        if self._ray_hits(_BISHOP_RAYS[pos], by_color, PieceKind.BISHOP):
            return True
        return self._ray_hits(_ROOK_RAYS[pos], by_color, PieceKind.ROOK)

    # -- Piece-specific generators (private) -------------------------------

    def _ray_hits(
        self,
        rays: tuple[tuple[Position, ...], ...],
        by_color: Color,
        slider: PieceKind,
    ) -> bool:
        board = self._board
        for ray in rays:
            for sq in ray:
                p = board.get(sq)
                if p is None:
                    continue
                if p.color == by_color and p.kind in (slider, PieceKind.QUEEN):
                    return True
                break
        return False

    def _gen_pawn(self, pos: Position, color: Color, moves: set[Position]) -> None:
        board = self._board
        row, col = pos
        step = color.pawn_direction
        start_row = 6 if color == Color.WHITE else 1

        one_row = row + step
        if not in_bounds(one_row, col):
            return

        if board.get((one_row, col)) is None:
            moves.add((one_row, col))
            two_row = row + 2 * step
            if row == start_row and board.get((two_row, col)) is None:
                moves.add((two_row, col))

        for dc in (-1, 1):
            cap = (one_row, col + dc)
            if not in_bounds(*cap):
                continue
            target = board.get(cap)
            if target is not None and target.color != color:
                moves.add(cap)
            elif cap == board.en_passant:
                moves.add(cap)

    def _gen_steps(
        self,
        pos: Position,
        color: Color,
        targets: tuple[Position, ...],
        moves: set[Position],
    ) -> None:
        board = self._board
        for to in targets:
            target = board.get(to)
            if target is None or target.color != color:
                moves.add(to)

    def _gen_sliding(
        self,
        pos: Position,
        color: Color,
        rays: tuple[tuple[Position, ...], ...],
        moves: set[Position],
    ) -> None:
        board = self._board
        for ray in rays:
            for to in ray:
                target = board.get(to)
                if target is None:
                    moves.add(to)
                    continue
                if target.color != color:
                    moves.add(to)
                break

    def _gen_castling(self, pos: Position, color: Color, moves: set[Position]) -> None:
        row = color.home_row
        if pos != (row, 4):
            return

        board = self._board
        opponent = color.opposite
        castling = board.castling

        if (
            castling.kingside(color)
            and self._has_home_rook(color, (row, 7))
            and board.get((row, 5)) is None
            and board.get((row, 6)) is None
            and not self.is_attacked((row, 4), opponent)
            and not self.is_attacked((row, 5), opponent)
        ):
            moves.add((row, 6))

        if (
            castling.queenside(color)
            and self._has_home_rook(color, (row, 0))
            and board.get((row, 1)) is None
            and board.get((row, 2)) is None
            and board.get((row, 3)) is None
            and not self.is_attacked((row, 4), opponent)
            and not self.is_attacked((row, 3), opponent)
        ):
            moves.add((row, 2))

    def _has_home_rook(self, color: Color, pos: Position) -> bool:
        rook = self._board.get(pos)
        return rook is not None and rook.color == color and rook.kind == PieceKind.ROOK
