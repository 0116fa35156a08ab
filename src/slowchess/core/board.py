"""Board - the game aggregate: placement, side to move, rights, history."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from slowchess.core.castling import CastlingRights
from slowchess.core.enums import Color, GameState, PieceKind
from slowchess.core.move_generator import MoveGenerator
from slowchess.core.notation import is_en_passant_capture, move_to_notation
from slowchess.core.piece import Piece
from slowchess.core.rules import Rules
from slowchess.core.types import Position, is_valid_position, square_name

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

# Rook home square -> (color, is_kingside)
_ROOK_CORNERS: dict[Position, tuple[Color, bool]] = {
    (7, 7): (Color.WHITE, True),
    (7, 0): (Color.WHITE, False),
    (0, 7): (Color.BLACK, True),
    (0, 0): (Color.BLACK, False),
}


class Board:
    """Mutable 8x8 board plus everything needed to judge the next move.

    ``squares`` is the only source of truth for piece placement.  After
    construction the board changes exclusively through :meth:`make_move`.
    """

    __slots__ = (
        "squares",
        "turn",
        "state",
        "move_history",
        "castling",
        "en_passant",
    )

    def __init__(self) -> None:
        self.squares: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        self.turn = Color.WHITE
        self.state = GameState.PLAYING
        self.move_history: list[str] = []
        self.castling = CastlingRights()
        self.en_passant: Position | None = None

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, kind in enumerate(_BACK_RANK):
            b.squares[0][col] = Piece(kind, Color.BLACK)
            b.squares[1][col] = Piece(PieceKind.PAWN, Color.BLACK)
            b.squares[6][col] = Piece(PieceKind.PAWN, Color.WHITE)
            b.squares[7][col] = Piece(kind, Color.WHITE)
        return b

    @classmethod
    def empty(cls, turn: Color = Color.WHITE) -> Board:
        """Board with no pieces and no castling rights, for custom setups."""
        b = cls()
        b.turn = turn
        b.castling = CastlingRights(False, False, False, False)
        return b

    # -- Element access -----------------------------------------------------

    def get(self, pos: Position) -> Piece | None:
        """Piece on *pos*, or ``None`` for empty and off-board squares."""
        if not is_valid_position(pos):
            return None
        row, col = pos
        return self.squares[row][col]

    def __getitem__(self, pos: Position) -> Piece | None:
        return self.get(pos)

    def place(self, pos: Position, piece: Piece | None) -> None:
        """Put *piece* on *pos* while building a position.

        Not part of play: games advance through :meth:`make_move`.
        """
        if not is_valid_position(pos):
            raise ValueError(f"Off-board position: {pos!r}")
        row, col = pos
        self.squares[row][col] = piece

    def relocate(self, from_pos: Position, to_pos: Position) -> None:
        """Raw move: *to_pos* takes the piece, *from_pos* becomes empty."""
        fr, fc = from_pos
        tr, tc = to_pos
        self.squares[tr][tc] = self.squares[fr][fc]
        self.squares[fr][fc] = None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Position, Piece]]:
        """Yield ``(position, piece)`` for every occupied square, row-major."""
        for row in range(8):
            for col in range(8):
                piece = self.squares[row][col]
                if piece is not None:
                    yield (row, col), piece

    def pieces(self, color: Color) -> list[Piece]:
        return [p for _, p in self.occupied() if p.color == color]

    def king_position(self, color: Color) -> Position | None:
        for pos, piece in self.occupied():
            if piece.kind == PieceKind.KING and piece.color == color:
                return pos
        return None

    def piece_moves(self, pos: Position) -> set[Position]:
        return MoveGenerator(self).piece_moves(pos)

    def legal_moves(self, pos: Position) -> set[Position]:
        return MoveGenerator(self).legal_moves(pos)

    def is_attacked(self, pos: Position, by_color: Color) -> bool:
        return MoveGenerator(self).is_attacked(pos, by_color)

    def in_check(self, color: Color) -> bool:
        return MoveGenerator(self).is_in_check(color)

    # -- Move execution -----------------------------------------------------

    def make_move(self, from_pos: Position, to_pos: Position) -> bool:
        """Apply a legal move for the side to move.

        Returns ``False`` and leaves the board untouched when the move is
        illegal for any reason (off-board input, empty or foreign source,
        destination not legal, game already over).
        """
        reason = self._rejection_reason(from_pos, to_pos)
        if reason is not None:
            _LOGGER.debug("Rejected move %r -> %r: %s", from_pos, to_pos, reason)
            return False

        piece = self.get(from_pos)
        assert piece is not None
        notation = move_to_notation(self, from_pos, to_pos)

        # En passant: the captured pawn sits beside the mover, not on to_pos
        if is_en_passant_capture(self, from_pos, to_pos):
            self.squares[from_pos[0]][to_pos[1]] = None

        # En passant target for the opponent
        self.en_passant = None
        if piece.kind == PieceKind.PAWN and abs(from_pos[0] - to_pos[0]) == 2:
            self.en_passant = ((from_pos[0] + to_pos[0]) // 2, from_pos[1])

        # Slide the rook for castling
        if piece.kind == PieceKind.KING and abs(from_pos[1] - to_pos[1]) == 2:
            row = from_pos[0]
            if to_pos[1] == 6:
                self.relocate((row, 7), (row, 5))
            else:
                self.relocate((row, 0), (row, 3))

        self._update_castling(piece, from_pos, to_pos)

        self.relocate(from_pos, to_pos)

        # Auto-promotion, queen only
        if piece.kind == PieceKind.PAWN and to_pos[0] in (0, 7):
            self.squares[to_pos[0]][to_pos[1]] = Piece(PieceKind.QUEEN, piece.color)

        self.move_history.append(notation)
        self.turn = self.turn.opposite
        self.state = Rules.evaluate(self)
        _LOGGER.debug("Played %s, %s to move (%s)", notation, self.turn, self.state)
        return True

    def _rejection_reason(self, from_pos: Position, to_pos: Position) -> str | None:
        if not is_valid_position(from_pos) or not is_valid_position(to_pos):
            return "off-board coordinates"
        if self.state.is_terminal:
            return f"game is over ({self.state})"
        piece = self.get(from_pos)
        if piece is None:
            return f"no piece on {square_name(from_pos)}"
        if piece.color != self.turn:
            return f"{square_name(from_pos)} holds a {piece.color} piece"
        if to_pos not in self.legal_moves(from_pos):
            return f"{square_name(to_pos)} is not a legal destination"
        return None

    def _update_castling(
        self, piece: Piece, from_pos: Position, to_pos: Position
    ) -> None:
        if piece.kind == PieceKind.KING:
            self.castling.revoke(piece.color, kingside=True, queenside=True)

        for sq in (from_pos, to_pos):
            corner = _ROOK_CORNERS.get(sq)
            if corner is not None:
                color, kingside = corner
                self.castling.revoke(color, kingside=kingside, queenside=not kingside)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b.squares = [row.copy() for row in self.squares]
        b.turn = self.turn
        b.state = self.state
        b.move_history = self.move_history.copy()
        b.castling = self.castling.copy()
        b.en_passant = self.en_passant
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.squares == other.squares
            and self.turn == other.turn
            and self.state == other.state
            and self.move_history == other.move_history
            and self.castling == other.castling
            and self.en_passant == other.en_passant
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [str(p) if p else "." for p in self.squares[row]]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
