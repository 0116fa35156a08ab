"""Castling availability."""

from __future__ import annotations

from dataclasses import dataclass

from slowchess.core.enums import Color


@dataclass(slots=True)
class CastlingRights:
    """Four independent castling flags.

    Rights only ever go from True to False; :meth:`revoke` is the sole way
    to change them.
    """

    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    def kingside(self, color: Color) -> bool:
        return self.white_kingside if color == Color.WHITE else self.black_kingside

    def queenside(self, color: Color) -> bool:
        return self.white_queenside if color == Color.WHITE else self.black_queenside

    def revoke(
        self, color: Color, *, kingside: bool = False, queenside: bool = False
    ) -> None:
        """Clear the selected rights for *color*."""
        if color == Color.WHITE:
            if kingside:
                self.white_kingside = False
            if queenside:
                self.white_queenside = False
        else:
            if kingside:
                self.black_kingside = False
            if queenside:
                self.black_queenside = False

    def copy(self) -> CastlingRights:
        return CastlingRights(
            self.white_kingside,
            self.white_queenside,
            self.black_kingside,
            self.black_queenside,
        )
