"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Side(IntEnum):
    """Side to move / piece owner."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Side:
        return _OPPOSITE[self]

    @property
    def forward(self) -> int:
        """Rank direction pawns of this side advance in."""
        return 1 if self is Side.WHITE else -1

    def __str__(self) -> str:
        return self.name.lower()


_OPPOSITE: dict[Side, Side] = {Side.WHITE: Side.BLACK, Side.BLACK: Side.WHITE}


class PieceKind(IntEnum):
    """Piece kinds; the values are the persisted kind codes (0 means empty)."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def worth(self) -> int:
        """Material worth. The king is worth nothing: losing it ends the game."""
        return _WORTH[self]

    @property
    def slides(self) -> bool:
        return self in (PieceKind.BISHOP, PieceKind.ROOK, PieceKind.QUEEN)


_WORTH: dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 0,
}
