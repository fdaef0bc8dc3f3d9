"""Change record: the reversible edit log produced by one move application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from chesscore.core.enums import Side
from chesscore.core.piece import Piece
from chesscore.core.types import Pos

if TYPE_CHECKING:
    from chesscore.core.board import Board

# Castling (king + rook squares, en passant, rights) is the largest move.
CHANGE_CAPACITY = 6


@dataclass(frozen=True, slots=True)
class CastlingRights:
    """Castling availability for one side."""

    queenside: bool = True
    kingside: bool = True

    def revoke(self, *, queenside: bool = False, kingside: bool = False) -> CastlingRights:
        return CastlingRights(
            queenside=self.queenside and not queenside,
            kingside=self.kingside and not kingside,
        )

    @property
    def any(self) -> bool:
        return self.queenside or self.kingside


@dataclass(frozen=True, slots=True)
class SquareEdit:
    """``pos`` held ``piece`` before the move."""

    pos: Pos
    piece: Piece | None


@dataclass(frozen=True, slots=True)
class EnPassantEdit:
    """The en-passant target was ``pos`` before the move."""

    pos: Pos | None


@dataclass(frozen=True, slots=True)
class CastlingEdit:
    """``side``'s castling rights were ``rights`` before the move."""

    side: Side
    rights: CastlingRights


Edit: TypeAlias = SquareEdit | EnPassantEdit | CastlingEdit


class Change:
    """Ordered edits recorded by :meth:`Board.move_`, consumed once by undo."""

    __slots__ = ("board", "edits", "undone")

    def __init__(self, board: Board) -> None:
        self.board = board
        self.edits: list[Edit] = []
        self.undone = False

    def record(self, edit: Edit) -> None:
        assert len(self.edits) < CHANGE_CAPACITY, "change record overflow"
        self.edits.append(edit)

    def __len__(self) -> int:
        return len(self.edits)

    def __iter__(self):
        return iter(self.edits)

    def __repr__(self) -> str:
        return f"Change({self.edits!r}, undone={self.undone})"
