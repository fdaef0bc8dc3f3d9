"""Board - piece placement on an 8x8 grid plus en passant and castling state."""

from __future__ import annotations

from collections.abc import Iterator

from chesscore.core.changes import (
    CastlingEdit,
    CastlingRights,
    Change,
    EnPassantEdit,
    SquareEdit,
)
from chesscore.core.enums import PieceKind, Side
from chesscore.core.piece import Piece
from chesscore.core.types import BOARD_WIDTH, Pos

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

HOME_RANK: dict[Side, int] = {Side.WHITE: 0, Side.BLACK: 7}
PAWN_START_RANK: dict[Side, int] = {Side.WHITE: 1, Side.BLACK: 6}
PROMOTION_RANK: dict[Side, int] = {Side.WHITE: 7, Side.BLACK: 0}
KING_HOME_FILE = 4
QUEENSIDE_ROOK_FILE = 0
KINGSIDE_ROOK_FILE = 7
NO_CASTLING = CastlingRights(queenside=False, kingside=False)


def king_home(side: Side) -> Pos:
    return Pos(KING_HOME_FILE, HOME_RANK[side])


def rook_home(side: Side, *, kingside: bool) -> Pos:
    return Pos(KINGSIDE_ROOK_FILE if kingside else QUEENSIDE_ROOK_FILE, HOME_RANK[side])


class Board:
    """Mutable 8x8 board with en-passant target and per-side castling rights.

    :meth:`move_` is the only mutating primitive used during play; it returns
    a :class:`Change` that :meth:`undo` replays in reverse.
    """

    __slots__ = ("_squares", "en_passant", "_castling")

    def __init__(self) -> None:
        # [rank][file]
        self._squares: list[list[Piece | None]] = [
            [None] * BOARD_WIDTH for _ in range(BOARD_WIDTH)
        ]
        self.en_passant: Pos | None = None
        self._castling: list[CastlingRights] = [NO_CASTLING, NO_CASTLING]

    # -- Element access -----------------------------------------------------

    def get(self, pos: Pos) -> Piece | None:
        if not pos.is_valid():
            raise IndexError(f"Position off the board: {pos!r}")
        return self._squares[pos.rank][pos.file]

    def set(self, pos: Pos, piece: Piece | None) -> None:
        if not pos.is_valid():
            raise IndexError(f"Position off the board: {pos!r}")
        self._squares[pos.rank][pos.file] = piece

    __getitem__ = get
    __setitem__ = set

    def is_empty(self, pos: Pos) -> bool:
        return self.get(pos) is None

    def rows(self) -> Iterator[tuple[Piece | None, ...]]:
        """The 8 ranks in board order, rank 1 first."""
        for row in self._squares:
            yield tuple(row)

    def castling(self, side: Side) -> CastlingRights:
        return self._castling[side]

    def set_castling(self, side: Side, rights: CastlingRights) -> None:
        self._castling[side] = rights

    def king_position(self, side: Side) -> Pos | None:
        for rank, row in enumerate(self._squares):
            for file, piece in enumerate(row):
                if piece is not None and piece.kind == PieceKind.KING and piece.side == side:
                    return Pos(file, rank)
        return None

    # -- Mutation -----------------------------------------------------------

    def move_(self, from_pos: Pos, to_pos: Pos) -> Change:
        """Move whatever is on *from_pos* to *to_pos*, with all side effects.

        No legality check is made. Every edit is recorded before it is
        applied so that :meth:`undo` restores the exact prior state.
        """
        piece = self.get(from_pos)
        target = self.get(to_pos)
        change = Change(self)

        change.record(SquareEdit(from_pos, piece))
        change.record(SquareEdit(to_pos, target))
        self._squares[from_pos.rank][from_pos.file] = None

        placed = piece
        next_en_passant: Pos | None = None

        if piece is not None and piece.kind == PieceKind.PAWN:
            if to_pos.rank == PROMOTION_RANK[piece.side]:
                placed = Piece(PieceKind.QUEEN, piece.side)
            if to_pos.file == from_pos.file and abs(to_pos.rank - from_pos.rank) == 2:
                next_en_passant = Pos(from_pos.file, (from_pos.rank + to_pos.rank) // 2)
            elif (
                to_pos == self.en_passant
                and to_pos.file != from_pos.file
                and target is None
            ):
                passed = Pos(to_pos.file, from_pos.rank)
                change.record(SquareEdit(passed, self._squares[passed.rank][passed.file]))
                self._squares[passed.rank][passed.file] = None

        elif (
            piece is not None
            and piece.kind == PieceKind.KING
            and to_pos.rank == from_pos.rank
            and abs(to_pos.file - from_pos.file) == 2
        ):
            self._move_castling_rook(change, from_pos, to_pos, piece.side)

        self._squares[to_pos.rank][to_pos.file] = placed

        if next_en_passant != self.en_passant:
            change.record(EnPassantEdit(self.en_passant))
            self.en_passant = next_en_passant

        if piece is not None:
            self._revoke_castling(change, piece, from_pos, target, to_pos)
        return change

    def undo(self, change: Change) -> None:
        """Replay *change* in reverse. Each record may be undone once."""
        if change.board is not self:
            raise ValueError("Change record belongs to a different board")
        if change.undone:
            raise ValueError("Change record was already undone")

        for edit in reversed(change.edits):
            if isinstance(edit, SquareEdit):
                self._squares[edit.pos.rank][edit.pos.file] = edit.piece
            elif isinstance(edit, EnPassantEdit):
                self.en_passant = edit.pos
            else:
                self._castling[edit.side] = edit.rights
        change.undone = True

    def _move_castling_rook(
        self, change: Change, from_pos: Pos, to_pos: Pos, side: Side
    ) -> None:
        kingside = to_pos.file > from_pos.file
        corner = Pos(KINGSIDE_ROOK_FILE if kingside else QUEENSIDE_ROOK_FILE, from_pos.rank)
        rook = self._squares[corner.rank][corner.file]
        if rook is None or rook.kind != PieceKind.ROOK or rook.side != side:
            return
        beside = from_pos.offset(1 if kingside else -1, 0)
        change.record(SquareEdit(corner, rook))
        change.record(SquareEdit(beside, self._squares[beside.rank][beside.file]))
        self._squares[corner.rank][corner.file] = None
        self._squares[beside.rank][beside.file] = rook

    def _revoke_castling(
        self,
        change: Change,
        piece: Piece,
        from_pos: Pos,
        captured: Piece | None,
        to_pos: Pos,
    ) -> None:
        side = piece.side
        rights = self._castling[side]
        if piece.kind == PieceKind.KING and from_pos == king_home(side):
            rights = rights.revoke(queenside=True, kingside=True)
        elif piece.kind == PieceKind.ROOK:
            rights = rights.revoke(
                queenside=from_pos == rook_home(side, kingside=False),
                kingside=from_pos == rook_home(side, kingside=True),
            )
        if rights != self._castling[side]:
            change.record(CastlingEdit(side, self._castling[side]))
            self._castling[side] = rights

        if captured is None or captured.kind != PieceKind.ROOK:
            return
        other = captured.side
        other_rights = self._castling[other].revoke(
            queenside=to_pos == rook_home(other, kingside=False),
            kingside=to_pos == rook_home(other, kingside=True),
        )
        if other_rights != self._castling[other]:
            change.record(CastlingEdit(other, self._castling[other]))
            self._castling[other] = other_rights

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = [row.copy() for row in self._squares]
        b.en_passant = self.en_passant
        b._castling = self._castling.copy()
        return b

    def clear(self) -> None:
        self._squares = [[None] * BOARD_WIDTH for _ in range(BOARD_WIDTH)]
        self.en_passant = None
        self._castling = [NO_CASTLING, NO_CASTLING]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, kind in enumerate(_BACK_RANK):
            b._squares[0][f] = Piece(kind, Side.WHITE)
            b._squares[1][f] = Piece(PieceKind.PAWN, Side.WHITE)
            b._squares[6][f] = Piece(PieceKind.PAWN, Side.BLACK)
            b._squares[7][f] = Piece(kind, Side.BLACK)
        b._castling = [CastlingRights(), CastlingRights()]
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._squares == other._squares
            and self.en_passant == other.en_passant
            and self._castling == other._castling
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(BOARD_WIDTH - 1, -1, -1):
            row = []
            for file in range(BOARD_WIDTH):
                p = self._squares[rank][file]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
