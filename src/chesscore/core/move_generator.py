"""Pseudo-legal move generation, castling legality and check detection.

Generation uses explicit cursors instead of Python generators: the board is
handed to :meth:`MoveCursor.next` on every call, so callers may mutate and
restore it between calls (search does exactly that) and castling legality
may trial-move the king on the very board being enumerated.
"""

from __future__ import annotations

from enum import Enum

from chesscore.core.board import (
    PAWN_START_RANK,
    Board,
    king_home,
    rook_home,
)
from chesscore.core.enums import PieceKind, Side
from chesscore.core.piece import Piece
from chesscore.core.shapes import shape_for
from chesscore.core.types import BOARD_WIDTH, Pos


class MoveFilter(Enum):
    """Which candidates a cursor may yield."""

    ALL = "all"
    # Used while looking for attackers: castling never captures, and its
    # legality test would otherwise recurse back into check detection.
    NO_CASTLING = "no_castling"


class MoveCursor:
    """Walks the destinations of the piece on *origin*.

    The cursor keeps only its own position in the step table; the piece is
    captured once at construction.
    """

    __slots__ = ("origin", "piece", "_steps", "_repeat", "_step_idx", "_distance", "_filter")

    def __init__(
        self,
        board: Board,
        origin: Pos,
        move_filter: MoveFilter = MoveFilter.ALL,
    ) -> None:
        self.origin = origin
        self.piece = board.get(origin) if origin.is_valid() else None
        self._filter = move_filter
        self._step_idx = 0
        self._distance = 0
        if self.piece is None:
            self._steps: tuple[tuple[int, int], ...] = ()
            self._repeat = False
        else:
            shape = shape_for(self.piece)
            self._steps = shape.steps
            self._repeat = shape.repeat

    def next(self, board: Board) -> Pos | None:
        """Return the next destination, or ``None`` once exhausted."""
        piece = self.piece
        if piece is None:
            return None
        origin = self.origin
        steps = self._steps

        while self._step_idx < len(steps):
            df, dr = steps[self._step_idx]
            distance = self._distance + 1
            dest = origin.offset(df * distance, dr * distance)

            if not dest.is_valid():
                self._advance()
                continue
            target = board.get(dest)
            if target is not None and target.side == piece.side:
                self._advance()
                continue

            if self._repeat:
                if target is None:
                    self._distance = distance
                else:
                    self._advance()
                return dest

            self._advance()
            if piece.kind == PieceKind.PAWN:
                if _pawn_step_allowed(board, piece, origin, dest, df, dr, target):
                    return dest
            elif piece.kind == PieceKind.KING and abs(df) == 2:
                if self._filter is MoveFilter.ALL and _castling_allowed(
                    board, piece.side, origin, df
                ):
                    return dest
            else:
                return dest
        return None

    def _advance(self) -> None:
        self._step_idx += 1
        self._distance = 0


class PieceCursor:
    """Walks the squares holding *side*'s pieces, in board order."""

    __slots__ = ("side", "_index")

    def __init__(self, side: Side) -> None:
        self.side = side
        self._index = 0

    def next(self, board: Board) -> Pos | None:
        while self._index < BOARD_WIDTH * BOARD_WIDTH:
            pos = Pos.from_index(self._index)
            self._index += 1
            piece = board.get(pos)
            if piece is not None and piece.side == self.side:
                return pos
        return None


# -- Special-case legality ---------------------------------------------------


def _pawn_step_allowed(
    board: Board,
    piece: Piece,
    origin: Pos,
    dest: Pos,
    df: int,
    dr: int,
    target: Piece | None,
) -> bool:
    if df != 0:
        if target is not None:
            return True
        if dest != board.en_passant:
            return False
        passed = board.get(Pos(dest.file, origin.rank))
        return (
            passed is not None
            and passed.kind == PieceKind.PAWN
            and passed.side != piece.side
        )
    if target is not None:
        return False
    if abs(dr) == 2:
        if origin.rank != PAWN_START_RANK[piece.side]:
            return False
        return board.get(origin.offset(0, dr // 2)) is None
    return True


def _castling_allowed(board: Board, side: Side, origin: Pos, df: int) -> bool:
    if origin != king_home(side):
        return False
    kingside = df > 0
    rights = board.castling(side)
    if not (rights.kingside if kingside else rights.queenside):
        return False

    corner = rook_home(side, kingside=kingside)
    rook = board.get(corner)
    if rook is None or rook.kind != PieceKind.ROOK or rook.side != side:
        return False
    step = 1 if kingside else -1
    file = origin.file + step
    while file != corner.file:
        if board.get(Pos(file, origin.rank)) is not None:
            return False
        file += step

    if find_check(board, side) is not None:
        return False

    # Walk the king one file at a time and look for attacks on each square.
    changes = []
    safe = True
    current = origin
    for _ in range(2):
        nxt = current.offset(step, 0)
        changes.append(board.move_(current, nxt))
        current = nxt
        if find_check(board, side) is not None:
            safe = False
            break
    for change in reversed(changes):
        board.undo(change)
    return safe


# -- Public helpers ----------------------------------------------------------


def find_check(board: Board, side: Side) -> Pos | None:
    """Position of an opposing piece that can land on *side*'s king, if any."""
    pieces = PieceCursor(side.opposite)
    while (from_pos := pieces.next(board)) is not None:
        moves = MoveCursor(board, from_pos, MoveFilter.NO_CASTLING)
        while (to_pos := moves.next(board)) is not None:
            target = board.get(to_pos)
            if target is not None and target.kind == PieceKind.KING and target.side == side:
                return from_pos
    return None


def destinations(
    board: Board,
    pos: Pos,
    move_filter: MoveFilter = MoveFilter.ALL,
) -> list[Pos]:
    """All destinations of the piece on *pos* (empty for an empty square)."""
    result: list[Pos] = []
    cursor = MoveCursor(board, pos, move_filter)
    while (dest := cursor.next(board)) is not None:
        result.append(dest)
    return result


def all_destinations(board: Board, side: Side) -> dict[Pos, list[Pos]]:
    """Destinations for every piece of *side* that can move, in board order."""
    result: dict[Pos, list[Pos]] = {}
    pieces = PieceCursor(side)
    while (from_pos := pieces.next(board)) is not None:
        moves = destinations(board, from_pos)
        if moves:
            result[from_pos] = moves
    return result
