"""Move-shape table: unit step vectors per piece kind and side."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import PieceKind, Side
from chesscore.core.piece import Piece

Step = tuple[int, int]

KNIGHT_STEPS: tuple[Step, ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_STEPS: tuple[Step, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

# Two-file king steps; only ever legal as castling.
CASTLING_STEPS: tuple[Step, ...] = ((2, 0), (-2, 0))

BISHOP_DIRS: tuple[Step, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[Step, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[Step, ...] = BISHOP_DIRS + ROOK_DIRS


@dataclass(frozen=True, slots=True)
class MoveShape:
    """Step vectors of a piece and whether they repeat until blocked."""

    steps: tuple[Step, ...]
    repeat: bool


def _pawn_steps(side: Side) -> tuple[Step, ...]:
    d = side.forward
    return ((0, d), (-1, d), (1, d), (0, 2 * d))


_SHAPES: dict[tuple[PieceKind, Side], MoveShape] = {}
for _side in Side:
    _SHAPES[(PieceKind.PAWN, _side)] = MoveShape(_pawn_steps(_side), repeat=False)
    _SHAPES[(PieceKind.KNIGHT, _side)] = MoveShape(KNIGHT_STEPS, repeat=False)
    _SHAPES[(PieceKind.BISHOP, _side)] = MoveShape(BISHOP_DIRS, repeat=True)
    _SHAPES[(PieceKind.ROOK, _side)] = MoveShape(ROOK_DIRS, repeat=True)
    _SHAPES[(PieceKind.QUEEN, _side)] = MoveShape(QUEEN_DIRS, repeat=True)
    _SHAPES[(PieceKind.KING, _side)] = MoveShape(
        KING_STEPS + CASTLING_STEPS, repeat=False
    )
del _side


def shape_for(piece: Piece) -> MoveShape:
    """Look up the move shape of *piece*."""
    return _SHAPES[(piece.kind, piece.side)]
