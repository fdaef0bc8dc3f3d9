"""Core domain layer: board, move generation, rules and persistence.

Quick start::

    from chesscore.core import Board, Pos, Side, destinations

    board = Board.initial()
    for dest in destinations(board, Pos.parse("e2")):
        change = board.move_(Pos.parse("e2"), dest)
        ...
        board.undo(change)
"""

from chesscore.core.board import Board
from chesscore.core.changes import (
    CastlingEdit,
    CastlingRights,
    Change,
    EnPassantEdit,
    SquareEdit,
)
from chesscore.core.enums import PieceKind, Side
from chesscore.core.move_generator import (
    MoveCursor,
    MoveFilter,
    PieceCursor,
    all_destinations,
    destinations,
    find_check,
)
from chesscore.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chesscore.core.piece import Piece
from chesscore.core.rules import Rules
from chesscore.core.serialize import (
    CorruptedDataError,
    deserialize_board,
    read_board,
    serialize_board,
    write_board,
)
from chesscore.core.shapes import MoveShape, shape_for
from chesscore.core.types import Pos

__all__ = [
    # Enums
    "PieceKind",
    "Side",
    # Types
    "Pos",
    "Piece",
    "CastlingRights",
    "MoveShape",
    "shape_for",
    # Board + change records
    "Board",
    "Change",
    "SquareEdit",
    "EnPassantEdit",
    "CastlingEdit",
    # Generation / rules
    "MoveCursor",
    "MoveFilter",
    "PieceCursor",
    "all_destinations",
    "destinations",
    "find_check",
    "Rules",
    # Notation / persistence
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "CorruptedDataError",
    "deserialize_board",
    "read_board",
    "serialize_board",
    "write_board",
]
