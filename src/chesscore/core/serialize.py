"""Compact binary board layout.

Layout::

    flags            1 byte   bit 0: en passant present
                              bits 1-4: black Q, black K, white Q, white K
    en passant       1 byte   file + rank * 8, only when bit 0 is set
    squares         32 bytes  two squares per byte, high nibble first;
                              nibble = 3-bit kind code << 1 | side bit (1 = white)

Ranks are stored in board order (rank 1 first), files a-h within a rank.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, NoReturn

from chesscore.core.board import Board
from chesscore.core.changes import CastlingRights
from chesscore.core.enums import PieceKind, Side
from chesscore.core.piece import Piece
from chesscore.core.types import BOARD_WIDTH, Pos

_LOGGER = logging.getLogger(__name__)

HAS_EN_PASSANT = 1
BLACK_CASTLING_QUEENSIDE = 1 << 1
BLACK_CASTLING_KINGSIDE = 1 << 2
WHITE_CASTLING_QUEENSIDE = 1 << 3
WHITE_CASTLING_KINGSIDE = 1 << 4
_KNOWN_FLAGS = (
    HAS_EN_PASSANT
    | BLACK_CASTLING_QUEENSIDE
    | BLACK_CASTLING_KINGSIDE
    | WHITE_CASTLING_QUEENSIDE
    | WHITE_CASTLING_KINGSIDE
)

SQUARE_BYTES = BOARD_WIDTH * BOARD_WIDTH // 2


class CorruptedDataError(ValueError):
    """Raised when persisted board bytes cannot be decoded."""


def serialize_board(board: Board) -> bytes:
    """Encode *board* into the persisted byte layout."""
    flags = 0
    if board.en_passant is not None:
        flags |= HAS_EN_PASSANT
    black = board.castling(Side.BLACK)
    white = board.castling(Side.WHITE)
    if black.queenside:
        flags |= BLACK_CASTLING_QUEENSIDE
    if black.kingside:
        flags |= BLACK_CASTLING_KINGSIDE
    if white.queenside:
        flags |= WHITE_CASTLING_QUEENSIDE
    if white.kingside:
        flags |= WHITE_CASTLING_KINGSIDE

    out = bytearray([flags])
    if board.en_passant is not None:
        out.append(board.en_passant.square_index)
    for row in board.rows():
        for i in range(0, BOARD_WIDTH, 2):
            out.append(_encode_piece(row[i]) << 4 | _encode_piece(row[i + 1]))
    return bytes(out)


def deserialize_board(data: bytes) -> Board:
    """Decode a board, raising :class:`CorruptedDataError` on malformed input."""
    if not data:
        _reject("empty input")
    flags = data[0]
    if flags & ~_KNOWN_FLAGS:
        _reject(f"unknown flag bits 0x{flags:02x}")

    offset = 1
    en_passant: Pos | None = None
    if flags & HAS_EN_PASSANT:
        if len(data) < 2:
            _reject("missing en-passant byte")
        if data[1] >= BOARD_WIDTH * BOARD_WIDTH:
            _reject(f"en-passant index {data[1]} out of range")
        en_passant = Pos.from_index(data[1])
        offset = 2

    if len(data) != offset + SQUARE_BYTES:
        _reject(f"expected {offset + SQUARE_BYTES} bytes, got {len(data)}")

    board = Board()
    for i, byte in enumerate(data[offset:]):
        rank, file = divmod(i * 2, BOARD_WIDTH)
        board[Pos(file, rank)] = _decode_piece(byte >> 4)
        board[Pos(file + 1, rank)] = _decode_piece(byte & 0x0F)

    board.en_passant = en_passant
    board.set_castling(
        Side.BLACK,
        CastlingRights(
            queenside=bool(flags & BLACK_CASTLING_QUEENSIDE),
            kingside=bool(flags & BLACK_CASTLING_KINGSIDE),
        ),
    )
    board.set_castling(
        Side.WHITE,
        CastlingRights(
            queenside=bool(flags & WHITE_CASTLING_QUEENSIDE),
            kingside=bool(flags & WHITE_CASTLING_KINGSIDE),
        ),
    )
    return board


def write_board(stream: BinaryIO, board: Board) -> None:
    stream.write(serialize_board(board))


def read_board(stream: BinaryIO) -> Board:
    """Read one board from *stream*, consuming exactly its encoded length."""
    head = stream.read(1)
    if len(head) != 1:
        _reject("empty input")
    extra = 1 if head[0] & HAS_EN_PASSANT else 0
    body = stream.read(extra + SQUARE_BYTES)
    return deserialize_board(head + body)


def _encode_piece(piece: Piece | None) -> int:
    if piece is None:
        return 0
    return int(piece.kind) << 1 | (1 if piece.side == Side.WHITE else 0)


def _decode_piece(nibble: int) -> Piece | None:
    code = nibble >> 1
    white = nibble & 1
    if code == 0:
        if white:
            _reject(f"empty square with side bit set (nibble 0x{nibble:x})")
        return None
    try:
        kind = PieceKind(code)
    except ValueError:
        _reject(f"unknown piece code {code}")
    return Piece(kind, Side.WHITE if white else Side.BLACK)


def _reject(reason: str) -> NoReturn:
    _LOGGER.debug("Rejecting persisted board: %s", reason)
    raise CorruptedDataError(f"Corrupted board data: {reason}")
