"""Tests for the compact binary board layout."""

import io

import pytest

from chesscore.core.board import Board
from chesscore.core.notation import board_from_fen
from chesscore.core.serialize import (
    HAS_EN_PASSANT,
    SQUARE_BYTES,
    WHITE_CASTLING_KINGSIDE,
    CorruptedDataError,
    deserialize_board,
    read_board,
    serialize_board,
    write_board,
)
from chesscore.core.types import E2, E3, E4

START_BYTES = bytes(
    [0b0001_1110, 0x95, 0x7B, 0xD7, 0x59]
    + [0x33] * 4
    + [0x00] * 16
    + [0x22] * 4
    + [0x84, 0x6A, 0xC6, 0x48]
)


class TestSerialize:
    def test_starting_board_bytes(self) -> None:
        assert serialize_board(Board.initial()) == START_BYTES

    def test_empty_board(self) -> None:
        assert serialize_board(Board()) == bytes(1 + SQUARE_BYTES)

    def test_en_passant_adds_a_byte(self) -> None:
        board = Board.initial()
        board.move_(E2, E4)
        data = serialize_board(board)
        assert len(data) == 2 + SQUARE_BYTES
        assert data[0] & HAS_EN_PASSANT
        assert data[1] == E3.square_index

    @pytest.mark.parametrize(
        "fen",
        [
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -",
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w Kq -",
            "4k3/8/8/3pP3/8/8/8/4K3 w - d6",
            "8/8/8/8/8/8/8/8 w - -",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        board = board_from_fen(fen)
        assert deserialize_board(serialize_board(board)) == board


class TestCorruptedData:
    def test_empty_input(self) -> None:
        with pytest.raises(CorruptedDataError):
            deserialize_board(b"")

    def test_truncated(self) -> None:
        with pytest.raises(CorruptedDataError, match="expected 33 bytes"):
            deserialize_board(START_BYTES[:-1])

    def test_trailing_bytes(self) -> None:
        with pytest.raises(CorruptedDataError):
            deserialize_board(START_BYTES + b"\x00")

    def test_unknown_flag_bits(self) -> None:
        with pytest.raises(CorruptedDataError, match="unknown flag"):
            deserialize_board(bytes([0x20]) + START_BYTES[1:])

    def test_en_passant_out_of_range(self) -> None:
        data = bytes([HAS_EN_PASSANT, 64]) + START_BYTES[1:]
        with pytest.raises(CorruptedDataError, match="out of range"):
            deserialize_board(data)

    def test_missing_en_passant_byte(self) -> None:
        with pytest.raises(CorruptedDataError):
            deserialize_board(bytes([HAS_EN_PASSANT]))

    @pytest.mark.parametrize("nibble", [0xE, 0xF])
    def test_unknown_piece_code(self, nibble: int) -> None:
        data = bytes([0]) + bytes([nibble << 4]) + bytes(SQUARE_BYTES - 1)
        with pytest.raises(CorruptedDataError, match="unknown piece code"):
            deserialize_board(data)

    def test_empty_square_with_side_bit(self) -> None:
        data = bytes([0]) + bytes([0x01]) + bytes(SQUARE_BYTES - 1)
        with pytest.raises(CorruptedDataError, match="side bit"):
            deserialize_board(data)

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            deserialize_board(b"\xff")


class TestStreams:
    def test_consecutive_boards(self) -> None:
        first = Board.initial()
        second = Board.initial()
        second.move_(E2, E4)
        stream = io.BytesIO()
        write_board(stream, first)
        write_board(stream, second)

        stream.seek(0)
        assert read_board(stream) == first
        assert read_board(stream) == second
        assert stream.read() == b""

    def test_read_from_empty_stream(self) -> None:
        with pytest.raises(CorruptedDataError):
            read_board(io.BytesIO())

    def test_read_truncated_stream(self) -> None:
        stream = io.BytesIO(START_BYTES[:10])
        with pytest.raises(CorruptedDataError):
            read_board(stream)

    def test_flags_only_castling(self) -> None:
        board = board_from_fen("8/8/8/8/8/8/8/8 w K -")
        assert serialize_board(board)[0] == WHITE_CASTLING_KINGSIDE
