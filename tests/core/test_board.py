"""Tests for Board."""

import pytest

from chesscore.core.board import Board
from chesscore.core.changes import CastlingRights
from chesscore.core.enums import PieceKind, Side
from chesscore.core.piece import Piece
from chesscore.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    E2, E3,
    A8, B8, C8, D8, E8, F8, G8, H8,
    E4,
    Pos,
)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(PieceKind.KING, Side.WHITE)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(PieceKind.KING, Side.BLACK)

    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceKind.ROOK), (B1, PieceKind.KNIGHT), (C1, PieceKind.BISHOP),
            (D1, PieceKind.QUEEN), (E1, PieceKind.KING), (F1, PieceKind.BISHOP),
            (G1, PieceKind.KNIGHT), (H1, PieceKind.ROOK),
        ]
        for pos, kind in expected:
            assert board[pos] == Piece(kind, Side.WHITE), f"Mismatch at {pos}"

    def test_black_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceKind.ROOK), (B8, PieceKind.KNIGHT), (C8, PieceKind.BISHOP),
            (D8, PieceKind.QUEEN), (E8, PieceKind.KING), (F8, PieceKind.BISHOP),
            (G8, PieceKind.KNIGHT), (H8, PieceKind.ROOK),
        ]
        for pos, kind in expected:
            assert board[pos] == Piece(kind, Side.BLACK), f"Mismatch at {pos}"

    def test_pawn_ranks(self) -> None:
        board = Board.initial()
        rows = list(board.rows())
        assert all(p == Piece(PieceKind.PAWN, Side.WHITE) for p in rows[1])
        assert all(p == Piece(PieceKind.PAWN, Side.BLACK) for p in rows[6])

    def test_empty_middle(self) -> None:
        board = Board.initial()
        rows = list(board.rows())
        for rank in range(2, 6):
            assert rows[rank] == (None,) * 8

    def test_full_castling_rights(self) -> None:
        board = Board.initial()
        assert board.castling(Side.WHITE) == CastlingRights(True, True)
        assert board.castling(Side.BLACK) == CastlingRights(True, True)
        assert board.en_passant is None


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(PieceKind.PAWN, Side.WHITE)
        board[E4] = piece
        assert board[E4] == piece
        assert board.get(E4) == piece
        assert board.is_empty(E2)

    def test_empty_board_has_no_castling(self) -> None:
        board = Board()
        assert not board.castling(Side.WHITE).any
        assert not board.castling(Side.BLACK).any

    @pytest.mark.parametrize("pos", [Pos(-1, 0), Pos(0, 8), Pos(8, 3), Pos(2, -1)])
    def test_invalid_position_raises(self, pos: Pos) -> None:
        board = Board.initial()
        with pytest.raises(IndexError):
            board.get(pos)
        with pytest.raises(IndexError):
            board.set(pos, None)

    def test_rows_yields_eight_ranks(self) -> None:
        rows = list(Board.initial().rows())
        assert len(rows) == 8
        assert all(len(row) == 8 for row in rows)
        assert rows[0][4] == Piece(PieceKind.KING, Side.WHITE)

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board[E1] == Piece(PieceKind.KING, Side.WHITE)

    def test_copy_carries_aux_state(self) -> None:
        board = Board.initial()
        board.en_passant = E3
        board.set_castling(Side.BLACK, CastlingRights(queenside=False, kingside=True))
        copy = board.copy()
        assert copy.en_passant == E3
        assert copy.castling(Side.BLACK) == CastlingRights(False, True)

    def test_equality_includes_aux_state(self) -> None:
        board = Board.initial()
        other = Board.initial()
        other.en_passant = E3
        assert board != other
        other.en_passant = None
        other.set_castling(Side.WHITE, CastlingRights(False, False))
        assert board != other

    def test_king_position(self) -> None:
        board = Board.initial()
        assert board.king_position(Side.WHITE) == E1
        assert board.king_position(Side.BLACK) == E8
        assert Board().king_position(Side.WHITE) is None

    def test_clear(self) -> None:
        board = Board.initial()
        board.en_passant = E3
        board.clear()
        assert all(p is None for row in board.rows() for p in row)
        assert board.en_passant is None
        assert board == Board()

    def test_repr_not_empty(self) -> None:
        text = repr(Board.initial())
        assert "K" in text
        assert "a b c d e f g h" in text
