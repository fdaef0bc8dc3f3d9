"""Tests for the parallel top-level split."""

from __future__ import annotations

import pytest

from chesscore.core.board import Board
from chesscore.core.enums import Side
from chesscore.core.move_generator import destinations
from chesscore.core.notation import board_from_fen
from chesscore.core.types import A1, A2, A3, B1, C1, Pos
from chesscore.engine.minimax import MinimaxEngine
from chesscore.engine.parallel import _BestSoFar, parallel_minimax, partition
from chesscore.engine.search import SearchLimits, SearchResult

POSITIONS = [
    ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -", Side.WHITE, 2, True),
    ("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq -", Side.WHITE, 2, False),
    ("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R b KQkq -", Side.BLACK, 2, False),
    ("6k1/5ppp/8/8/8/8/8/R5K1 w - -", Side.WHITE, 3, False),
]


class TestPartition:
    def test_contiguous_chunks(self) -> None:
        squares = [A1, B1, C1, A2, A3]
        assert partition(squares, 2) == [[A1, B1, C1], [A2, A3]]

    def test_more_groups_than_items(self) -> None:
        assert partition([A1, B1], 4) == [[A1], [B1]]

    def test_empty(self) -> None:
        assert partition([], 3) == []

    def test_order_is_preserved(self) -> None:
        squares = [Pos.from_index(i) for i in range(16)]
        chunks = partition(squares, 3)
        assert [len(c) for c in chunks] == [6, 5, 5]
        assert [p for c in chunks for p in c] == squares

    def test_rejects_zero_groups(self) -> None:
        with pytest.raises(ValueError):
            partition([A1], 0)


class TestBestSoFar:
    def test_better_score_wins(self) -> None:
        best = _BestSoFar()
        best.offer(0, SearchResult(5, A1, A2, 2, 10))
        best.offer(1, SearchResult(7, B1, C1, 2, 20))
        result = best.result()
        assert result is not None
        assert (result.score, result.from_pos) == (7, B1)
        assert result.nodes == 30

    def test_tie_goes_to_lower_group(self) -> None:
        best = _BestSoFar()
        best.offer(2, SearchResult(5, C1, A3, 2, 1))
        best.offer(0, SearchResult(5, A1, A2, 2, 1))
        best.offer(1, SearchResult(5, B1, A3, 2, 1))
        result = best.result()
        assert result is not None
        assert result.from_pos == A1

    def test_empty(self) -> None:
        assert _BestSoFar().result() is None


class TestParallelMinimax:
    @pytest.mark.parametrize("threads", [2, 3, 4])
    @pytest.mark.parametrize(("fen", "side", "depth", "mobility"), POSITIONS)
    def test_matches_sequential(
        self, fen: str, side: Side, depth: int, mobility: bool, threads: int
    ) -> None:
        board = board_from_fen(fen)
        before = board.copy()
        sequential = MinimaxEngine().minimax(board, depth, side, mobility=mobility)
        parallel = parallel_minimax(
            board, depth, side, threads=threads, mobility=mobility
        )
        assert sequential is not None
        assert parallel is not None
        assert (parallel.score, parallel.from_pos, parallel.to_pos) == (
            sequential.score,
            sequential.from_pos,
            sequential.to_pos,
        )
        assert parallel.depth == depth
        assert board == before

    def test_single_thread_matches_sequential(self) -> None:
        board = Board.initial()
        sequential = MinimaxEngine().minimax(board, 2, Side.WHITE)
        parallel = parallel_minimax(board, 2, Side.WHITE, threads=1)
        assert parallel is not None
        assert sequential is not None
        assert (parallel.score, parallel.from_pos, parallel.to_pos) == (
            sequential.score,
            sequential.from_pos,
            sequential.to_pos,
        )

    def test_cancelled_returns_none(self) -> None:
        board = Board.initial()
        assert parallel_minimax(board, 2, Side.WHITE, lambda: True, threads=2) is None
        assert board == Board.initial()

    def test_no_movable_pieces(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/8 w - -")
        assert parallel_minimax(board, 2, Side.WHITE, threads=2) is None

    def test_rejects_non_positive_depth(self) -> None:
        with pytest.raises(ValueError):
            parallel_minimax(Board.initial(), 0, Side.WHITE)

    def test_search_with_threads(self) -> None:
        limits = SearchLimits(max_depth=2, threads=2)
        result = MinimaxEngine().search(Board.initial(), Side.WHITE, limits)
        expected = MinimaxEngine().minimax(Board.initial(), 2, Side.WHITE)
        assert result is not None
        assert expected is not None
        assert (result.score, result.from_pos, result.to_pos) == (
            expected.score,
            expected.from_pos,
            expected.to_pos,
        )

    def test_opening_move_is_a_real_move(self) -> None:
        board = Board.initial()
        result = parallel_minimax(board, 1, Side.WHITE, threads=4)
        assert result is not None
        assert result.to_pos in destinations(board, result.from_pos)
