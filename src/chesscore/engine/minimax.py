"""Pure-Python minimax search with alpha-beta pruning and iterative deepening."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chesscore.core.board import Board
from chesscore.core.enums import PieceKind, Side
from chesscore.core.move_generator import MoveCursor, PieceCursor
from chesscore.core.rules import Rules
from chesscore.core.types import Pos
from chesscore.engine.search import (
    CancelCheck,
    IEngine,
    SearchLimits,
    SearchResult,
    never_cancelled,
)

_LOGGER = logging.getLogger(__name__)

KING_CAPTURE_SCORE = 10_000
_INF_SCORE = 1_000_000

_Best = tuple[int, Pos, Pos]


class _ListCursor:
    """Cursor over a fixed list of squares, shaped like :class:`PieceCursor`."""

    __slots__ = ("_positions", "_index")

    def __init__(self, positions: Sequence[Pos]) -> None:
        self._positions = positions
        self._index = 0

    def next(self, board: Board) -> Pos | None:
        del board
        if self._index >= len(self._positions):
            return None
        pos = self._positions[self._index]
        self._index += 1
        return pos


class MinimaxEngine(IEngine):
    """Depth-bounded minimax from the point of view of the side to move.

    The board passed in is mutated during search and always restored before
    a call returns, cancelled or not. One instance must not be shared
    between threads.
    """

    __slots__ = ("_cancel_check", "_nodes", "_mobility", "_prune")

    def __init__(self) -> None:
        self._cancel_check: CancelCheck = never_cancelled
        self._nodes = 0
        self._mobility = True
        self._prune = True

    def search(
        self,
        board: Board,
        side: Side,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult | None:
        """Iterative deepening up to ``limits.max_depth``.

        A depth interrupted by cancellation is discarded; the result of the
        last fully completed depth is returned (``None`` if there is none).
        """
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")
        cancelled = is_cancelled or never_cancelled

        # Deferred: parallel imports this module.
        from chesscore.engine.parallel import parallel_minimax

        best: SearchResult | None = None
        for depth in range(1, limits.max_depth + 1):
            if cancelled():
                break

            if limits.threads > 1:
                result = parallel_minimax(
                    board,
                    depth,
                    side,
                    cancelled,
                    threads=limits.threads,
                    mobility=limits.mobility,
                )
            else:
                result = self.minimax(
                    board, depth, side, cancelled, mobility=limits.mobility
                )

            if cancelled():
                _LOGGER.debug(
                    "Search cancelled at depth %d, keeping depth %d", depth, depth - 1
                )
                break
            if result is None:
                break

            best = result
            _LOGGER.debug(
                "Depth %d done: %s%s score=%d nodes=%d",
                depth,
                result.from_pos,
                result.to_pos,
                result.score,
                result.nodes,
            )
        return best

    def minimax(
        self,
        board: Board,
        depth: int,
        side: Side,
        is_cancelled: CancelCheck | None = None,
        *,
        prune: bool = True,
        mobility: bool = True,
        roots: Sequence[Pos] | None = None,
    ) -> SearchResult | None:
        """Best move for *side* at a fixed *depth*.

        Returns ``None`` when cancelled or when *side* has no move. ``roots``
        restricts the top ply to the pieces on those squares.
        ``prune=False`` runs plain minimax with the same tie-breaking.
        """
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")
        self._cancel_check = is_cancelled or never_cancelled
        self._nodes = 0
        self._mobility = mobility
        self._prune = prune

        best = self._search_node(
            board, depth, side, side, -_INF_SCORE, _INF_SCORE, roots
        )
        if best is None or self._cancel_check():
            return None
        score, from_pos, to_pos = best
        return SearchResult(score, from_pos, to_pos, depth, self._nodes)

    @property
    def nodes(self) -> int:
        return self._nodes

    def _search_node(
        self,
        board: Board,
        depth: int,
        original: Side,
        player: Side,
        alpha: int,
        beta: int,
        roots: Sequence[Pos] | None = None,
    ) -> _Best | None:
        if self._cancel_check():
            return None
        self._nodes += 1

        maximizing = original == player
        best: _Best | None = None
        pieces = PieceCursor(player) if roots is None else _ListCursor(roots)

        while (from_pos := pieces.next(board)) is not None:
            if self._cancel_check():
                return None

            moves = MoveCursor(board, from_pos)
            while (to_pos := moves.next(board)) is not None:
                target = board.get(to_pos)
                if target is not None and target.kind == PieceKind.KING:
                    # Sooner king captures (more depth left) weigh more.
                    if target.side == original:
                        score = -KING_CAPTURE_SCORE - depth
                    else:
                        score = KING_CAPTURE_SCORE + depth
                else:
                    change = board.move_(from_pos, to_pos)
                    if depth == 1:
                        score = Rules.evaluate(board, original, self._mobility)
                    else:
                        child = self._search_node(
                            board, depth - 1, original, player.opposite, alpha, beta
                        )
                        if child is not None:
                            score = child[0]
                        elif self._cancel_check():
                            board.undo(change)
                            return None
                        else:
                            score = Rules.evaluate(board, original, self._mobility)
                    board.undo(change)

                if best is None or (score > best[0] if maximizing else score < best[0]):
                    best = (score, from_pos, to_pos)

                if self._prune:
                    if maximizing:
                        if score > alpha:
                            alpha = score
                    elif score < beta:
                        beta = score
                    if alpha >= beta:
                        return best
        return best
