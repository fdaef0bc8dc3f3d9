"""Parallel top-level split of the minimax search.

The side to move's pieces (those with at least one destination) are split
into contiguous groups. Each group is searched on its own board clone by a
worker thread; only the cancellation callable is shared. Results meet in a
lock-guarded best-so-far value.

The search is pure Python, so under CPython's GIL the workers interleave
rather than run at once: ``threads > 1`` returns the same move as the
sequential search but is not faster.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

from chesscore.core.board import Board
from chesscore.core.enums import Side
from chesscore.core.move_generator import all_destinations
from chesscore.core.types import Pos
from chesscore.engine.minimax import MinimaxEngine
from chesscore.engine.search import CancelCheck, SearchResult, never_cancelled

_LOGGER = logging.getLogger(__name__)

DEFAULT_THREADS = 4


class _BestSoFar:
    """Shared reduction target: a strictly better score wins.

    Equal scores go to the lower group index, which is the group whose
    moves a sequential search would have examined first.
    """

    __slots__ = ("_lock", "_group", "_result", "_nodes")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._group = -1
        self._result: SearchResult | None = None
        self._nodes = 0

    def offer(self, group: int, result: SearchResult) -> None:
        with self._lock:
            self._nodes += result.nodes
            current = self._result
            if (
                current is None
                or result.score > current.score
                or (result.score == current.score and group < self._group)
            ):
                self._result = result
                self._group = group

    def result(self) -> SearchResult | None:
        with self._lock:
            if self._result is None:
                return None
            return replace(self._result, nodes=self._nodes)


def partition(positions: Sequence[Pos], groups: int) -> list[list[Pos]]:
    """Split *positions* into at most *groups* contiguous, non-empty chunks."""
    if groups < 1:
        raise ValueError("Need at least one group")
    count = min(groups, len(positions))
    if count == 0:
        return []
    size, extra = divmod(len(positions), count)
    chunks: list[list[Pos]] = []
    start = 0
    for i in range(count):
        end = start + size + (1 if i < extra else 0)
        chunks.append(list(positions[start:end]))
        start = end
    return chunks


def parallel_minimax(
    board: Board,
    depth: int,
    side: Side,
    is_cancelled: CancelCheck | None = None,
    *,
    threads: int = DEFAULT_THREADS,
    mobility: bool = True,
    prune: bool = True,
) -> SearchResult | None:
    """Fixed-depth search of *board* split over *threads* workers.

    *board* itself is only read; every worker searches a private copy.
    """
    if depth <= 0:
        raise ValueError("Search depth must be >= 1")
    cancelled = is_cancelled or never_cancelled

    groups = partition(list(all_destinations(board, side)), threads)
    if not groups:
        return None

    best = _BestSoFar()

    def run(index: int, roots: list[Pos], clone: Board) -> None:
        engine = MinimaxEngine()
        result = engine.minimax(
            clone,
            depth,
            side,
            cancelled,
            prune=prune,
            mobility=mobility,
            roots=roots,
        )
        if result is not None:
            best.offer(index, result)

    _LOGGER.debug(
        "Depth %d split into %d groups: %s",
        depth,
        len(groups),
        [len(g) for g in groups],
    )
    with ThreadPoolExecutor(
        max_workers=len(groups), thread_name_prefix="chesscore-search"
    ) as pool:
        futures = [
            pool.submit(run, index, roots, board.copy())
            for index, roots in enumerate(groups)
        ]
        for future in futures:
            future.result()

    if cancelled():
        return None
    return best.result()
