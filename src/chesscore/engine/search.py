"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesscore.core.board import Board
    from chesscore.core.enums import Side
    from chesscore.core.types import Pos

CancelCheck = Callable[[], bool]


def never_cancelled() -> bool:
    return False


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``time_limit_ms`` is not read by the search itself; drivers such as
    :class:`~chesscore.engine.qt_bridge.EngineWorker` turn it into a
    cancellation signal.
    """

    max_depth: int = 4
    time_limit_ms: int | None = None
    threads: int = 1
    mobility: bool = True


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Best move found for the side to move, with its score."""

    score: int
    from_pos: Pos
    to_pos: Pos
    depth: int = 0
    nodes: int = 0


class IEngine(Protocol):
    """Protocol for engines driven by the worker bridge."""

    def search(
        self,
        board: Board,
        side: Side,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult | None: ...
