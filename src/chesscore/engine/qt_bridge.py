"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesscore.core.board import Board
from chesscore.core.enums import Side
from chesscore.engine.minimax import MinimaxEngine
from chesscore.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    The wall-clock budget lives here, not in the search: a timer sets the
    deadline event, which the search observes through its cancel callback.
    Running out of time still yields the last completed depth; only an
    explicit :meth:`cancel` suppresses the result.
    """

    best_move_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_deadline_event", "_engine", "_limits")

    def __init__(
        self,
        *,
        max_depth: int = 4,
        time_limit_ms: int | None = 700,
        threads: int = 1,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine or MinimaxEngine()
        self._limits = SearchLimits(
            max_depth=max_depth, time_limit_ms=time_limit_ms, threads=threads
        )
        self._cancel_event = threading.Event()
        self._deadline_event = threading.Event()

    def _is_cancelled(self) -> bool:
        return self._cancel_event.is_set() or self._deadline_event.is_set()

    def _on_deadline(self) -> None:
        _LOGGER.debug("Search time budget of %s ms exhausted", self._limits.time_limit_ms)
        self._deadline_event.set()

    @pyqtSlot(object, object, int)
    def request_move(self, board_obj: object, side_obj: object, request_id: int) -> None:
        """Search for *side_obj*'s best move on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board) or not isinstance(side_obj, Side):
            self.search_error.emit(request_id, "Engine received an invalid request")
            return

        self._cancel_event.clear()
        self._deadline_event.clear()
        limits = self._limits
        timer: threading.Timer | None = None
        if limits.time_limit_ms is not None:
            timer = threading.Timer(max(limits.time_limit_ms, 1) / 1000.0, self._on_deadline)
            timer.daemon = True
            timer.start()

        try:
            result = self._engine.search(
                board_obj.copy(),
                side_obj,
                limits,
                is_cancelled=self._is_cancelled,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return
        finally:
            if timer is not None:
                timer.cancel()

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(request_id, result)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int, int)
    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = SearchLimits(
            max_depth=max_depth,
            time_limit_ms=time_limit_ms if time_limit_ms > 0 else None,
            threads=self._limits.threads,
            mobility=self._limits.mobility,
        )
