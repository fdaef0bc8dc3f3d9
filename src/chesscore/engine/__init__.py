"""Search engine package: minimax search and parallel split.

The Qt worker lives in ``chesscore.engine.qt_bridge`` and is not re-exported.
"""

from chesscore.engine.minimax import KING_CAPTURE_SCORE, MinimaxEngine
from chesscore.engine.parallel import parallel_minimax
from chesscore.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

__all__ = [
    "CancelCheck",
    "IEngine",
    "KING_CAPTURE_SCORE",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "parallel_minimax",
]
