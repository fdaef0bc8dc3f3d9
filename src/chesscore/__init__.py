"""Chess rules and minimax search core.

Quick start::

    from chesscore.core import Board, Side
    from chesscore.engine import MinimaxEngine, SearchLimits

    board = Board.initial()
    result = MinimaxEngine().search(board, Side.WHITE, SearchLimits(max_depth=3))
    if result is not None:
        board.move_(result.from_pos, result.to_pos)
"""
