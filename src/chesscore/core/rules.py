"""High-level chess rules: check, checkmate and static evaluation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import Side
from chesscore.core.move_generator import MoveCursor, PieceCursor, find_check
from chesscore.core.types import Pos

if TYPE_CHECKING:
    from chesscore.core.board import Board

# Material is scaled so that a single extra legal destination never
# outweighs a pawn.
MATERIAL_SCALE = 10
MOBILITY_WEIGHT = 1


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def check(board: Board, side: Side) -> Pos | None:
        """Square of an opposing piece attacking *side*'s king, or ``None``."""
        return find_check(board, side)

    @staticmethod
    def is_check(board: Board, side: Side) -> bool:
        return find_check(board, side) is not None

    @staticmethod
    def is_checkmate(board: Board, side: Side) -> bool:
        """True iff every move *side* has leaves it in check.

        A side with no moves at all is mated. Each candidate is trial-applied
        and rolled back before the next one is generated, so this is
        quadratic in the number of moves.
        """
        pieces = PieceCursor(side)
        while (from_pos := pieces.next(board)) is not None:
            moves = MoveCursor(board, from_pos)
            while (to_pos := moves.next(board)) is not None:
                change = board.move_(from_pos, to_pos)
                escaped = find_check(board, side) is None
                board.undo(change)
                if escaped:
                    return False
        return True

    @staticmethod
    def material(board: Board, side: Side) -> int:
        total = 0
        for row in board.rows():
            for piece in row:
                if piece is not None and piece.side == side:
                    total += piece.worth
        return total

    @staticmethod
    def mobility(board: Board, side: Side) -> int:
        """Number of generated destinations over all of *side*'s pieces."""
        count = 0
        pieces = PieceCursor(side)
        while (from_pos := pieces.next(board)) is not None:
            moves = MoveCursor(board, from_pos)
            while moves.next(board) is not None:
                count += 1
        return count

    @staticmethod
    def score(board: Board, side: Side, mobility: bool = True) -> int:
        """Material (scaled) plus, optionally, one point per destination."""
        value = MATERIAL_SCALE * Rules.material(board, side)
        if mobility:
            value += MOBILITY_WEIGHT * Rules.mobility(board, side)
        return value

    @staticmethod
    def evaluate(board: Board, side: Side, mobility: bool = True) -> int:
        """*side*'s score minus its opponent's."""
        return Rules.score(board, side, mobility) - Rules.score(
            board, side.opposite, mobility
        )
