"""FEN-style text import/export of boards.

Only the first four FEN fields matter here: placement, side to move,
castling and en passant. The board carries no turn, so the side-to-move
field is validated and then dropped; clocks are ignored.
"""

from __future__ import annotations

from chesscore.core.board import Board
from chesscore.core.changes import CastlingRights
from chesscore.core.enums import Side
from chesscore.core.piece import Piece
from chesscore.core.types import Pos

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string (1-6 fields) into a :class:`Board`."""
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 1-6 fields): {fen!r}")

    placement = parts[0]
    side_part = parts[1] if len(parts) > 1 else "w"
    castling_part = parts[2] if len(parts) > 2 else "-"
    ep_part = parts[3] if len(parts) > 3 else "-"

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Pos(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part not in ("w", "b"):
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    flags = {"K": False, "Q": False, "k": False, "q": False}
    if castling_part != "-":
        for ch in castling_part:
            if ch not in flags or flags[ch]:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            flags[ch] = True
    board.set_castling(Side.WHITE, CastlingRights(queenside=flags["Q"], kingside=flags["K"]))
    board.set_castling(Side.BLACK, CastlingRights(queenside=flags["q"], kingside=flags["k"]))

    # 4. En passant
    if ep_part != "-":
        ep = Pos.parse(ep_part)
        if ep.rank not in (2, 5):
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")
        board.en_passant = ep

    return board


def board_to_fen(board: Board, side: Side = Side.WHITE) -> str:
    """Serialize *board* into the first four FEN fields."""
    ranks: list[str] = []
    for row in reversed(list(board.rows())):
        run = 0
        text = []
        for piece in row:
            if piece is None:
                run += 1
                continue
            if run:
                text.append(str(run))
                run = 0
            text.append(str(piece))
        if run:
            text.append(str(run))
        ranks.append("".join(text))

    white = board.castling(Side.WHITE)
    black = board.castling(Side.BLACK)
    castling = (
        ("K" if white.kingside else "")
        + ("Q" if white.queenside else "")
        + ("k" if black.kingside else "")
        + ("q" if black.queenside else "")
    ) or "-"
    ep = board.en_passant.name if board.en_passant is not None else "-"
    stm = "w" if side == Side.WHITE else "b"
    return f"{'/'.join(ranks)} {stm} {castling} {ep}"
