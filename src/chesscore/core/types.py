"""Board coordinate type and helpers.

Board layout (rank-major, White at the bottom):
    a1=(0, 0), b1=(1, 0), ..., h1=(7, 0)
    a2=(0, 1), ...
    a8=(0, 7), ..., h8=(7, 7)

A :class:`Pos` may hold any pair of integers; :meth:`Pos.is_valid` says
whether it lies on the board. Nothing dereferences an invalid one.
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_WIDTH = 8


class Pos(NamedTuple):
    """A (file, rank) coordinate."""

    file: int
    rank: int

    def is_valid(self) -> bool:
        return 0 <= self.file < BOARD_WIDTH and 0 <= self.rank < BOARD_WIDTH

    def offset(self, df: int, dr: int) -> Pos:
        return Pos(self.file + df, self.rank + dr)

    @property
    def square_index(self) -> int:
        """Square index ``file + rank * 8`` (a1=0 .. h8=63)."""
        return self.file + self.rank * BOARD_WIDTH

    @classmethod
    def from_index(cls, index: int) -> Pos:
        return cls(index % BOARD_WIDTH, index // BOARD_WIDTH)

    @property
    def name(self) -> str:
        """Human-readable name, e.g. (4, 3) -> 'e4'."""
        return chr(ord("a") + self.file) + str(self.rank + 1)

    @classmethod
    def parse(cls, name: str) -> Pos:
        """Parse a square name, e.g. 'e4' -> Pos(4, 3)."""
        if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(ord(name[0]) - ord("a"), int(name[1]) - 1)

    def __str__(self) -> str:
        return self.name


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Pos(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Pos(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Pos(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Pos(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Pos(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Pos(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Pos(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Pos(f, 7) for f in range(8))
