"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import PieceKind, Side

# Black's FEN letter per kind; White uses the uppercase form.
_LETTERS: dict[PieceKind, str] = dict(zip(PieceKind, "pnbrqk"))
_KINDS: dict[str, PieceKind] = {letter: kind for kind, letter in _LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (kind, side) pair, copied freely."""

    kind: PieceKind
    side: Side

    def __str__(self) -> str:
        letter = _LETTERS[self.kind]
        return letter.upper() if self.side == Side.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Parse a FEN letter; the case selects the side ('N' is a white knight)."""
        kind = _KINDS.get(char.lower())
        if kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(kind, Side.WHITE if char.isupper() else Side.BLACK)

    @property
    def worth(self) -> int:
        return self.kind.worth
