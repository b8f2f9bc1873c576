from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from .types import Color, COLOR_MAP, PIECE_VALUES, opposite
from .errors import InvalidPiece


@dataclass(frozen=True)
class Piece:
    color: Color
    value: int  # 1..10

    def __post_init__(self) -> None:
        if self.color not in COLOR_MAP:
            raise InvalidPiece(f"Unknown color: {self.color!r}")
        if not isinstance(self.value, int) or not (PIECE_VALUES[0] <= self.value <= PIECE_VALUES[-1]):
            raise InvalidPiece(f"Invalid value: {self.value!r}")

    def reverse(self) -> "Piece":
        return Piece(opposite(self.color), self.value)

    def __str__(self) -> str:
        return f"{self.color}{self.value}"


def next_value(value: int) -> int:
    return PIECE_VALUES[0] if value >= PIECE_VALUES[-1] else value + 1


def prev_value(value: int) -> int:
    return PIECE_VALUES[-1] if value <= PIECE_VALUES[0] else value - 1


@dataclass(frozen=True)
class UsedLedger:
    """Distinct (color, value) pairs placed and not yet returned by a pass.

    A set, not a multiset: placing B3 twice leaves a single B3 entry, so a pass
    only ever hands back one unit of it.
    """

    pieces: FrozenSet[Piece] = field(default_factory=frozenset)

    def add(self, piece: Piece) -> "UsedLedger":
        return UsedLedger(self.pieces | {piece})

    def remove(self, piece: Piece) -> "UsedLedger":
        return UsedLedger(self.pieces - {piece})

    def __contains__(self, piece: object) -> bool:
        return piece in self.pieces

    def __len__(self) -> int:
        return len(self.pieces)

    def for_color(self, color: Color) -> List[Piece]:
        return sorted((p for p in self.pieces if p.color == color), key=lambda p: p.value)

    def highest_for(self, color: Color) -> Optional[Piece]:
        mine = self.for_color(color)
        return mine[-1] if mine else None
