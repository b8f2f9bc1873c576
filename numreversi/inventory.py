from __future__ import annotations

from typing import Dict, List, Mapping, Optional
import random

from .types import Color, COLORS, COLOR_MAP, PIECE_VALUES
from .piece import Piece
from .errors import InventoryExhausted


def _initial_count(value: int) -> int:
    # 1,2 -> 5; 3,4 -> 4; 5,6 -> 3; 7,8 -> 2; 9,10 -> 1
    return 5 - (value - 1) // 2


class PieceInventory:
    """Remaining pieces per color and value. Operations return new inventories."""

    def __init__(self, counts: Optional[Mapping[Color, Mapping[int, int]]] = None) -> None:
        if counts is None:
            counts = {c: {v: _initial_count(v) for v in PIECE_VALUES} for c in COLORS}
        # Both colors and all values always present
        self._counts: Dict[Color, Dict[int, int]] = {
            c: {v: int(counts.get(c, {}).get(v, 0)) for v in PIECE_VALUES} for c in COLORS
        }

    @classmethod
    def initial(cls) -> "PieceInventory":
        return cls()

    @property
    def counts(self) -> Dict[Color, Dict[int, int]]:
        # Snapshot; mutating it leaves the inventory untouched
        return {c: dict(d) for c, d in self._counts.items()}

    def copy(self) -> "PieceInventory":
        return PieceInventory(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PieceInventory):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        return f"PieceInventory({self._counts!r})"

    def remaining(self, color: Color, value: int) -> int:
        if color not in self._counts:
            return 0
        return self._counts[color].get(value, 0)

    def remaining_total(self, color: Color) -> int:
        return sum(self._counts.get(color, {}).values())

    def available_values(self, color: Color) -> List[int]:
        return [v for v in PIECE_VALUES if self.remaining(color, v) > 0]

    def is_exhausted(self, color: Color) -> bool:
        return self.remaining_total(color) == 0

    def remove(self, piece: Piece) -> "PieceInventory":
        if self.remaining(piece.color, piece.value) <= 0:
            raise InventoryExhausted(f"No {piece} left to take")
        inv = self.copy()
        inv._counts[piece.color][piece.value] -= 1
        return inv

    def add(self, piece: Piece) -> "PieceInventory":
        inv = self.copy()
        inv._counts[piece.color][piece.value] = inv.remaining(piece.color, piece.value) + 1
        return inv

    def select_random(self, color: Color, rng: random.Random) -> Piece:
        # Uniform over values still in stock, not weighted by count
        values = self.available_values(color)
        if not values:
            raise InventoryExhausted(f"No pieces left for {COLOR_MAP.get(color, color)}")
        return Piece(color, values[rng.randrange(len(values))])
