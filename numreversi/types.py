from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple, TypeAlias

Color: TypeAlias = Literal["B", "W"]
PlayerKind: TypeAlias = Literal["H", "COM"]
ComPolicy: TypeAlias = Literal["first", "random", "greedy"]

# Color legend
COLOR_MAP: Dict[str, str] = {
    "B": "Black",
    "W": "White",
}

COLORS: Tuple[Color, Color] = ("B", "W")

BOARD_SIZE: int = 8
PIECE_VALUES: List[int] = list(range(1, 11))

# Unit (dx, dy) offsets in scan order: down, down-left, down-right, left, right, up, up-left, up-right
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (-1, 1), (1, 1), (-1, 0),
    (1, 0), (0, -1), (-1, -1), (1, -1),
)


def opposite(color: Color) -> Color:
    return "W" if color == "B" else "B"


@dataclass(frozen=True, order=True)
class Position:
    x: int
    y: int

    def __post_init__(self) -> None:
        if not in_bounds(self.x, self.y):
            raise ValueError(f"Position off the board: ({self.x},{self.y})")

    def next_position(self, dx: int, dy: int) -> Tuple[int, int]:
        # Signed result; callers bounds-check before building a Position
        return (self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


@dataclass(frozen=True)
class Score:
    black: int
    white: int

    def for_color(self, color: Color) -> int:
        return self.black if color == "B" else self.white

    def __str__(self) -> str:
        return f"B={self.black} W={self.white}"
