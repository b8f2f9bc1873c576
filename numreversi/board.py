from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .types import BOARD_SIZE, Color, Position, Score
from .piece import Piece


@dataclass(frozen=True)
class CaptureGroup:
    anchor: Position  # same-color piece closing the bracket
    run: Tuple[Position, ...]  # opponent squares, nearest to the placement first


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Occupied:
    piece: Piece


@dataclass(frozen=True)
class Placeable:
    groups: Tuple[CaptureGroup, ...]


Square = Union[Empty, Occupied, Placeable]

EMPTY = Empty()

Cells = Tuple[Tuple[Square, ...], ...]


@dataclass(frozen=True)
class Board:
    # Indexed cells[x][y]
    cells: Cells

    @classmethod
    def blank(cls) -> "Board":
        return cls(tuple(tuple(EMPTY for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE)))

    @classmethod
    def initial(cls) -> "Board":
        return cls.from_pieces(
            black=[(3, 3, 1), (4, 4, 1)],
            white=[(3, 4, 1), (4, 3, 1)],
        )

    @classmethod
    def from_pieces(
        cls,
        black: Iterable[Tuple[int, int, int]] = (),
        white: Iterable[Tuple[int, int, int]] = (),
    ) -> "Board":
        rows: List[List[Square]] = [[EMPTY for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        for (x, y, v) in black:
            rows[x][y] = Occupied(Piece("B", v))
        for (x, y, v) in white:
            rows[x][y] = Occupied(Piece("W", v))
        return cls.from_squares(rows)

    @classmethod
    def from_squares(cls, squares: Sequence[Sequence[Square]]) -> "Board":
        assert len(squares) == BOARD_SIZE, "Board must have 8 columns"
        assert all(len(col) == BOARD_SIZE for col in squares), "Board columns must have 8 squares"
        return cls(tuple(tuple(col) for col in squares))

    def square_at(self, pos: Position) -> Square:
        return self.cells[pos.x][pos.y]

    def piece_at(self, pos: Position) -> Optional[Piece]:
        sq = self.cells[pos.x][pos.y]
        return sq.piece if isinstance(sq, Occupied) else None

    def is_occupied(self, pos: Position) -> bool:
        return isinstance(self.cells[pos.x][pos.y], Occupied)

    def place(self, pos: Position, piece: Piece) -> "Board":
        # No legality check; callers test placeability first
        return self.with_square(pos, Occupied(piece))

    def with_square(self, pos: Position, square: Square) -> "Board":
        col = list(self.cells[pos.x])
        col[pos.y] = square
        cells = list(self.cells)
        cells[pos.x] = tuple(col)
        return Board(tuple(cells))

    def squares(self) -> List[List[Square]]:
        return [list(col) for col in self.cells]

    def positions(self) -> Iterable[Position]:
        for x in range(BOARD_SIZE):
            for y in range(BOARD_SIZE):
                yield Position(x, y)

    def occupied_count(self) -> int:
        return sum(1 for col in self.cells for sq in col if isinstance(sq, Occupied))

    def _sum_for(self, color: Color) -> int:
        s = 0
        for col in self.cells:
            for sq in col:
                if isinstance(sq, Occupied) and sq.piece.color == color:
                    s += sq.piece.value
        return s

    def score(self) -> Score:
        return Score(black=self._sum_for("B"), white=self._sum_for("W"))

    def has_any_placeable(self) -> bool:
        return any(isinstance(sq, Placeable) for col in self.cells for sq in col)

    def placeable_positions(self) -> List[Position]:
        # Row-major over (x, y)
        return [p for p in self.positions() if isinstance(self.square_at(p), Placeable)]
