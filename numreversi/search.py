from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .types import BOARD_SIZE, DIRECTIONS, Color, Position, in_bounds
from .piece import Piece
from .board import Board, CaptureGroup, Occupied, Placeable, EMPTY


# --- Pure helpers for bracket search and capture (no game state, no I/O) ---

def search_direction(board: Board, start: Position, turn: Color, direction: Tuple[int, int]) -> Optional[CaptureGroup]:
    """Walk from ``start`` along ``direction`` looking for a closed bracket.

    Returns the opponent run plus the same-color anchor, or None when the walk
    leaves the board, hits a non-occupied square, or meets an own piece before
    any opponent piece.
    """
    dx, dy = direction
    run: List[Position] = []
    pos = start
    while True:
        nx, ny = pos.next_position(dx, dy)
        if not in_bounds(nx, ny):
            return None
        pos = Position(nx, ny)
        sq = board.square_at(pos)
        if not isinstance(sq, Occupied):
            return None
        if sq.piece.color == turn:
            if not run:
                return None
            return CaptureGroup(anchor=pos, run=tuple(run))
        run.append(pos)


def capture_groups(board: Board, pos: Position, turn: Color) -> List[CaptureGroup]:
    if board.is_occupied(pos):
        return []
    groups: List[CaptureGroup] = []
    for d in DIRECTIONS:
        g = search_direction(board, pos, turn, d)
        if g is not None:
            groups.append(g)
    return groups


def scan(board: Board, turn: Color) -> Board:
    """Retag every non-occupied square as Placeable or Empty for ``turn``.

    Only occupancy is consulted, never the previous tag, so the scan is
    idempotent.
    """
    cols = board.squares()
    for x in range(BOARD_SIZE):
        for y in range(BOARD_SIZE):
            if isinstance(cols[x][y], Occupied):
                continue
            groups = capture_groups(board, Position(x, y), turn)
            cols[x][y] = Placeable(tuple(groups)) if groups else EMPTY
    return Board.from_squares(cols)


def resolve_captures(
    board: Board,
    piece: Piece,
    groups: Sequence[CaptureGroup],
) -> Tuple[Board, List[Position], List[Position]]:
    """Apply the numeric-dominance flip to each bracket.

    A run piece of value r flips iff r < piece.value + anchor value. Anchors
    never flip. Values are read from ``board`` before any flip is written.
    Returns (board, flipped, kept).
    """
    cols = board.squares()
    flipped: List[Position] = []
    kept: List[Position] = []
    for g in groups:
        anchor = board.square_at(g.anchor)
        if not isinstance(anchor, Occupied):
            continue
        threshold = piece.value + anchor.piece.value
        for p in g.run:
            sq = board.square_at(p)
            if not isinstance(sq, Occupied):
                continue
            if sq.piece.value < threshold:
                cols[p.x][p.y] = Occupied(sq.piece.reverse())
                flipped.append(p)
            else:
                kept.append(p)
    return Board.from_squares(cols), flipped, kept


def reverse(board: Board, piece: Piece, groups: Sequence[CaptureGroup]) -> Board:
    new_board, _flipped, _kept = resolve_captures(board, piece, groups)
    return new_board
