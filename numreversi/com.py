from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple
import random

from .types import Color, ComPolicy, Position, opposite
from .piece import Piece
from .board import Board, Placeable
from .search import resolve_captures


@dataclass
class CandidateEval:
    x: int
    y: int
    bracketed: int  # opponent pieces inside the brackets
    flipped: int  # pieces that would actually change color
    score_delta: int  # own minus opponent score change
    result_score: int  # own minus opponent score after the move


def _margin(board: Board, color: Color) -> int:
    s = board.score()
    return s.for_color(color) - s.for_color(opposite(color))


def evaluate_position(board: Board, pos: Position, piece: Piece) -> Optional[CandidateEval]:
    sq = board.square_at(pos)
    if not isinstance(sq, Placeable):
        return None
    before = _margin(board, piece.color)
    placed = board.place(pos, piece)
    after_board, flipped, _kept = resolve_captures(placed, piece, sq.groups)
    after = _margin(after_board, piece.color)
    return CandidateEval(
        x=pos.x,
        y=pos.y,
        bracketed=sum(len(g.run) for g in sq.groups),
        flipped=len(flipped),
        score_delta=after - before,
        result_score=after,
    )


def evaluate_positions(board: Board, piece: Piece) -> List[CandidateEval]:
    cands: List[CandidateEval] = []
    for pos in board.placeable_positions():
        ce = evaluate_position(board, pos, piece)
        assert ce is not None
        cands.append(ce)
    return cands


def choose_position(
    board: Board,
    piece: Piece,
    policy: ComPolicy,
    rng: random.Random,
) -> Tuple[Position, List[CandidateEval], str]:
    """Pick a Placeable square for ``piece`` under ``policy``.

    - first: first Placeable square in row-major (x, then y) order
    - random: uniform among Placeable squares
    - greedy: best immediate score margin; ties keep row-major order

    Returns (position, top candidates, reason line).
    """
    cands = evaluate_positions(board, piece)
    assert cands, "No placeable position to choose from"
    top = sorted(cands, key=lambda ce: -ce.result_score)[:3]
    if policy == "first":
        best = cands[0]
    elif policy == "random":
        best = cands[rng.randrange(len(cands))]
    elif policy == "greedy":
        best = max(cands, key=lambda ce: ce.result_score)
    else:
        raise ValueError(f"Unknown COM policy: {policy}")
    reason = (
        f"COM_PICK: {policy} -> {piece} @ ({best.x},{best.y}); "
        f"flips={best.flipped}/{best.bracketed} delta={best.score_delta:+d}"
    )
    return Position(best.x, best.y), top, reason
