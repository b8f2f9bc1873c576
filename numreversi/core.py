from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple, cast
import random

from .types import (
    BOARD_SIZE,
    COLOR_MAP,
    COLORS,
    PIECE_VALUES,
    Color,
    ComPolicy,
    PlayerKind,
    Position,
    Score,
    opposite,
)
from .piece import Piece, UsedLedger, next_value, prev_value
from .inventory import PieceInventory
from .board import Board, Occupied, Placeable, Square, EMPTY
from .search import scan, resolve_captures
from .com import CandidateEval, choose_position
from .errors import MissingCompensation


@dataclass(frozen=True)
class GameConfig:
    black: PlayerKind = "H"
    white: PlayerKind = "H"
    com_policy: ComPolicy = "first"
    com_seed: int = 1337

    def kind_of(self, color: Color) -> PlayerKind:
        return self.black if color == "B" else self.white


@dataclass
class ExplainInfo:
    topK: List[CandidateEval]
    pick_reason: str


@dataclass(frozen=True)
class GameState:
    cfg: GameConfig
    board: Board
    turn: Color
    inventory: PieceInventory
    used: UsedLedger
    selected: Piece
    logs: Tuple[str, ...] = ()
    passes: Tuple[Color, ...] = ()
    move_count: int = 0
    explain: Optional[ExplainInfo] = None


def _append_log(state: GameState, *msgs: str) -> GameState:
    return replace(state, logs=state.logs + tuple(msgs))


def new_game(cfg: GameConfig) -> GameState:
    turn: Color = "B"
    return GameState(
        cfg=cfg,
        board=scan(Board.initial(), turn),
        turn=turn,
        inventory=PieceInventory.initial(),
        used=UsedLedger(),
        selected=Piece(turn, 1),
    )


# --- Move orchestration (pure) ---

def check_pass(
    turn: Color,
    board: Board,
    used: UsedLedger,
    inventory: PieceInventory,
) -> Tuple[Color, UsedLedger, PieceInventory, Board]:
    """Skip ``turn`` when its scanned board has no Placeable square.

    The turn goes back to the previous mover, who gets one unit of their
    highest-value used piece type back. Exactly one skip, never a loop.
    """
    if board.has_any_placeable():
        return turn, used, inventory, board
    restored = opposite(turn)
    comp = used.highest_for(restored)
    if comp is None:
        raise MissingCompensation(f"No used piece to return to {COLOR_MAP[restored]}")
    return restored, used.remove(comp), inventory.add(comp), scan(board, restored)


def _apply_move_traced(
    position: Position,
    piece: Piece,
    board: Board,
    turn: Color,
    inventory: PieceInventory,
    used: UsedLedger,
) -> Tuple[Board, Color, PieceInventory, UsedLedger, Piece, List[str], Optional[Color]]:
    sq = board.square_at(position)
    if not isinstance(sq, Placeable):
        return board, turn, inventory, used, piece, [], None
    logs: List[str] = [f"PUT: {piece} @ {position}"]
    placed = board.place(position, piece)
    placed, flipped, kept = resolve_captures(placed, piece, sq.groups)
    for p in flipped:
        now = placed.piece_at(p)
        assert now is not None
        logs.append(f"FLIP: {p} {now.reverse()}->{now}")
    for p in kept:
        logs.append(f"KEEP: {p} {placed.piece_at(p)}")
    # Clear stale tags under the mover before the turn flips
    placed = scan(placed, turn)
    inventory = inventory.remove(piece)
    used = used.add(piece)

    next_turn = opposite(turn)
    placed = scan(placed, next_turn)
    after_turn, after_used, after_inv, after_board = check_pass(next_turn, placed, used, inventory)
    skipped: Optional[Color] = None
    if after_turn != next_turn:
        skipped = next_turn
        returned = used.pieces - after_used.pieces
        logs.append(f"PASS: {next_turn}")
        logs.extend(f"RETURN: {p}" for p in sorted(returned, key=lambda p: p.value))
    return after_board, after_turn, after_inv, after_used, Piece(after_turn, 1), logs, skipped


def apply_move(
    position: Position,
    piece: Piece,
    board: Board,
    turn: Color,
    inventory: PieceInventory,
    used: UsedLedger,
) -> Tuple[Board, Color, PieceInventory, UsedLedger, Piece]:
    """Place ``piece`` at ``position`` and advance the turn.

    A target that is not Placeable leaves every input unchanged. Otherwise the
    result carries the captured board, the next mover (after any automatic
    pass), the updated inventory and ledger, and a value-1 piece of the next
    mover's color as the default selection.
    """
    b, t, inv, used2, nxt, _logs, _skipped = _apply_move_traced(position, piece, board, turn, inventory, used)
    return b, t, inv, used2, nxt


def play(state: GameState, position: Position, piece: Piece) -> GameState:
    # Finished games accept no further moves
    if is_game_over(state):
        return _append_log(state, f"REJECTED: {piece} @ {position}; game over")
    if piece.color != state.turn:
        raise ValueError(f"Piece {piece} does not belong to {COLOR_MAP[state.turn]}")
    b, t, inv, used, nxt, logs, skipped = _apply_move_traced(
        position, piece, state.board, state.turn, state.inventory, state.used
    )
    if not logs:
        return state
    new_state = replace(
        state,
        board=b,
        turn=t,
        inventory=inv,
        used=used,
        selected=nxt,
        logs=state.logs + tuple(logs),
        passes=state.passes + ((skipped,) if skipped is not None else ()),
        move_count=state.move_count + 1,
        explain=None,
    )
    if is_game_over(new_state):
        w = winner(new_state)
        new_state = _append_log(
            new_state,
            f"GAME_OVER: {score(new_state)}; winner={COLOR_MAP[w] if w is not None else 'draw'}",
        )
    return new_state


def play_selected(state: GameState, position: Position) -> GameState:
    # Human flow: nothing happens while the selected value is out of stock
    if selected_remaining(state) <= 0:
        return _append_log(state, f"NO_PIECE: {state.selected}")
    return play(state, position, state.selected)


# --- Piece selection ---

def selected_remaining(state: GameState) -> int:
    return state.inventory.remaining(state.selected.color, state.selected.value)


def select_piece(state: GameState, value: int) -> GameState:
    if value not in PIECE_VALUES:
        raise ValueError(f"Value must be {PIECE_VALUES[0]}..{PIECE_VALUES[-1]}")
    return replace(state, selected=Piece(state.turn, value))


def cycle_piece(state: GameState, delta: int) -> GameState:
    v = state.selected.value
    for _ in range(abs(delta)):
        v = next_value(v) if delta > 0 else prev_value(v)
    return select_piece(state, v)


# --- Scoring and game end ---

def score(state: GameState) -> Score:
    return state.board.score()


def current_kind(state: GameState) -> PlayerKind:
    return state.cfg.kind_of(state.turn)


def is_game_over(state: GameState) -> bool:
    if state.inventory.is_exhausted(state.turn):
        return True
    return not any(scan(state.board, c).has_any_placeable() for c in COLORS)


def winner(state: GameState) -> Optional[Color]:
    s = score(state)
    if s.black == s.white:
        return None
    return "B" if s.black > s.white else "W"


# --- COM driver ---

def _com_rng(state: GameState) -> random.Random:
    # Seeded per move so replays and serialized sessions stay deterministic
    return random.Random(state.cfg.com_seed * 1000 + state.move_count)


def com_decide(state: GameState, rng: Optional[random.Random] = None) -> Tuple[Position, Piece, ExplainInfo]:
    r = rng if rng is not None else _com_rng(state)
    piece = state.inventory.select_random(state.turn, r)
    pos, top, reason = choose_position(state.board, piece, state.cfg.com_policy, r)
    return pos, piece, ExplainInfo(topK=top, pick_reason=reason)


def com_apply(state: GameState, position: Position, piece: Piece, info: Optional[ExplainInfo] = None) -> GameState:
    if info is not None:
        state = _append_log(state, info.pick_reason)
    new_state = play(state, position, piece)
    return replace(new_state, explain=info)


def step(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """
    Play COM turns until either:
    - it is a Human's turn, OR
    - the game is over.
    """
    while not is_game_over(state) and current_kind(state) == "COM":
        pos, piece, info = com_decide(state, rng)
        state = com_apply(state, pos, piece, info)
    return state


# --- JSON serialization (pure, no I/O) ---

def _piece_to_obj(piece: Piece) -> Dict[str, object]:
    return {"c": piece.color, "v": int(piece.value)}


def _obj_to_piece(obj: object) -> Piece:
    assert isinstance(obj, dict), "Invalid piece"
    c = obj.get("c")
    v = obj.get("v")
    assert c in COLOR_MAP, f"Unknown color code: {c}"
    assert isinstance(v, int), "Invalid piece value"
    return Piece(cast(Color, c), v)


def _pos_to_obj(pos: Position) -> List[int]:
    return [pos.x, pos.y]


def _square_to_obj(sq: Square) -> Dict[str, object]:
    if isinstance(sq, Occupied):
        return {"kind": "occupied", "piece": _piece_to_obj(sq.piece)}
    if isinstance(sq, Placeable):
        groups: List[Dict[str, object]] = []
        for g in sq.groups:
            groups.append({"anchor": _pos_to_obj(g.anchor), "run": [_pos_to_obj(p) for p in g.run]})
        return {"kind": "placeable", "groups": groups}
    return {"kind": "empty"}


def to_json(state: GameState) -> Dict[str, object]:
    cfg_obj: Dict[str, object] = {
        "black": state.cfg.black,
        "white": state.cfg.white,
        "comPolicy": state.cfg.com_policy,
        "comSeed": int(state.cfg.com_seed),
    }
    board_obj = [[_square_to_obj(sq) for sq in col] for col in state.board.cells]
    inv_obj: Dict[str, Dict[str, int]] = {
        c: {str(v): int(state.inventory.remaining(c, v)) for v in PIECE_VALUES} for c in COLORS
    }
    used_sorted = sorted(state.used.pieces, key=lambda p: (p.color, p.value))
    s = score(state)
    w = winner(state)
    over = is_game_over(state)
    data: Dict[str, object] = {
        "schemaVersion": 1,
        "config": cfg_obj,
        "board": board_obj,
        "turn": state.turn,
        "currentKind": current_kind(state),
        "inventory": inv_obj,
        "used": [_piece_to_obj(p) for p in used_sorted],
        "selected": _piece_to_obj(state.selected),
        "selectedRemaining": int(selected_remaining(state)),
        "placeable": [_pos_to_obj(p) for p in state.board.placeable_positions()],
        "score": {"black": s.black, "white": s.white},
        "logs": list(state.logs),
        "passes": list(state.passes),
        "moveCount": int(state.move_count),
        "gameOver": over,
        "winner": w if over else None,
    }
    if state.explain is not None:
        data["explain"] = {
            "topK": [
                {
                    "x": ce.x,
                    "y": ce.y,
                    "bracketed": ce.bracketed,
                    "flipped": ce.flipped,
                    "delta": ce.score_delta,
                    "result": ce.result_score,
                }
                for ce in state.explain.topK
            ],
            "pick": {"reason": state.explain.pick_reason},
        }
    return data


def from_json(data: Dict[str, Any]) -> GameState:
    # Basic validation
    assert isinstance(data, dict), "Data must be a dict"
    assert data.get("schemaVersion") == 1, "Unsupported schemaVersion"

    cfgd = data.get("config")
    assert isinstance(cfgd, dict), "Missing config"
    black = cfgd.get("black")
    white = cfgd.get("white")
    policy = cfgd.get("comPolicy", "first")
    seed = cfgd.get("comSeed", 1337)
    assert black in ("H", "COM") and white in ("H", "COM"), "Invalid player kind"
    assert policy in ("first", "random", "greedy"), "Invalid comPolicy"
    assert isinstance(seed, int), "comSeed must be int"
    cfg = GameConfig(
        black=cast(PlayerKind, black),
        white=cast(PlayerKind, white),
        com_policy=cast(ComPolicy, policy),
        com_seed=seed,
    )

    turn = data.get("turn")
    assert turn in COLOR_MAP, "Invalid turn"

    # Only occupancy is read back; Placeable tags are recomputed for the turn
    board_obj = data.get("board")
    assert isinstance(board_obj, list) and len(board_obj) == BOARD_SIZE, "Board must have 8 columns"
    cols: List[List[Square]] = []
    for col in board_obj:
        assert isinstance(col, list) and len(col) == BOARD_SIZE, "Board column must have 8 squares"
        squares: List[Square] = []
        for cell in col:
            assert isinstance(cell, dict), "Invalid cell"
            if cell.get("kind") == "occupied":
                squares.append(Occupied(_obj_to_piece(cell.get("piece"))))
            else:
                squares.append(EMPTY)
        cols.append(squares)
    board = scan(Board.from_squares(cols), cast(Color, turn))

    inv_obj = data.get("inventory")
    assert isinstance(inv_obj, dict), "Missing inventory"
    counts: Dict[Color, Dict[int, int]] = {}
    for c in COLORS:
        per = inv_obj.get(c)
        assert isinstance(per, dict), f"Missing inventory for {c}"
        counts[c] = {}
        for v in PIECE_VALUES:
            k = per.get(str(v), 0)
            assert isinstance(k, int) and k >= 0, "Inventory counts must be non-negative ints"
            counts[c][v] = k

    used_obj = data.get("used", [])
    assert isinstance(used_obj, list), "used must be a list"
    used = UsedLedger(frozenset(_obj_to_piece(o) for o in used_obj))

    logs_obj = data.get("logs", [])
    passes_obj = data.get("passes", [])
    assert isinstance(logs_obj, list) and all(isinstance(x, str) for x in logs_obj), "logs must be strings"
    assert isinstance(passes_obj, list) and all(x in COLOR_MAP for x in passes_obj), "Invalid passes"
    move_count = data.get("moveCount", 0)
    assert isinstance(move_count, int), "moveCount must be int"

    selected = _obj_to_piece(data.get("selected"))
    assert selected.color == turn, "Selected piece must match the turn"

    explain: Optional[ExplainInfo] = None
    explain_obj = data.get("explain")
    if explain_obj is not None:
        assert isinstance(explain_obj, dict), "Invalid explain"
        topk: List[CandidateEval] = []
        for ce in explain_obj.get("topK", []):
            topk.append(CandidateEval(
                x=int(ce["x"]),
                y=int(ce["y"]),
                bracketed=int(ce["bracketed"]),
                flipped=int(ce["flipped"]),
                score_delta=int(ce["delta"]),
                result_score=int(ce["result"]),
            ))
        pick = explain_obj.get("pick", {})
        explain = ExplainInfo(topK=topk, pick_reason=str(pick.get("reason", "")))

    return GameState(
        cfg=cfg,
        board=board,
        turn=cast(Color, turn),
        inventory=PieceInventory(counts),
        used=used,
        selected=selected,
        logs=tuple(logs_obj),
        passes=tuple(cast(List[Color], passes_obj)),
        move_count=move_count,
        explain=explain,
    )
