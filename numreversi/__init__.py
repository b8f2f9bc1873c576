from .types import Color, ComPolicy, PlayerKind, Position, Score, COLOR_MAP, COLORS, BOARD_SIZE, PIECE_VALUES, DIRECTIONS, opposite
from .errors import RuleError, InvalidPiece, InventoryExhausted, MissingCompensation
from .piece import Piece, UsedLedger, next_value, prev_value
from .inventory import PieceInventory
from .board import Board, CaptureGroup, Empty, Occupied, Placeable, Square, EMPTY
from .search import search_direction, capture_groups, scan, resolve_captures, reverse
from .com import CandidateEval, evaluate_position, evaluate_positions, choose_position
from .core import (
    GameConfig,
    ExplainInfo,
    GameState,
    new_game,
    check_pass,
    apply_move,
    play,
    play_selected,
    selected_remaining,
    select_piece,
    cycle_piece,
    score,
    current_kind,
    is_game_over,
    winner,
    com_decide,
    com_apply,
    step,
    to_json,
    from_json,
)

__all__ = [
    "Color",
    "ComPolicy",
    "PlayerKind",
    "Position",
    "Score",
    "COLOR_MAP",
    "COLORS",
    "BOARD_SIZE",
    "PIECE_VALUES",
    "DIRECTIONS",
    "opposite",
    "RuleError",
    "InvalidPiece",
    "InventoryExhausted",
    "MissingCompensation",
    "Piece",
    "UsedLedger",
    "next_value",
    "prev_value",
    "PieceInventory",
    "Board",
    "CaptureGroup",
    "Empty",
    "Occupied",
    "Placeable",
    "Square",
    "EMPTY",
    "search_direction",
    "capture_groups",
    "scan",
    "resolve_captures",
    "reverse",
    "CandidateEval",
    "evaluate_position",
    "evaluate_positions",
    "choose_position",
    "GameConfig",
    "ExplainInfo",
    "GameState",
    "new_game",
    "check_pass",
    "apply_move",
    "play",
    "play_selected",
    "selected_remaining",
    "select_piece",
    "cycle_piece",
    "score",
    "current_kind",
    "is_game_over",
    "winner",
    "com_decide",
    "com_apply",
    "step",
    "to_json",
    "from_json",
]
