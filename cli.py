from __future__ import annotations

from typing import List, Optional

from numreversi import (
    BOARD_SIZE,
    COLOR_MAP,
    COLORS,
    PIECE_VALUES,
    Board,
    GameConfig,
    GameState,
    Occupied,
    Placeable,
    Position,
    ComPolicy,
    PlayerKind,
    new_game,
    play_selected,
    select_piece,
    selected_remaining,
    current_kind,
    is_game_over,
    winner,
    score,
    com_decide,
    com_apply,
)


# Console configuration
BLACK: PlayerKind = "H"
WHITE: PlayerKind = "COM"
COM_POLICY: ComPolicy = "greedy"
COM_SEED: int = 1337


def print_legend() -> None:
    items = ", ".join(f"{k}={v}" for k, v in COLOR_MAP.items())
    print(f"Legend: {items}, * = placeable")


def print_board(b: Board, title: str = "") -> None:
    if title:
        print(f"--- {title} ---")
    print("    " + " ".join(f"{x:>3}" for x in range(BOARD_SIZE)))
    for y in range(BOARD_SIZE):
        row_parts: List[str] = []
        for x in range(BOARD_SIZE):
            sq = b.square_at(Position(x, y))
            if isinstance(sq, Occupied):
                row_parts.append(f"{sq.piece.color}{sq.piece.value}")
            elif isinstance(sq, Placeable):
                row_parts.append("*")
            else:
                row_parts.append(".")
        print(f"{y:>3} " + " ".join(f"{x:>3}" for x in row_parts))
    print()


def print_inventory(state: GameState) -> None:
    for c in COLORS:
        parts = [f"{v}x{state.inventory.remaining(c, v)}" for v in PIECE_VALUES]
        print(f"{COLOR_MAP[c]:>5}: " + " ".join(parts))


def ask_value() -> int:
    while True:
        s = input("Piece value (1..10): ").strip()
        try:
            v = int(s)
        except Exception:
            print("Invalid number.")
            continue
        if 1 <= v <= 10:
            return v
        print("Out of range; must be 1..10.")


def ask_pos(b: Board) -> Position:
    while True:
        s = input(f"Target (x y) in 0..{BOARD_SIZE - 1}: ").strip().split()
        if len(s) != 2:
            print("Please input two integers.")
            continue
        try:
            x, y = int(s[0]), int(s[1])
        except Exception:
            print("Invalid integers.")
            continue
        if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
            print("Out of bounds.")
            continue
        if not isinstance(b.square_at(Position(x, y)), Placeable):
            print("That square is not placeable.")
            continue
        return Position(x, y)


def drain_logs(state: GameState, seen: int) -> int:
    for line in state.logs[seen:]:
        print(line)
    return len(state.logs)


def human_turn(state: GameState) -> GameState:
    while True:
        state = select_piece(state, ask_value())
        if selected_remaining(state) > 0:
            break
        print(f"No {state.selected} left; pick another value.")
    pos = ask_pos(state.board)
    return play_selected(state, pos)


def com_turn(state: GameState) -> GameState:
    pos, piece, info = com_decide(state)
    return com_apply(state, pos, piece, info)


def main(black: PlayerKind = BLACK, white: PlayerKind = WHITE, policy: ComPolicy = COM_POLICY, seed: int = COM_SEED) -> Optional[str]:
    print("NUMBER REVERSI - Console Arbiter")
    print_legend()
    cfg = GameConfig(black=black, white=white, com_policy=policy, com_seed=seed)
    state = new_game(cfg)
    seen = 0
    while not is_game_over(state):
        name = COLOR_MAP[state.turn]
        kind = current_kind(state)
        print()
        print(f"Turn: {name}" + (" [COM]" if kind == "COM" else ""))
        print(f"Score: {score(state)}")
        print_board(state.board)
        print_inventory(state)
        state = com_turn(state) if kind == "COM" else human_turn(state)
        seen = drain_logs(state, seen)

    print("\n=== Game Over ===")
    print_board(state.board, "Final board")
    s = score(state)
    print(f"Black: {s.black} pts")
    print(f"White: {s.white} pts")
    w = winner(state)
    if w is None:
        print("Draw")
        return None
    print(f"Winner: {COLOR_MAP[w]}")
    return w


if __name__ == "__main__":
    main()
