from dataclasses import replace
import random

from numreversi import (
    Board,
    GameConfig,
    Piece,
    PieceInventory,
    Placeable,
    Position,
    choose_position,
    com_apply,
    com_decide,
    evaluate_positions,
    is_game_over,
    new_game,
    scan,
    step,
    winner,
)


def _two_option_board() -> Board:
    # (0,2) takes a W1, (5,7) takes a W2
    return scan(Board.from_pieces(black=[(0, 0, 1), (7, 7, 1)], white=[(0, 1, 1), (6, 7, 2)]), "B")


def test_first_policy_takes_row_major_first():
    b = scan(Board.initial(), "B")
    pos, _top, reason = choose_position(b, Piece("B", 1), "first", random.Random(0))
    assert pos == Position(2, 4)
    assert reason.startswith("COM_PICK: first")


def test_greedy_policy_maximises_margin():
    b = _two_option_board()
    assert b.placeable_positions() == [Position(0, 2), Position(5, 7)]
    cands = evaluate_positions(b, Piece("B", 2))
    by_pos = {(c.x, c.y): c for c in cands}
    assert by_pos[(0, 2)].result_score == 3
    assert by_pos[(5, 7)].result_score == 5
    assert by_pos[(5, 7)].score_delta == 6
    pos, top, _ = choose_position(b, Piece("B", 2), "greedy", random.Random(0))
    assert pos == Position(5, 7)
    assert (top[0].x, top[0].y) == (5, 7)
    pos, _, _ = choose_position(b, Piece("B", 2), "first", random.Random(0))
    assert pos == Position(0, 2)


def test_random_policy_stays_on_placeable_squares():
    b = scan(Board.initial(), "B")
    rng = random.Random(11)
    for _ in range(20):
        pos, _, _ = choose_position(b, Piece("B", 1), "random", rng)
        assert isinstance(b.square_at(pos), Placeable)


def test_com_decide_uses_stock_and_is_deterministic():
    state = new_game(GameConfig(black="COM", white="COM", com_policy="random", com_seed=5))
    pos, piece, info = com_decide(state)
    assert piece.color == "B"
    assert state.inventory.remaining("B", piece.value) > 0
    assert isinstance(state.board.square_at(pos), Placeable)
    assert com_decide(state)[:2] == (pos, piece)
    s2 = com_apply(state, pos, piece, info)
    assert s2.explain is info
    assert info.pick_reason in s2.logs
    assert s2.move_count == 1


def test_com_vs_com_plays_to_the_end():
    for policy in ("first", "random", "greedy"):
        state = step(new_game(GameConfig(black="COM", white="COM", com_policy=policy, com_seed=7)))
        assert is_game_over(state)
        assert state.board.occupied_count() == 4 + state.move_count
        assert state.logs[-1].startswith("GAME_OVER:")


def test_step_stops_on_human_turn():
    state = step(new_game(GameConfig(black="COM", white="H")))
    assert state.turn == "W"
    assert state.move_count == 1
    assert step(state) is state


def test_game_over_when_neither_color_can_move():
    state = new_game(GameConfig())
    full_black = Board.from_pieces(black=[(0, 0, 3), (7, 7, 2)], white=[(3, 3, 1)])
    over = replace(state, board=scan(full_black, "B"))
    assert is_game_over(over)
    assert winner(over) == "B"
    assert not is_game_over(state)
    assert winner(state) is None


def test_game_over_when_mover_is_out_of_pieces():
    state = new_game(GameConfig())
    counts = {"B": {v: 0 for v in range(1, 11)}, "W": {v: 1 for v in range(1, 11)}}
    assert is_game_over(replace(state, inventory=PieceInventory(counts)))
