import random

import pytest

from numreversi import (
    InvalidPiece,
    InventoryExhausted,
    Piece,
    PieceInventory,
    UsedLedger,
    next_value,
    prev_value,
)


def test_initial_distribution_is_inverse_to_value():
    inv = PieceInventory.initial()
    expected = {1: 5, 2: 5, 3: 4, 4: 4, 5: 3, 6: 3, 7: 2, 8: 2, 9: 1, 10: 1}
    for c in ("B", "W"):
        for v, n in expected.items():
            assert inv.remaining(c, v) == n
        assert inv.remaining_total(c) == 30


def test_remove_then_add_round_trips():
    inv = PieceInventory.initial()
    p = Piece("B", 1)
    after = inv.remove(p)
    assert after.remaining("B", 1) == 4
    assert inv.remaining("B", 1) == 5
    assert after.add(p) == inv


def test_remove_on_zero_count_raises():
    inv = PieceInventory.initial().remove(Piece("W", 10))
    assert inv.remaining("W", 10) == 0
    with pytest.raises(InventoryExhausted):
        inv.remove(Piece("W", 10))


def test_select_random_only_picks_values_in_stock():
    counts = {
        "B": {v: 0 for v in range(1, 11)},
        "W": {v: 1 for v in range(1, 11)},
    }
    counts["B"][7] = 2
    inv = PieceInventory(counts)
    rng = random.Random(3)
    for _ in range(20):
        assert inv.select_random("B", rng) == Piece("B", 7)
    picks = {inv.select_random("W", rng).value for _ in range(200)}
    assert picks == set(range(1, 11))


def test_select_random_on_exhausted_color_raises():
    counts = {"B": {v: 0 for v in range(1, 11)}, "W": {v: 1 for v in range(1, 11)}}
    inv = PieceInventory(counts)
    assert inv.is_exhausted("B")
    with pytest.raises(InventoryExhausted):
        inv.select_random("B", random.Random(0))


def test_used_ledger_is_a_set():
    used = UsedLedger().add(Piece("B", 3)).add(Piece("B", 3)).add(Piece("B", 1))
    assert len(used) == 2
    assert used.highest_for("B") == Piece("B", 3)
    assert used.highest_for("W") is None
    used = used.remove(Piece("B", 3))
    assert Piece("B", 3) not in used
    assert used.highest_for("B") == Piece("B", 1)


def test_piece_reverse_and_validation():
    assert Piece("B", 1).reverse() == Piece("W", 1)
    assert Piece("W", 2).reverse() == Piece("B", 2)
    with pytest.raises(InvalidPiece):
        Piece("B", 0)
    with pytest.raises(ValueError):
        Piece("B", 11)
    with pytest.raises(InvalidPiece):
        Piece("R", 1)  # type: ignore[arg-type]


def test_value_cycling_wraps():
    assert next_value(10) == 1
    assert next_value(4) == 5
    assert prev_value(1) == 10
    assert prev_value(5) == 4


def test_counts_view_cannot_change_the_inventory():
    inv = PieceInventory.initial()
    view = inv.counts
    view["B"][1] = 0
    assert inv.remaining("B", 1) == 5
    assert inv.remove(Piece("B", 1)).remaining("B", 1) == 4


def test_missing_color_is_filled_with_zero_counts():
    inv = PieceInventory({"B": {1: 2}})
    assert inv.remaining("W", 3) == 0
    assert inv.is_exhausted("W")
    assert inv.add(Piece("W", 3)).remaining("W", 3) == 1
    assert inv.remaining("B", 2) == 0
