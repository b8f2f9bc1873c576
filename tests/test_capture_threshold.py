from numreversi import (
    Board,
    Piece,
    Placeable,
    Position,
    resolve_captures,
    reverse,
    scan,
)


def _capture(board: Board, at: Position, piece: Piece) -> Board:
    sq = board.square_at(at)
    assert isinstance(sq, Placeable)
    return reverse(board.place(at, piece), piece, sq.groups)


def test_flip_when_value_below_sum_of_ends():
    # W2 bracketed by B2 (placed) and B1 (anchor): 2 < 3
    b = scan(Board.from_pieces(black=[(4, 4, 1)], white=[(3, 4, 2)]), "B")
    out = _capture(b, Position(2, 4), Piece("B", 2))
    assert out.piece_at(Position(3, 4)) == Piece("B", 2)
    assert out.piece_at(Position(4, 4)) == Piece("B", 1)


def test_survive_when_value_not_below_sum_of_ends():
    # W2 vs B1 + B1: 2 < 2 is false
    b = scan(Board.from_pieces(black=[(4, 4, 1)], white=[(3, 4, 2)]), "B")
    out = _capture(b, Position(2, 4), Piece("B", 1))
    assert out.piece_at(Position(3, 4)) == Piece("W", 2)


def test_run_pieces_checked_individually():
    b = scan(Board.from_pieces(black=[(5, 4, 5)], white=[(3, 4, 3), (4, 4, 9)]), "B")
    piece = Piece("B", 2)
    sq = b.square_at(Position(2, 4))
    assert isinstance(sq, Placeable)
    out, flipped, kept = resolve_captures(b.place(Position(2, 4), piece), piece, sq.groups)
    assert flipped == [Position(3, 4)]
    assert kept == [Position(4, 4)]
    assert out.piece_at(Position(3, 4)) == Piece("B", 3)
    assert out.piece_at(Position(4, 4)) == Piece("W", 9)
    assert out.piece_at(Position(5, 4)) == Piece("B", 5)


def test_opening_capture_on_initial_board():
    b = scan(Board.initial(), "B")
    out = _capture(b, Position(4, 2), Piece("B", 1))
    assert out.piece_at(Position(4, 3)) == Piece("B", 1)
    assert out.piece_at(Position(4, 2)) == Piece("B", 1)
    assert out.occupied_count() == 5


def test_each_group_uses_its_own_anchor():
    b = Board.initial()
    b = b.place(Position(3, 5), Piece("W", 4))
    b = b.place(Position(4, 5), Piece("W", 4))
    b = b.place(Position(5, 4), Piece("B", 3))
    b = scan(b, "B")
    out = _capture(b, Position(3, 6), Piece("B", 1))
    # anchor (3,3) is B1: threshold 2, W4 and W1 -> only W1 flips
    assert out.piece_at(Position(3, 5)) == Piece("W", 4)
    assert out.piece_at(Position(3, 4)) == Piece("B", 1)
    # anchor (5,4) is B3: threshold 4, W4 survives
    assert out.piece_at(Position(4, 5)) == Piece("W", 4)
