import pytest

from nim import NimBoard, apply_move, compute_nim_sum, row_sum


@pytest.fixture
def board():
    return NimBoard()


def test_initial_board(board):
    assert board.get_state() == (3, 5, 7)
    assert board.player_name() == "A"
    assert not board.done
    assert board.winner is None


def test_legal_move(board):
    assert board.legal_move(1, 3)
    assert board.legal_move(3, 1)

    assert not board.legal_move(3, 4)  # Over the cap
    assert not board.legal_move(2, 0)  # Too few
    assert not board.legal_move(0, 1)
    assert not board.legal_move(4, 1)

    board.remove_pieces(1, 2)
    assert not board.legal_move(1, 2)  # More than remaining
    assert board.legal_move(1, 1)


def test_remove_pieces_rejects_illegal_move(board):
    with pytest.raises(ValueError):
        board.remove_pieces(1, 4)
    assert board.get_state() == (3, 5, 7)


def test_step_alternates_players(board):
    state, done, winner = board.step((3, 2))
    assert state == (3, 5, 5)
    assert not done
    assert winner is None
    assert board.player_name() == "B"


def test_last_piece_loses():
    board = NimBoard((0, 1, 0), player=1)
    _, done, winner = board.step((2, 1))
    assert done
    # B took the last piece, so A wins
    assert winner == 0
    with pytest.raises(ValueError):
        board.step((1, 1))


def test_valid_actions_capped():
    board = NimBoard((0, 2, 7))
    assert board.get_valid_actions() == [(2, 1), (2, 2), (3, 1), (3, 2), (3, 3)]


def test_row_slots_empty_from_left():
    board = NimBoard((1, 5, 4))
    assert board.row_slots(1) == [0, 0, 1]
    assert board.row_slots(3) == [0, 0, 0, 1, 1, 1, 1]
    assert row_sum(board.row_slots(3)) == 4


@pytest.mark.parametrize("heaps", [(4, 5, 7), (3, -1, 7), (3, 5)])
def test_invalid_heaps(heaps):
    with pytest.raises(ValueError):
        NimBoard(heaps)


def test_copy_is_independent(board):
    other = board.copy()
    other.step((1, 1))
    assert board.get_state() == (3, 5, 7)
    assert other.get_state() == (2, 5, 7)


def test_helpers():
    assert compute_nim_sum((3, 5, 7)) == 1
    assert compute_nim_sum((1, 1, 0)) == 0
    assert row_sum([1, 0, 1, 1]) == 3
    assert apply_move((3, 5, 7), (2, 3)) == (3, 2, 7)
