import pytest

from nim_oracle import NimOracle


@pytest.fixture(scope="module")
def oracle():
    return NimOracle()


def test_taking_last_piece_loses(oracle):
    assert not oracle.is_winning((0, 0, 1))
    assert oracle.is_winning((0, 0, 2))
    assert oracle.get_outcome((0, 0, 1), player=1) == -1


def test_single_row_follows_cap(oracle):
    # With 1-3 pieces per turn, heaps of 4k + 1 lose for the mover
    assert not oracle.is_winning((0, 0, 5))
    assert oracle.is_winning((0, 0, 4))
    assert oracle.get_optimal_actions((0, 0, 4)) == [(3, 3)]
    assert oracle.get_action((0, 0, 4)) == (3, 3)


def test_normal_play():
    oracle = NimOracle(misere=False)
    assert oracle.is_winning((0, 0, 1))
    assert not oracle.is_winning((0, 0, 4))
    assert oracle.get_outcome((0, 0, 4), player=-1) == 1


def test_q_values_cover_valid_moves(oracle):
    q_values = oracle.get_q_values((1, 0, 2))
    assert set(q_values) == {(1, 1), (3, 1), (3, 2)}


def test_no_moves_left(oracle):
    with pytest.raises(ValueError):
        oracle.get_action((0, 0, 0))


@pytest.mark.parametrize("state", [(4, 0, 0), (0, 6, 0), (0, 0, -1), (1, 1)])
def test_rejects_states_outside_capacities(oracle, state):
    with pytest.raises(ValueError):
        oracle.get_action(state)
