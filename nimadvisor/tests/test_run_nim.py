import pytest

import nim_advisor
import run_nim
from nim import NimBoard
from nim_save import read_game, write_game


@pytest.fixture
def feed(monkeypatch):
    def _feed(*answers):
        answers = iter(answers)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    return _feed


def test_play_against_computer(feed, capsys):
    # A bad row, a non-number and an illegal count are all re-prompted
    feed("1", "x", "3", "5", "1")
    winner = run_nim.play_game(NimBoard((0, 0, 2)), computer=1, color=False)

    out = capsys.readouterr().out
    assert "Invalid row!" in out
    assert "Invalid move!" in out
    assert "The computer takes 1 from row 3." in out
    assert "Player A wins!" in out
    assert winner == 0


def test_computer_moves_first(feed, capsys):
    feed("2", "1")
    board = NimBoard((1, 1, 0))
    winner = run_nim.play_game(board, computer=0, color=False)
    assert "The computer takes 1 from row 1." in capsys.readouterr().out
    assert board.get_state() == (0, 0, 0)
    assert winner == 0


def test_save_during_game(feed, tmp_path):
    path = tmp_path / "saved.txt"
    feed("-1", str(path), "y")
    board = NimBoard((3, 4, 7), player=1)
    assert run_nim.play_game(board, color=False) is None
    assert read_game(str(path)).get_state() == (3, 4, 7)


def test_save_declined_returns_to_game(feed, tmp_path, capsys):
    path = tmp_path / "never.txt"
    feed("-1", str(path), "n", "1", "1")
    winner = run_nim.play_game(NimBoard((1, 0, 0)), color=False)
    assert "Returning to game..." in capsys.readouterr().out
    assert not path.exists()
    assert winner == 1


def test_setup_loads_saved_game(feed, tmp_path, capsys):
    path = tmp_path / "game.txt"
    write_game(str(path), NimBoard((2, 2, 2), player=1))
    feed("2", str(tmp_path / "missing.txt"), "2", str(path))

    board = run_nim.setup_game()
    assert "There is no file called" in capsys.readouterr().out
    assert board.get_state() == (2, 2, 2)
    assert board.player_name() == "B"


def test_choose_computer(feed):
    feed("2", "c", "b")
    assert run_nim.choose_computer() == 1
    feed("1")
    assert run_nim.choose_computer() is None


def test_hint(capsys):
    assert run_nim.main(["hint", "3", "5", "7"]) == 0
    assert "Take 1 from row 3" in capsys.readouterr().out


def test_hint_rejects_empty_board(capsys):
    assert run_nim.main(["hint", "0", "0", "0"]) == 2
    assert "Error" in capsys.readouterr().out


def test_audit(capsys):
    assert run_nim.main(["audit"]) == 0
    out = capsys.readouterr().out
    assert "Positions audited: 191" in out
    assert "OK" in out


def test_evaluate_policy():
    results = run_nim.evaluate_policy(n_games=6, seed=0, verbose=False)
    for opponent in ("vs_random", "vs_optimal"):
        assert results[opponent]["win"] + results[opponent]["loss"] == 6


def test_hint_surfaces_illegal_advisor_move(monkeypatch):
    monkeypatch.setattr(nim_advisor, "select_move", lambda h1, h2, h3: ((2, 1), "fallback"))
    with pytest.raises(RuntimeError):
        run_nim.main(["hint", "1", "0", "0"])
