"""
Command-line Nim on rows of 3, 5 and 7 pieces.

Subcommands:
    play       play a game against another player or the computer (default)
    hint       print the advisor's move for a position
    audit      run the advisor over every position and report the results
    evaluate   score the advisor against a random and an optimal opponent
"""

import argparse
import logging
import os
import sys
from typing import Dict, List, Optional, Tuple

import coloredlogs
import numpy as np

from nim import NimBoard
from nim_advisor import audit_positions, choose_move, compute_move
from nim_config import EVAL_GAMES, PLAYERS
from nim_display import render_board, render_turn
from nim_oracle import NimOracle
from nim_save import SaveFileError, read_game, write_game

log = logging.getLogger(__name__)

SEPARATOR = "-" * 45


def prompt_int(prompt: str) -> int:
    while True:
        raw = input(prompt)
        try:
            return int(raw.strip())
        except ValueError:
            print(f"'{raw.strip()}' is not a number.")


def prompt_yes(prompt: str) -> bool:
    return input(prompt).strip().lower() in ("y", "yes")


def load_board() -> Optional[NimBoard]:
    print(SEPARATOR)
    print("Reading Game from File")
    path = input("Enter the name of the file you would like to load the game from: ").strip()
    try:
        return read_game(path)
    except FileNotFoundError:
        print(f"There is no file called {path}. Returning to main menu...")
    except (SaveFileError, OSError) as e:
        print(f"Could not load {path}: {e}. Returning to main menu...")
    return None


def save_board(board: NimBoard) -> bool:
    print(SEPARATOR)
    print("Saving Game to File")
    path = input(
        "Enter the name of the file you would like to save this game to "
        "(this will overwrite existing files): "
    ).strip()
    if not os.path.exists(path):
        if not prompt_yes(f"There is no file called {path}. Do you want to create it? (Y/n) "):
            print("Returning to game...")
            return False
    try:
        write_game(path, board)
    except OSError as e:
        print(f"Could not save to {path}: {e}. Returning to game...")
        return False
    print("Game saved. Exiting...")
    return True


def setup_game() -> NimBoard:
    while True:
        print("What would you like to do?")
        print("1: Start new game")
        print("2: Load game from file")
        selection = prompt_int("Enter selection: ")
        if selection == 1:
            print("Ok. Preparing new game...")
            return NimBoard()
        if selection == 2:
            board = load_board()
            if board is not None:
                return board


def choose_computer() -> Optional[int]:
    """Player index the computer plays, or None for two human players."""
    while True:
        print("Who is playing?")
        print("1: Two players")
        print("2: Play against the computer")
        selection = prompt_int("Enter selection: ")
        if selection == 1:
            return None
        if selection == 2:
            break

    while True:
        letter = input("Should the computer play as A or B? ").strip().upper()
        if letter in PLAYERS:
            return PLAYERS.index(letter)
        print("Please enter A or B.")


def get_move(board: NimBoard) -> Optional[Tuple[int, int]]:
    """Ask for a move; None means the player asked to save."""
    while True:
        row = prompt_int("Enter the row you would like to take from (negative to save): ")
        if row < 0:
            return None
        if board.legal_move(row, 1):
            break
        print("Invalid row!")

    while True:
        pieces = prompt_int(f"Enter the number of pieces you would like to take from row {row}: ")
        if board.legal_move(row, pieces):
            return (row, pieces)
        print("Invalid move!")


def play_game(board: NimBoard, computer: Optional[int] = None, color: bool = True) -> Optional[int]:
    """Run the turn loop; returns the winner's index, or None if the game was saved."""
    while not board.done:
        print(SEPARATOR)
        print(render_board(board, color))
        print(render_turn(board, color))

        if board.current_player == computer:
            move = compute_move(*board.get_state())
            print(f"The computer takes {move[1]} from row {move[0]}.")
        else:
            print("What move would you like to make?")
            move = get_move(board)
            if move is None:
                if save_board(board):
                    return None
                continue

        log.debug("Player %s plays %s on %s", board.player_name(), move, board.get_state())
        board.step(move)

    print(f"Player {board.player_name(board.winner)} wins!")
    return board.winner


def evaluate_policy(
    n_games: int = EVAL_GAMES,
    misere: bool = True,
    seed: Optional[int] = None,
    verbose: bool = True,
) -> Dict[str, Dict[str, int]]:
    """Play the advisor against a random and an optimal opponent, alternating who starts."""
    if seed is not None:
        np.random.seed(seed)
    oracle = NimOracle(misere=misere)
    results: Dict[str, Dict[str, int]] = {
        "vs_random": {"win": 0, "loss": 0},
        "vs_optimal": {"win": 0, "loss": 0},
    }

    for opponent in ("vs_random", "vs_optimal"):
        for i in range(n_games):
            board = NimBoard()
            advisor = i % 2

            while not board.done:
                state = board.get_state()
                if board.current_player == advisor:
                    action = compute_move(*state)
                elif opponent == "vs_random":
                    valid = board.get_valid_actions()
                    action = valid[np.random.randint(len(valid))]
                else:
                    action = oracle.get_action(state, player=1)
                board.step(action)

            # Normal play: whoever took the last piece won
            winner = board.winner if misere else 1 - board.winner
            if winner == advisor:
                results[opponent]["win"] += 1
            else:
                results[opponent]["loss"] += 1

    if verbose:
        print("\nEvaluation Results:")
        print(f"  Rule: {'last piece loses' if misere else 'last piece wins'}")
        for opponent, label in (("vs_random", "Random"), ("vs_optimal", "Optimal")):
            print(f"  vs {label} (n={n_games}):")
            print(f"    Win:  {results[opponent]['win'] / n_games * 100:.1f}%")
            print(f"    Loss: {results[opponent]['loss'] / n_games * 100:.1f}%")

    return results


def print_audit() -> bool:
    report = audit_positions()
    print(f"Positions audited: {report.positions}")
    print("Moves by rule:")
    for rule, count in report.rule_counts.items():
        print(f"  {rule:<16} {count}")
    print(f"Capped positions (non-zero nim-sum, no zeroing move within the cap): "
          f"{len(report.capped_positions)}")
    for state in report.capped_positions:
        print(f"  {state}")
    print(f"Capped positions outside the (1, 1, h) / (0, 0, h) patterns: "
          f"{len(report.unexplained)}")
    for state, move in report.illegal:
        print(f"  ILLEGAL {state} -> {move}")
    for state, move in report.missed_wins:
        print(f"  MISSED WIN {state} -> {move}")
    print("OK" if report.ok else "FAILED")
    return report.ok


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Nim on rows of 3, 5 and 7 pieces")
    parser.add_argument(
        "--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, ...)"
    )
    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", help="Play a game")
    play.add_argument("--no-color", action="store_true", help="Disable ANSI colors")

    hint = subparsers.add_parser("hint", help="Show the advisor's move for a position")
    hint.add_argument("heaps", type=int, nargs=3, metavar="H", help="Pieces left in rows 1-3")

    subparsers.add_parser("audit", help="Check the advisor on every position")

    evaluate = subparsers.add_parser("evaluate", help="Score the advisor against other players")
    evaluate.add_argument("--games", type=int, default=EVAL_GAMES, help="Games per opponent")
    evaluate.add_argument("--seed", type=int, default=None, help="Random seed")
    evaluate.add_argument(
        "--normal-play", action="store_true", help="Score with 'last piece wins' instead"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    coloredlogs.install(level=args.log_level.upper())

    if args.command == "hint":
        try:
            move, rule = choose_move(*args.heaps)
        except ValueError as e:
            print(f"Error: {e}")
            return 2
        print(f"Take {move[1]} from row {move[0]} ({rule})")
        return 0

    if args.command == "audit":
        return 0 if print_audit() else 1

    if args.command == "evaluate":
        evaluate_policy(n_games=args.games, misere=not args.normal_play, seed=args.seed)
        return 0

    color = not getattr(args, "no_color", False)
    print("Welcome to Nim!")
    board = setup_game()
    computer = choose_computer()
    play_game(board, computer, color)
    return 0


if __name__ == "__main__":
    sys.exit(main())
