"""
Terminal rendering of the board.
"""

from typing import List

from nim import NimBoard
from nim_config import (
    EMPTY_PIECE,
    FULL_PIECE,
    LABEL_WIDTH,
    PIECE_GLYPH,
    PLAYER_COLOR,
    RESET,
    ROW_LABEL,
)


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


def render_row(board: NimBoard, row: int, color: bool = True) -> str:
    # Shorter rows are indented further so the board forms a pyramid
    label = f"Row {row}" + " " * (LABEL_WIDTH - board.capacities[row - 1])
    pieces = [
        _paint(PIECE_GLYPH, FULL_PIECE if slot else EMPTY_PIECE, color)
        for slot in board.row_slots(row)
    ]
    return _paint(label, ROW_LABEL, color) + " " + " ".join(pieces)


def render_board(board: NimBoard, color: bool = True) -> str:
    lines: List[str] = [render_row(board, row, color) for row in range(1, board.n_rows + 1)]
    return "\n".join(lines)


def render_turn(board: NimBoard, color: bool = True) -> str:
    return f"It is player {_paint(board.player_name(), PLAYER_COLOR, color)}'s turn."
