"""
Plain-text save files.

One line per row, each slot written as F (full) or E (empty), separated by
commas and closed by a period, then the letter of the player to move:

    E,F,F.
    F,F,F,F,F.
    E,E,F,F,F,F,F.
    B.
"""

import logging
from typing import List

from nim import NimBoard, row_sum
from nim_config import (
    EMPTY_SLOT,
    FULL_SLOT,
    LINE_TERMINATOR,
    PLAYERS,
    ROW_CAPACITIES,
    SLOT_SEPARATOR,
)

log = logging.getLogger(__name__)


class SaveFileError(ValueError):
    pass


def format_row(slots: List[int]) -> str:
    symbols = [FULL_SLOT if slot else EMPTY_SLOT for slot in slots]
    return SLOT_SEPARATOR.join(symbols) + LINE_TERMINATOR


def parse_row(line: str, size: int, number: int) -> List[int]:
    line = line.strip()
    if not line.endswith(LINE_TERMINATOR):
        raise SaveFileError(f"Row {number} is not terminated by '{LINE_TERMINATOR}'")
    symbols = line[: -len(LINE_TERMINATOR)].split(SLOT_SEPARATOR)
    if len(symbols) != size:
        raise SaveFileError(f"Row {number} has {len(symbols)} slots, expected {size}")

    slots = []
    for symbol in symbols:
        if symbol == FULL_SLOT:
            slots.append(1)
        elif symbol == EMPTY_SLOT:
            slots.append(0)
        else:
            raise SaveFileError(f"Unknown slot '{symbol}' in row {number}")
    return slots


def dumps(board: NimBoard) -> str:
    lines = [format_row(board.row_slots(row)) for row in range(1, board.n_rows + 1)]
    lines.append(board.player_name() + LINE_TERMINATOR)
    return "\n".join(lines)


def loads(text: str) -> NimBoard:
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) != len(ROW_CAPACITIES) + 1:
        raise SaveFileError(
            f"Expected {len(ROW_CAPACITIES) + 1} lines, found {len(lines)}"
        )

    heaps = [
        row_sum(parse_row(line, size, number))
        for number, (line, size) in enumerate(zip(lines, ROW_CAPACITIES), 1)
    ]

    player_line = lines[-1].strip().rstrip(LINE_TERMINATOR)
    if player_line not in PLAYERS:
        raise SaveFileError(f"Unknown player '{player_line}'")
    return NimBoard(heaps, PLAYERS.index(player_line))


def write_game(path: str, board: NimBoard) -> None:
    with open(path, "w") as f:
        f.write(dumps(board))
    log.info("Saved %r to %s", board, path)


def read_game(path: str) -> NimBoard:
    with open(path) as f:
        board = loads(f.read())
    log.info("Loaded %r from %s", board, path)
    return board
