"""
Move advisor for three-row Nim with a 3-piece cap.

The advisor plays the nim-sum strategy: leave the opponent a position whose
XOR of heap sizes is zero. The cap on pieces per turn can make the zeroing
move illegal, so a few end-game patterns and a fallback sit on top of it.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from nim import apply_move, compute_nim_sum
from nim_config import MAX_TAKE, ROW_CAPACITIES

log = logging.getLogger(__name__)

RULE_LAST_PIECE = "last-piece"
RULE_LOSING = "losing-position"
RULE_WINNING = "winning-move"
RULE_ENDGAME = "endgame-reduce"
RULE_FALLBACK = "fallback"

RULES = [RULE_LAST_PIECE, RULE_LOSING, RULE_WINNING, RULE_ENDGAME, RULE_FALLBACK]


def check_position(
    state: Tuple[int, ...], capacities: Tuple[int, ...] = ROW_CAPACITIES
) -> None:
    if len(state) != len(capacities):
        raise ValueError(f"Expected {len(capacities)} heaps, got {len(state)}")
    for row, (heap, capacity) in enumerate(zip(state, capacities), 1):
        if heap < 0 or heap > capacity:
            raise ValueError(
                f"Heap {row} has {heap} pieces, must be between 0 and {capacity}"
            )
    if sum(state) == 0:
        raise ValueError("No pieces left: the game is already over")


def first_nonempty_move(state: Tuple[int, ...]) -> Tuple[int, int]:
    """Take 1 from the first non-empty heap."""
    for row, heap in enumerate(state, 1):
        if heap > 0:
            return (row, 1)
    raise ValueError("No pieces left: the game is already over")


def winning_moves(h1: int, h2: int, h3: int) -> List[Tuple[int, int]]:
    """All moves within the cap that leave a nim-sum of zero, in row order."""
    state = (h1, h2, h3)
    x = compute_nim_sum(state)
    moves = []
    if x == 0:
        return moves
    for row, heap in enumerate(state, 1):
        target = heap ^ x
        if target < heap and heap - target <= MAX_TAKE:
            moves.append((row, heap - target))
    return moves


def endgame_row(state: Tuple[int, ...]) -> Optional[int]:
    """
    Row of the larger heap when the other two are both 1 or both 0.

    In (1, 1, h) and (0, 0, h) the only zeroing move empties h, which the
    cap forbids once h > MAX_TAKE.
    """
    for i, heap in enumerate(state):
        others = [state[j] for j in range(len(state)) if j != i]
        if heap > 1 and others[0] == others[1] and others[0] in (0, 1):
            return i + 1
    return None


def is_legal(state: Tuple[int, ...], move: Tuple[int, int]) -> bool:
    row, pieces = move
    return 1 <= row <= len(state) and 1 <= pieces <= min(MAX_TAKE, state[row - 1])


def select_move(h1: int, h2: int, h3: int) -> Tuple[Tuple[int, int], str]:
    """Run the decision rules; the result is not checked for legality."""
    state = (h1, h2, h3)
    check_position(state)

    if sum(state) == 1:
        return first_nonempty_move(state), RULE_LAST_PIECE

    if compute_nim_sum(state) == 0:
        return first_nonempty_move(state), RULE_LOSING

    # Winning moves are tried from row 3 down
    moves = winning_moves(h1, h2, h3)
    if moves:
        return moves[-1], RULE_WINNING

    row = endgame_row(state)
    if row is not None:
        removal = state[row - 1] - 1
        if removal <= MAX_TAKE:
            return (row, removal), RULE_ENDGAME

    return first_nonempty_move(state), RULE_FALLBACK


def choose_move(h1: int, h2: int, h3: int) -> Tuple[Tuple[int, int], str]:
    """
    Return the advisor's move together with the rule that produced it.

    Raises ValueError for heaps outside (3, 5, 7) or an empty board, and
    RuntimeError if the rules produce an illegal move.
    """
    move, rule = select_move(h1, h2, h3)
    if not is_legal((h1, h2, h3), move):
        raise RuntimeError(
            f"Advisor produced illegal move {move} for heaps {(h1, h2, h3)} ({rule})"
        )
    return move, rule


def compute_move(h1: int, h2: int, h3: int) -> Tuple[int, int]:
    """
    Pick a move for the player facing heaps (h1, h2, h3).

    Returns (row, pieces) with row in 1..3 and 1 <= pieces <= 3.
    """
    move, rule = choose_move(h1, h2, h3)
    log.debug("heaps=%s nim_sum=%d rule=%s move=%s",
              (h1, h2, h3), compute_nim_sum((h1, h2, h3)), rule, move)
    return move


@dataclass
class AuditReport:
    positions: int = 0
    rule_counts: Dict[str, int] = field(default_factory=lambda: {r: 0 for r in RULES})
    # Non-zero nim-sum but every zeroing move exceeds the cap
    capped_positions: List[Tuple[int, ...]] = field(default_factory=list)
    # Capped positions that are not (1, 1, h) or (0, 0, h)
    unexplained: List[Tuple[int, ...]] = field(default_factory=list)
    illegal: List[Tuple[Tuple[int, ...], Tuple[int, int]]] = field(default_factory=list)
    # Zeroing move was available but the advisor did not play one
    missed_wins: List[Tuple[Tuple[int, ...], Tuple[int, int]]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.illegal and not self.missed_wins


def audit_positions() -> AuditReport:
    """Run the advisor on every non-terminal position and classify the results."""
    h1, h2, h3 = np.meshgrid(*(np.arange(c + 1) for c in ROW_CAPACITIES), indexing="ij")
    nim_sums = h1 ^ h2 ^ h3

    report = AuditReport()
    for index in np.ndindex(nim_sums.shape):
        state = tuple(int(h) for h in index)
        if sum(state) == 0:
            continue
        report.positions += 1

        move, rule = select_move(*state)
        if not is_legal(state, move):
            report.illegal.append((state, move))
            continue
        report.rule_counts[rule] += 1

        wins = winning_moves(*state)
        if nim_sums[index] != 0 and not wins:
            report.capped_positions.append(state)
            if endgame_row(state) is None:
                report.unexplained.append(state)
        if wins and compute_nim_sum(apply_move(state, move)) != 0:
            report.missed_wins.append((state, move))

    log.info("Audited %d positions: %d capped, %d outside end-game patterns",
             report.positions, len(report.capped_positions), len(report.unexplained))
    return report
