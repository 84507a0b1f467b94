"""
Three-row Nim board.
Rows hold 3, 5 and 7 pieces; a turn removes 1 to 3 pieces from one row.
The player who takes the last piece loses.
"""

from typing import List, Optional, Sequence, Tuple

from nim_config import MAX_TAKE, PLAYERS, ROW_CAPACITIES


class NimBoard:
    def __init__(
        self,
        heaps: Sequence[int] = ROW_CAPACITIES,
        player: int = 0,
        capacities: Tuple[int, ...] = ROW_CAPACITIES,
    ) -> None:
        if len(heaps) != len(capacities):
            raise ValueError(
                f"Expected {len(capacities)} rows, got {len(heaps)}"
            )
        for row, (heap, capacity) in enumerate(zip(heaps, capacities), 1):
            if heap < 0 or heap > capacity:
                raise ValueError(
                    f"Row {row} holds {heap} pieces, capacity is {capacity}"
                )
        if player not in (0, 1):
            raise ValueError(f"Invalid player index: {player}")
        self.capacities = tuple(capacities)
        self.n_rows = len(capacities)
        self.heaps = list(heaps)
        self.current_player = player
        self.done = self.is_over()
        self.winner: Optional[int] = player if self.done else None

    def get_state(self) -> Tuple[int, ...]:
        return tuple(self.heaps)

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        actions = []
        for row in range(1, self.n_rows + 1):
            for pieces in range(1, min(self.heaps[row - 1], MAX_TAKE) + 1):
                actions.append((row, pieces))
        return actions

    def legal_move(self, row: int, pieces: int) -> bool:
        if pieces > MAX_TAKE or pieces < 1 or row > self.n_rows or row < 1:
            return False
        return self.heaps[row - 1] >= pieces

    def remove_pieces(self, row: int, pieces: int) -> None:
        """Take `pieces` from `row` without changing whose turn it is."""
        if not self.legal_move(row, pieces):
            raise ValueError(
                f"Illegal move: {pieces} pieces from row {row} with heaps {self.get_state()}"
            )
        self.heaps[row - 1] -= pieces

    def step(
        self, action: Tuple[int, int]
    ) -> Tuple[Tuple[int, ...], bool, Optional[int]]:
        if self.done:
            raise ValueError("Game is over")

        row, pieces = action
        self.remove_pieces(row, pieces)
        self.current_player = 1 - self.current_player

        # Whoever took the last piece lost; the player now to move wins.
        if self.is_over():
            self.done = True
            self.winner = self.current_player

        return tuple(self.heaps), self.done, self.winner

    def is_over(self) -> bool:
        return sum(self.heaps) == 0

    def player_name(self, player: Optional[int] = None) -> str:
        return PLAYERS[self.current_player if player is None else player]

    def row_slots(self, row: int) -> List[int]:
        """Slot view of a row; pieces are taken from the left, so empties lead."""
        capacity = self.capacities[row - 1]
        heap = self.heaps[row - 1]
        return [0] * (capacity - heap) + [1] * heap

    def copy(self) -> "NimBoard":
        new_board = NimBoard(self.heaps, self.current_player, self.capacities)
        new_board.done = self.done
        new_board.winner = self.winner
        return new_board

    def __repr__(self) -> str:
        return f"NimBoard(heaps={tuple(self.heaps)}, player={self.player_name()})"


def row_sum(slots: Sequence[int]) -> int:
    """Count the occupied slots of a row."""
    return sum(1 for slot in slots if slot)


def compute_nim_sum(state: Sequence[int]) -> int:
    """Compute nim-sum (XOR of all pile sizes)."""
    result = 0
    for pile in state:
        result ^= pile
    return result


def apply_move(state: Tuple[int, ...], move: Tuple[int, int]) -> Tuple[int, ...]:
    row, pieces = move
    new_state = list(state)
    new_state[row - 1] -= pieces
    return tuple(new_state)
