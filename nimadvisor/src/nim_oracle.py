"""Nim oracle using minimax with memoization, for the capped three-row game."""

import numpy as np
from typing import Dict, List, Tuple

from nim import apply_move
from nim_config import MAX_TAKE, ROW_CAPACITIES


class NimOracle:
    def __init__(
        self,
        capacities: Tuple[int, ...] = ROW_CAPACITIES,
        max_take: int = MAX_TAKE,
        misere: bool = True,
    ) -> None:
        self.capacities = capacities
        self.n_rows = len(capacities)
        self.max_take = max_take
        self.misere = misere
        self.cache: Dict[Tuple[Tuple[int, ...], int], Tuple[int, int]] = {}
        self.minimax_cache: Dict[Tuple[Tuple[int, ...], int], float] = {}

    def check_state(self, state: Tuple[int, ...]) -> None:
        if len(state) != self.n_rows:
            raise ValueError(f"Expected {self.n_rows} rows, got {len(state)}")
        for row, (heap, capacity) in enumerate(zip(state, self.capacities), 1):
            if heap < 0 or heap > capacity:
                raise ValueError(f"Row {row} holds {heap} pieces, capacity is {capacity}")

    def get_action(self, state: Tuple[int, ...], player: int = 1) -> Tuple[int, int]:
        cache_key = (state, player)
        if cache_key in self.cache:
            return self.cache[cache_key]

        self.check_state(state)
        valid_actions = self._get_valid_actions(state)
        if not valid_actions:
            raise ValueError(f"No moves left in {state}")
        best_action = valid_actions[0]
        best_score = -np.inf if player == 1 else np.inf

        for action in valid_actions:
            score = self._minimax(apply_move(state, action), -player)

            if player == 1:
                if score > best_score:
                    best_score = score
                    best_action = action
            else:
                if score < best_score:
                    best_score = score
                    best_action = action

        self.cache[cache_key] = best_action
        return best_action

    def get_q_values(
        self, state: Tuple[int, ...], player: int = 1
    ) -> Dict[Tuple[int, int], float]:
        q_values = {}
        for action in self._get_valid_actions(state):
            q_values[action] = self._minimax(apply_move(state, action), -player)
        return q_values

    def get_optimal_actions(
        self, state: Tuple[int, ...], player: int = 1
    ) -> List[Tuple[int, int]]:
        q_values = self.get_q_values(state, player)
        if not q_values:
            return []

        best_value = max(q_values.values()) if player == 1 else min(q_values.values())
        return [a for a, v in q_values.items() if v == best_value]

    def get_outcome(self, state: Tuple[int, ...], player: int = 1) -> float:
        """Game value for player 1 with `player` to move and optimal play."""
        return self._minimax(state, player)

    def is_winning(self, state: Tuple[int, ...]) -> bool:
        """True if the player to move wins with optimal play."""
        return self._minimax(state, 1) > 0

    def _get_valid_actions(self, state: Tuple[int, ...]) -> List[Tuple[int, int]]:
        actions = []
        for row in range(1, self.n_rows + 1):
            for count in range(1, min(state[row - 1], self.max_take) + 1):
                actions.append((row, count))
        return actions

    def _minimax(self, state: Tuple[int, ...], player: int) -> float:
        cache_key = (state, player)
        if cache_key in self.minimax_cache:
            return self.minimax_cache[cache_key]

        # Terminal: previous player took the last piece
        if all(p == 0 for p in state):
            result = player if self.misere else -player
            self.minimax_cache[cache_key] = result
            return result

        scores = [
            self._minimax(apply_move(state, action), -player)
            for action in self._get_valid_actions(state)
        ]
        best_score = max(scores) if player == 1 else min(scores)
        self.minimax_cache[cache_key] = best_score
        return best_score
