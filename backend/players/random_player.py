"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional, Tuple

from domain.constants import VALID_MOVES
from domain.game_state import GameState, is_opposite
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction that neither reverses the snake
    nor runs into its own body.
    """

    def __init__(self, name: Optional[str] = None, rng: Optional[random.Random] = None):
        super().__init__(name)
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Tuple[int, int]:
        snake = game_state.snake
        body = list(snake.positions)
        current = game_state.get_velocity()

        # Filter out moves that:
        # 1. Reverse into the neck
        # 2. Hit own body (except tail, which will move)
        valid_moves: List[Tuple[int, int]] = []
        for move in sorted(VALID_MOVES):
            if is_opposite(move, current):
                continue
            if game_state.grid.step(snake.head, move) in body[:-1]:
                continue
            valid_moves.append(move)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return current

        return self.rng.choice(valid_moves)
