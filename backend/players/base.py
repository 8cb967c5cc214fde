"""
Base player interface for the game engine.
"""

from typing import Optional, Tuple

from domain.game_state import GameState


class Player:
    """
    Base class/interface for automated input.

    A player is polled right before each clock tick and returns the
    direction it wants the snake to take.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    def get_move(self, game_state: GameState) -> Optional[Tuple[int, int]]:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of UP, DOWN, LEFT, RIGHT, or None to keep the current direction
        """
        raise NotImplementedError
