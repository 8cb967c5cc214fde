"""
Player implementations for Grid Snake.

Players are automated input producers: they choose the snake's next
direction from the current game state.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
