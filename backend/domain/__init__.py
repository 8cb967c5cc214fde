"""
Domain entities for the Grid Snake game engine.

This module contains the core game entities that are independent of
rendering, input and timer concerns.
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, KEY_BINDINGS
from .grid import Grid, wrap
from .snake import Snake
from .apple import place_apple
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'KEY_BINDINGS',
    'Grid', 'wrap',
    'Snake',
    'place_apple',
    'GameState',
]
