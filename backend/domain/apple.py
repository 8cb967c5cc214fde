"""
Apple placement.
"""

import random
from typing import Optional, Tuple

from .grid import Grid


def place_apple(grid: Grid, rng: Optional[random.Random] = None) -> Tuple[int, int]:
    """
    Return a random apple cell.

    Both coordinates are drawn uniformly from [1, size - 1), which keeps the
    apple off row/column 0 and off the last row/column. Snake cells are not
    excluded.
    """
    rng = rng or random
    x = rng.randrange(1, grid.max_index)
    y = rng.randrange(1, grid.max_index)
    return (x, y)
