"""
Grid coordinate space with the reflecting wrap rule.
"""

from typing import Tuple


def wrap(coordinate: int, step: int, max_coordinate: int) -> int:
    """
    Advance one coordinate by step, wrapping at the edges.

    Leaving the grid does not wrap to the opposite edge by modulo: the result
    is reflected through max_coordinate, i.e. max_coordinate - coordinate.
    """
    if coordinate + step > max_coordinate or coordinate + step < 0:
        return max_coordinate - coordinate
    return coordinate + step


class Grid:
    """
    A square board of side `size`.

    Attributes:
        size: number of cells per side
        max_index: the largest valid coordinate (size - 1)
    """

    def __init__(self, size: int):
        if size < 3:
            raise ValueError(f"Grid size must be at least 3, got {size}.")
        self.size = size
        self.max_index = size - 1

    def contains(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x <= self.max_index and 0 <= y <= self.max_index

    def step(self, cell: Tuple[int, int], direction: Tuple[int, int]) -> Tuple[int, int]:
        """Return the cell reached from `cell` moving one step in `direction`."""
        x, y = cell
        step_x, step_y = direction
        return (
            wrap(x, step_x, self.max_index),
            wrap(y, step_y, self.max_index),
        )

    def __repr__(self):
        return f"<Grid size={self.size}>"
