"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple

from .grid import Grid, wrap


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        grid: the board the snake moves on
    """

    def __init__(self, positions: List[Tuple[int, int]], grid: Grid):
        assert positions, "snake body must not be empty"
        self.positions = deque(positions)
        self.grid = grid

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[int, int]:
        return self.positions[-1]

    def __len__(self):
        return len(self.positions)

    def move(self, direction: Tuple[int, int]) -> Tuple[int, int]:
        """
        Advance the head one cell in `direction` and drop the tail.

        Returns the new head.
        """
        assert self.positions, "snake body must not be empty"
        new_head = self.grid.step(self.head, direction)
        self.positions.appendleft(new_head)
        self.positions.pop()
        return new_head

    def grow(self) -> Tuple[int, int]:
        """
        Append a cell extending the line of the last two segments.

        The extra cell absorbs the tail drop of the next move(), so the body
        ends up one segment longer. Each axis steps through the wrap rule,
        so the new cell always lies on the grid.
        """
        assert self.positions, "snake body must not be empty"
        tail_x, tail_y = self.tail
        if len(self.positions) > 1:
            prev_x, prev_y = self.positions[-2]
        else:
            prev_x, prev_y = self.tail

        new_tail = (self._extend(tail_x, prev_x), self._extend(tail_y, prev_y))

        self.positions.append(new_tail)
        return new_tail

    def _extend(self, coordinate: int, previous: int) -> int:
        delta = coordinate - previous
        if abs(delta) > 1:
            # The last two segments sit on opposite edges after a wrap
            return wrap(coordinate, -_sign(delta), self.grid.max_index)
        return wrap(coordinate, delta, self.grid.max_index)

    def is_self_collision(self) -> bool:
        """True if any segment other than the head sits on the head's cell."""
        head = self.head
        return sum(1 for cell in self.positions if cell == head) > 1

    def __repr__(self):
        return f"<Snake head={self.head} length={len(self.positions)}>"
