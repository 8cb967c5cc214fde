"""
Renderer interface and a plain-text board renderer.
"""

from typing import List, Optional, Tuple


class Renderer:
    """
    Interface for drawing the board.

    render() draws the grid, then the snake, then the apple, and finally
    calls present() so implementations can flush the frame.
    """

    def draw_grid(self):
        raise NotImplementedError

    def draw_apple(self, cell: Tuple[int, int]):
        raise NotImplementedError

    def draw_snake(self, body: List[Tuple[int, int]]):
        raise NotImplementedError

    def present(self):
        pass

    def render(self, body: List[Tuple[int, int]], apple: Optional[Tuple[int, int]]):
        self.draw_grid()
        self.draw_snake(body)
        if apple is not None:
            self.draw_apple(apple)
        self.present()


class TextRenderer(Renderer):
    """
    Draws the board as text:
    . = empty space
    A = apple
    H = snake head
    T = snake body/tail

    (0,0) is at the top left, matching the direction vectors.
    """

    def __init__(self, grid_size: int, echo: bool = True):
        self.grid_size = grid_size
        self.echo = echo
        self.board: List[List[str]] = []
        self.frames = 0

    def draw_grid(self):
        self.board = [['.' for _ in range(self.grid_size)] for _ in range(self.grid_size)]

    def draw_apple(self, cell: Tuple[int, int]):
        x, y = cell
        self.board[y][x] = 'A'

    def draw_snake(self, body: List[Tuple[int, int]]):
        # Tail first so the head wins when segments overlap
        for pos_idx in range(len(body) - 1, -1, -1):
            x, y = body[pos_idx]
            if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
                continue
            self.board[y][x] = 'H' if pos_idx == 0 else 'T'

    def to_string(self) -> str:
        result = [f"{y:2d} {' '.join(row)}" for y, row in enumerate(self.board)]
        # Add x-axis labels at the bottom (last digit only)
        result.append("   " + " ".join(str(i % 10) for i in range(self.grid_size)))
        return "\n".join(result)

    def present(self):
        self.frames += 1
        if self.echo:
            print("\n" + self.to_string() + "\n")
