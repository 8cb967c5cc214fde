"""
Canvas renderer built on Pillow.

Draws the board onto a square RGB image:
- Checkerboard grid
- Snake cells in black
- Apple cell in lime green

The last presented frame can be saved as a PNG snapshot.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw

from .board_renderer import Renderer

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = 500


class ColorScheme:
    """Board colors"""

    GRID_LIGHT = "#f0f0f4"
    GRID_DARK = "#c4c4c4"
    SNAKE = "#000000"
    APPLE = "#b2e31b"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def cell_color(x: int, y: int) -> str:
    """Checkerboard color of a grid cell"""
    return ColorScheme.GRID_DARK if (x + y) % 2 else ColorScheme.GRID_LIGHT


class FrameRenderer(Renderer):
    """Render the board to a Pillow image"""

    def __init__(self, grid_size: int, canvas_size: int = DEFAULT_CANVAS_SIZE):
        self.grid_size = grid_size
        self.canvas_size = canvas_size
        self.cell_size = canvas_size / grid_size

        self.image = Image.new('RGB', (canvas_size, canvas_size), hex_to_rgb(ColorScheme.GRID_DARK))
        self.draw = ImageDraw.Draw(self.image)
        self.last_frame: Optional[Image.Image] = None

    def _cell_box(self, x: int, y: int) -> List[int]:
        left = int(round(x * self.cell_size))
        top = int(round(y * self.cell_size))
        right = int(round((x + 1) * self.cell_size)) - 1
        bottom = int(round((y + 1) * self.cell_size)) - 1
        return [left, top, right, bottom]

    def _fill_cell(self, x: int, y: int, color: str):
        if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
            return
        self.draw.rectangle(self._cell_box(x, y), fill=hex_to_rgb(color))

    def draw_grid(self):
        for x in range(self.grid_size):
            for y in range(self.grid_size):
                self._fill_cell(x, y, cell_color(x, y))

    def draw_apple(self, cell: Tuple[int, int]):
        self._fill_cell(cell[0], cell[1], ColorScheme.APPLE)

    def draw_snake(self, body: List[Tuple[int, int]]):
        for x, y in body:
            self._fill_cell(x, y, ColorScheme.SNAKE)

    def present(self):
        self.last_frame = self.image.copy()

    def pixel_at_cell(self, cell: Tuple[int, int]) -> Tuple[int, int, int]:
        """RGB color at the center of a cell in the last frame"""
        frame = self.last_frame or self.image
        x, y = cell
        center = (
            int((x + 0.5) * self.cell_size),
            int((y + 0.5) * self.cell_size),
        )
        return frame.getpixel(center)

    def save(self, path: str) -> Path:
        """Save the last presented frame as a PNG file"""
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        (self.last_frame or self.image).save(output, format="PNG")
        logger.info("Saved board snapshot to %s", output)
        return output
