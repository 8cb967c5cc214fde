"""
GameState entity - the running game and its tick.
"""

import logging
import random
from typing import Optional, Tuple

from .apple import place_apple
from .constants import (
    BASE_DURATION_MS,
    DIRECTION_NAMES,
    GRID_SIZE,
    KEY_BINDINGS,
    MIN_DURATION_MS,
    START_BODY,
    START_DIRECTION,
    VALID_MOVES,
)
from .grid import Grid
from .snake import Snake

logger = logging.getLogger(__name__)


def is_opposite(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


class GameState:
    """
    One game from start to game over.

    Collaborators are duck-typed and optional:
        renderer: draw_grid(), draw_apple(cell), draw_snake(body)
        display: show_score(n), show_game_over_message(), clear_game_over_message()
        clock: start(interval_ms, callback), cancel()
        pilot: get_move(game_state) -> direction, polled before each clock tick

    Attributes:
        grid: the board, fixed for the lifetime of the instance
        snake: the snake, head first
        apple: (x, y) of the active apple or None
        score: apples eaten since go()
        best_score: highest score reached, kept through game over
        direction: direction applied on the last tick
        pending_direction: direction to apply on the next tick
        running: True between go() and game over / destroy()
        ended: True once the snake has collided with itself
        tick_count: number of ticks performed
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        renderer=None,
        display=None,
        clock=None,
        pilot=None,
        base_duration: float = BASE_DURATION_MS,
        rng: Optional[random.Random] = None
    ):
        if base_duration <= 0:
            raise ValueError(f"Base duration must be positive, got {base_duration}.")

        self.grid = Grid(grid_size)
        self.snake = Snake(START_BODY, self.grid)
        for cell in self.snake.positions:
            if not self.grid.contains(cell):
                raise ValueError(f"Grid size {grid_size} is too small for the start position.")

        self.renderer = renderer
        self.display = display
        self.clock = clock
        self.pilot = pilot
        self.base_duration = base_duration
        self.rng = rng or random.Random()

        self.apple: Optional[Tuple[int, int]] = None
        self.score = 0
        self.best_score = 0
        self.direction = START_DIRECTION
        self.pending_direction = START_DIRECTION
        self.running = False
        self.ended = False
        self.tick_count = 0

        self._listening = True
        self._in_tick = False

        self.render()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def get_velocity(self) -> Tuple[int, int]:
        return self.direction

    def set_pending_direction(self, direction: Tuple[int, int]) -> bool:
        """
        Request a direction for the next tick.

        Returns False when the request reverses the current direction.
        Later requests before the tick overwrite earlier ones.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction}")
        if is_opposite(direction, self.direction):
            return False
        self.pending_direction = direction
        return True

    def handle_key(self, key: str) -> bool:
        """Translate a key name into a direction request."""
        if not self._listening:
            return False
        direction = KEY_BINDINGS.get(key.upper())
        if direction is None:
            return False
        return self.set_pending_direction(direction)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def calculate_duration(self) -> float:
        """Tick interval in milliseconds for the current score."""
        duration = self.base_duration - (self.score ** 2 / self.base_duration / 10) * 2
        return max(duration, MIN_DURATION_MS)

    def tick(self):
        """
        Execute one step:
          1) Eat the apple under the head (score, grow, clear apple)
          2) End the game on self collision
          3) Place an apple if none is active
          4) Render
          5) Move the snake

        Checks use the position reached by the previous tick's move.
        """
        if self.ended:
            return
        if self._in_tick:
            raise RuntimeError("tick() is not re-entrant")

        self._in_tick = True
        try:
            self.direction = self.pending_direction
            self.tick_count += 1

            if self.apple is not None and self.snake.head == self.apple:
                self._eat_apple()

            if self.snake.is_self_collision():
                self.game_over()

            if self.apple is None:
                self.apple = place_apple(self.grid, self.rng)

            self.render()
            self.snake.move(self.direction)
        finally:
            self._in_tick = False

    def _eat_apple(self):
        self.score += 1
        self.best_score = max(self.best_score, self.score)
        if self.display is not None:
            self.display.show_score(self.score)

        new_tail = self.snake.grow()
        logger.info("Apple eaten at %s, score %s, new tail %s", self.apple, self.score, new_tail)
        self.apple = None

        if self.running and self.clock is not None:
            interval = self.calculate_duration()
            logger.debug("Rescheduling clock at %.3f ms", interval)
            self.clock.start(interval, self._on_clock)

    def _on_clock(self):
        if self.pilot is not None and not self.ended:
            move = self.pilot.get_move(self)
            if move is not None:
                self.set_pending_direction(move)
        self.tick()

    def render(self):
        if self.renderer is None:
            return
        self.renderer.render(list(self.snake.positions), self.apple)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def go(self):
        """Reset the score, run one tick and start the clock."""
        self.score = 0
        self.ended = False
        self.running = True
        if self.display is not None:
            self.display.clear_game_over_message()
            self.display.show_score(self.score)
        if self.clock is not None:
            self.clock.cancel()

        logger.info("Game started on %s", self.grid)
        self.tick()

        if self.clock is not None and self.running:
            self.clock.start(self.calculate_duration(), self._on_clock)

    def game_over(self):
        if self.clock is not None:
            self.clock.cancel()
        if self.display is not None:
            self.display.show_game_over_message()
        logger.info(
            "Game Over: snake ran into itself at %s after %s ticks (score %s)",
            self.snake.head, self.tick_count, self.score
        )
        self.score = 0
        self.running = False
        self.ended = True

    def destroy(self):
        """Stop the clock and stop listening to keys."""
        self._listening = False
        self.running = False
        if self.clock is not None:
            self.clock.cancel()

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_count}, head={self.snake.head}, "
            f"direction={DIRECTION_NAMES[self.direction]}, apple={self.apple}, "
            f"score={self.score}>"
        )
