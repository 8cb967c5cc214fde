"""
Game session - the start/stop lifecycle around a single GameState.
"""

import logging
import random
from typing import Optional

from domain.constants import BASE_DURATION_MS, GRID_SIZE
from domain.game_state import GameState

logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns at most one live GameState.

    start() tears down the current game before creating the next one, so a
    stale clock or key handler can never act on a new game. stop() leaves
    the session with no game at all.
    """

    def __init__(
        self,
        renderer=None,
        display=None,
        clock=None,
        pilot=None,
        grid_size: int = GRID_SIZE,
        base_duration: float = BASE_DURATION_MS,
        rng: Optional[random.Random] = None
    ):
        self.renderer = renderer
        self.display = display
        self.clock = clock
        self.pilot = pilot
        self.grid_size = grid_size
        self.base_duration = base_duration
        self.rng = rng or random.Random()
        self.game: Optional[GameState] = None
        self.games_started = 0

    def new_game(self) -> GameState:
        """Tear down any current game and create a fresh, idle one."""
        self._teardown()
        self.game = GameState(
            grid_size=self.grid_size,
            renderer=self.renderer,
            display=self.display,
            clock=self.clock,
            pilot=self.pilot,
            base_duration=self.base_duration,
            rng=self.rng
        )
        return self.game

    def start(self) -> GameState:
        game = self.new_game()
        self.games_started += 1
        logger.info("Starting game #%s", self.games_started)
        game.go()
        return game

    def stop(self):
        if self.game is None:
            return
        logger.info("Stopping game after %s ticks", self.game.tick_count)
        self._teardown()

    def _teardown(self):
        if self.game is not None:
            self.game.destroy()
            self.game = None

    def handle_key(self, key: str) -> bool:
        if self.game is None:
            return False
        return self.game.handle_key(key)

    @property
    def is_running(self) -> bool:
        return self.game is not None and self.game.running
