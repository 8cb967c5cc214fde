"""
Score and message display collaborators.
"""

import logging

logger = logging.getLogger(__name__)

GAME_OVER_MESSAGE = "Game Over!"


class Display:
    """Interface for surfacing the score and the end-of-game message."""

    def show_score(self, score: int):
        raise NotImplementedError

    def show_game_over_message(self):
        raise NotImplementedError

    def clear_game_over_message(self):
        raise NotImplementedError


class ConsoleDisplay(Display):
    """Logs score changes and prints the game-over message once."""

    def __init__(self):
        self.score = 0
        self.message = None

    def show_score(self, score: int):
        self.score = score
        logger.info("Score: %s", score)

    def show_game_over_message(self):
        if self.message is None:
            self.message = GAME_OVER_MESSAGE
            print(self.message)

    def clear_game_over_message(self):
        self.message = None
