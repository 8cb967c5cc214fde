"""
Interactive pygame window.

The window shows the board canvas, the score, the game-over message and
Start/Stop buttons. Key presses, button clicks and clock ticks all arrive
through the pygame event queue and are handled one at a time.
"""

import logging
import os
from typing import Callable, List, Optional, Tuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .board_renderer import Renderer  # noqa: E402
from .display import Display, GAME_OVER_MESSAGE  # noqa: E402
from .frame_renderer import DEFAULT_CANVAS_SIZE, ColorScheme, cell_color, hex_to_rgb  # noqa: E402
from .game_clock import GameClock, _validated_interval  # noqa: E402
from .game_session import GameSession  # noqa: E402

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1
HUD_HEIGHT = 60
FPS = 60

# Colors
WHITE, BLACK = (255, 255, 255), (0, 0, 0)
BUTTON_BG, MESSAGE_RED = (60, 60, 60), (200, 30, 30)


class PygameClock(GameClock):
    """
    Clock backed by pygame.time.set_timer posting TICK_EVENT.

    Every start() posts events carrying a new generation number, so ticks
    queued by an earlier start are dropped even when they were already
    pulled off the queue in the same batch as the restart.
    """

    def __init__(self, event_type: int = TICK_EVENT):
        self.event_type = event_type
        self.interval_ms = None
        self.generation = 0
        self._callback: Optional[Callable[[], None]] = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, interval_ms: float, callback: Callable[[], None]):
        self.cancel()
        self.interval_ms = _validated_interval(interval_ms)
        self._callback = callback
        self.generation += 1
        event = pygame.event.Event(self.event_type, generation=self.generation)
        pygame.time.set_timer(event, max(1, int(round(interval_ms))))

    def cancel(self):
        if self._callback is None:
            return
        pygame.time.set_timer(self.event_type, 0)
        pygame.event.clear(self.event_type)
        self._callback = None

    def fire(self, event: Optional[pygame.event.Event] = None) -> bool:
        """Run the callback for a TICK_EVENT; stale events are ignored."""
        if self._callback is None:
            return False
        if event is not None and getattr(event, "generation", None) != self.generation:
            return False
        self._callback()
        return True


class PygameRenderer(Renderer):
    """Draw the board onto a pygame surface."""

    def __init__(
        self,
        surface: pygame.Surface,
        grid_size: int,
        origin: Tuple[int, int] = (0, 0),
        canvas_size: int = DEFAULT_CANVAS_SIZE
    ):
        self.surface = surface
        self.grid_size = grid_size
        self.origin = origin
        self.cell_size = canvas_size / grid_size

    def _fill_cell(self, x: int, y: int, color: str):
        if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
            return
        left = self.origin[0] + int(round(x * self.cell_size))
        top = self.origin[1] + int(round(y * self.cell_size))
        width = self.origin[0] + int(round((x + 1) * self.cell_size)) - left
        height = self.origin[1] + int(round((y + 1) * self.cell_size)) - top
        pygame.draw.rect(self.surface, hex_to_rgb(color), (left, top, width, height))

    def draw_grid(self):
        for x in range(self.grid_size):
            for y in range(self.grid_size):
                self._fill_cell(x, y, cell_color(x, y))

    def draw_apple(self, cell: Tuple[int, int]):
        self._fill_cell(cell[0], cell[1], ColorScheme.APPLE)

    def draw_snake(self, body: List[Tuple[int, int]]):
        for x, y in body:
            self._fill_cell(x, y, ColorScheme.SNAKE)


class PygameDisplay(Display):
    """Holds the score and message text drawn by the window's HUD."""

    def __init__(self):
        self.score = 0
        self.message: Optional[str] = None

    def show_score(self, score: int):
        self.score = score

    def show_game_over_message(self):
        self.message = GAME_OVER_MESSAGE

    def clear_game_over_message(self):
        self.message = None


class GameWindow:
    """
    The playable window:
      - board canvas below a HUD strip
      - Start (restart) and Stop buttons
      - WASD / arrow keys to steer
    """

    def __init__(self, grid_size: int, base_duration: float, rng=None, canvas_size: int = DEFAULT_CANVAS_SIZE):
        pygame.init()
        self.screen = pygame.display.set_mode((canvas_size, canvas_size + HUD_HEIGHT))
        pygame.display.set_caption("Snake")
        self.font = pygame.font.SysFont("arial", 24, bold=True)
        self.frame_clock = pygame.time.Clock()

        self.display = PygameDisplay()
        self.clock = PygameClock()
        self.renderer = PygameRenderer(self.screen, grid_size, origin=(0, HUD_HEIGHT), canvas_size=canvas_size)
        self.session = GameSession(
            renderer=self.renderer,
            display=self.display,
            clock=self.clock,
            grid_size=grid_size,
            base_duration=base_duration,
            rng=rng
        )

        self.start_button = pygame.Rect(10, 10, 90, HUD_HEIGHT - 20)
        self.stop_button = pygame.Rect(110, 10, 90, HUD_HEIGHT - 20)
        self.running = False

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.session.stop()
            self.running = False
        elif event.type == TICK_EVENT:
            self.clock.fire(event)
        elif event.type == pygame.KEYUP:
            self.session.handle_key(pygame.key.name(event.key))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.start_button.collidepoint(event.pos):
                self.session.start()
            elif self.stop_button.collidepoint(event.pos):
                self.session.stop()

    def _draw_button(self, rect: pygame.Rect, label: str):
        pygame.draw.rect(self.screen, BUTTON_BG, rect, border_radius=6)
        text = self.font.render(label, True, WHITE)
        self.screen.blit(text, text.get_rect(center=rect.center))

    def draw_hud(self):
        width = self.screen.get_width()
        pygame.draw.rect(self.screen, BLACK, (0, 0, width, HUD_HEIGHT))
        self._draw_button(self.start_button, "Start")
        self._draw_button(self.stop_button, "Stop")

        score = self.font.render(f"Score: {self.display.score}", True, WHITE)
        self.screen.blit(score, (width - score.get_width() - 10, (HUD_HEIGHT - score.get_height()) // 2))

        if self.display.message:
            message = self.font.render(self.display.message, True, MESSAGE_RED)
            self.screen.blit(message, message.get_rect(center=(width // 2, HUD_HEIGHT + self.screen.get_width() // 2)))

    def run(self):
        # Show an idle board until Start is pressed
        self.session.new_game()
        self.running = True
        logger.info("Window open. Press Start to play.")

        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            self.draw_hud()
            pygame.display.flip()
            self.frame_clock.tick(FPS)

        pygame.quit()
