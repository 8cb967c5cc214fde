"""
Tests for domain/game_state.py - the tick, input handling and speed curve.
"""

import os
import random
import sys
from collections import deque
from unittest.mock import Mock

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import DOWN, LEFT, MIN_DURATION_MS, RIGHT, UP  # noqa: E402
from domain.game_state import GameState, is_opposite  # noqa: E402


class FakeClock:
    """Records start/cancel calls; callbacks are fired by hand."""

    def __init__(self):
        self.callback = None
        self.interval_ms = None
        self.starts = []
        self.cancels = 0

    @property
    def active(self):
        return self.callback is not None

    def start(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.starts.append(interval_ms)

    def cancel(self):
        self.callback = None
        self.cancels += 1

    def fire(self):
        self.callback()


def make_state(**kwargs):
    kwargs.setdefault("rng", random.Random(1))
    return GameState(**kwargs)


class TestInitialState:
    """Tests for a freshly created GameState."""

    def test_initial_values(self):
        """GameState starts with the fixed three-cell snake facing right."""
        state = make_state()

        assert list(state.snake.positions) == [(5, 5), (4, 5), (3, 5)]
        assert state.get_velocity() == RIGHT
        assert state.apple is None
        assert state.score == 0
        assert state.running is False
        assert state.ended is False
        assert state.grid.size == 20

    def test_initial_render(self):
        """The board is drawn once on creation."""
        renderer = Mock()
        make_state(renderer=renderer)
        renderer.render.assert_called_once_with([(5, 5), (4, 5), (3, 5)], None)

    def test_grid_too_small_for_start_position_raises(self):
        """A grid that cannot hold the start body is rejected."""
        with pytest.raises(ValueError):
            make_state(grid_size=5)

    def test_non_positive_base_duration_raises(self):
        """The base duration must be positive."""
        with pytest.raises(ValueError):
            make_state(base_duration=0)


class TestDirectionInput:
    """Tests for set_pending_direction(), handle_key() and get_velocity()."""

    def test_opposite_direction_rejected(self):
        """Reversing while moving right is refused."""
        state = make_state()
        assert state.set_pending_direction(LEFT) is False
        assert state.get_velocity() == (1, 0)
        assert state.pending_direction == RIGHT

    def test_perpendicular_direction_applied_on_next_tick(self):
        """A turn is pending until the next tick consumes it."""
        state = make_state()
        assert state.set_pending_direction(UP) is True
        assert state.get_velocity() == RIGHT

        state.tick()

        assert state.get_velocity() == UP
        assert state.snake.head == (5, 4)

    def test_last_write_wins(self):
        """Several requests before a tick keep only the last one."""
        state = make_state()
        state.set_pending_direction(UP)
        state.set_pending_direction(DOWN)

        state.tick()

        assert state.get_velocity() == DOWN
        assert state.snake.head == (5, 6)

    def test_opposite_checked_against_current_direction(self):
        """UP then LEFT before a tick cannot reverse into the neck."""
        state = make_state()
        state.set_pending_direction(UP)
        assert state.set_pending_direction(LEFT) is False
        assert state.pending_direction == UP

    def test_invalid_direction_raises(self):
        """Only the four unit directions are accepted."""
        state = make_state()
        with pytest.raises(ValueError):
            state.set_pending_direction((1, 1))

    def test_handle_key_maps_wasd_case_insensitively(self):
        """W/A/S/D in either case map to directions."""
        state = make_state()
        assert state.handle_key("w") is True
        assert state.pending_direction == UP
        assert state.handle_key("S") is True
        assert state.pending_direction == DOWN

    def test_handle_key_maps_arrow_names(self):
        """Arrow key names map to directions."""
        state = make_state()
        assert state.handle_key("down") is True
        assert state.pending_direction == DOWN

    def test_handle_key_ignores_unbound_keys(self):
        """Unbound keys do nothing."""
        state = make_state()
        assert state.handle_key("q") is False
        assert state.pending_direction == RIGHT

    def test_handle_key_ignored_after_destroy(self):
        """Keys are no longer processed once the game is destroyed."""
        state = make_state()
        state.destroy()
        assert state.handle_key("w") is False
        assert state.pending_direction == RIGHT

    def test_is_opposite(self):
        """is_opposite() only matches exact reversals."""
        assert is_opposite(LEFT, RIGHT)
        assert is_opposite(UP, DOWN)
        assert not is_opposite(UP, RIGHT)
        assert not is_opposite(RIGHT, RIGHT)


class TestTick:
    """Tests for the tick algorithm."""

    def test_first_tick_moves_and_places_apple(self):
        """One tick with no apple: the snake moves right and an apple appears."""
        state = make_state()

        state.tick()

        assert list(state.snake.positions) == [(6, 5), (5, 5), (4, 5)]
        assert state.apple is not None
        x, y = state.apple
        assert 1 <= x < 19 and 1 <= y < 19
        assert state.tick_count == 1

    def test_eating_apple(self):
        """Landing on the apple scores, grows and replaces the apple."""
        renderer = Mock()
        display = Mock()
        state = make_state(renderer=renderer, display=display)
        state.apple = (6, 5)

        state.tick()  # head moves onto (6, 5)
        assert state.score == 0

        renderer.reset_mock()
        state.tick()  # head is on the apple

        assert state.score == 1
        display.show_score.assert_called_once_with(1)
        # The extension cell is visible in the frame drawn before the move
        renderer.render.assert_called_once()
        drawn_body = renderer.render.call_args[0][0]
        assert drawn_body == [(6, 5), (5, 5), (4, 5), (3, 5)]
        assert list(state.snake.positions) == [(7, 5), (6, 5), (5, 5), (4, 5)]
        assert state.apple is not None

    def test_apple_cleared_then_replaced_within_tick(self):
        """An eaten apple is replaced by a fresh placement in the same tick."""
        rng = Mock()
        rng.randrange = Mock(side_effect=[9, 9])
        state = GameState(rng=rng)
        state.apple = (5, 5)  # already under the head

        state.tick()

        assert state.score == 1
        assert state.apple == (9, 9)

    def test_score_increments_by_one_per_apple(self):
        """Each apple adds exactly one point."""
        state = make_state()
        for expected in (1, 2, 3):
            state.apple = state.snake.head
            state.tick()
            assert state.score == expected

    def test_length_grows_by_one_per_apple(self):
        """Body length is unchanged by a plain tick and +1 on an eating tick."""
        state = make_state()
        state.tick()
        assert len(state.snake) == 3

        state.apple = state.snake.head
        state.tick()
        assert len(state.snake) == 4

        state.apple = None
        state.tick()
        assert len(state.snake) == 4

    def test_self_collision_ends_game(self):
        """The head on a body cell ends the game and resets the score."""
        display = Mock()
        clock = FakeClock()
        state = make_state(display=display, clock=clock)
        state.go()
        state.score = 4
        state.snake.positions = deque([(5, 5), (6, 5), (6, 6), (5, 6), (5, 5)])

        clock.fire()

        assert state.ended is True
        assert state.running is False
        assert state.score == 0
        assert clock.active is False
        display.show_game_over_message.assert_called_once()

    def test_best_score_survives_game_over(self):
        """The best score is kept after game over resets the score."""
        state = make_state()
        for _ in range(3):
            state.apple = state.snake.head
            state.tick()
        state.apple = None
        state.snake.positions = deque([(5, 5), (6, 5), (6, 6), (5, 6), (5, 5)])

        state.tick()

        assert state.ended is True
        assert state.score == 0
        assert state.best_score == 3

    def test_game_over_tick_still_renders_and_moves(self):
        """The steps after the collision check still run on the final tick."""
        renderer = Mock()
        state = make_state(renderer=renderer)
        state.snake.positions = deque([(5, 5), (6, 5), (6, 6), (5, 6), (5, 5)])
        renderer.reset_mock()

        state.tick()

        assert state.ended is True
        renderer.render.assert_called_once()
        assert state.snake.head == (6, 5)
        assert state.apple is not None

    def test_no_ticks_after_game_over(self):
        """tick() does nothing once the game has ended."""
        state = make_state()
        state.snake.positions = deque([(5, 5), (6, 5), (6, 6), (5, 6), (5, 5)])
        state.tick()
        positions = list(state.snake.positions)

        state.tick()

        assert state.tick_count == 1
        assert list(state.snake.positions) == positions

    def test_all_cells_stay_in_bounds(self):
        """A long run across the edges keeps every cell inside the grid."""
        state = make_state(grid_size=10)
        turns = [RIGHT, DOWN, LEFT, UP] * 10
        for i in range(200):
            if i % 13 == 0:
                state.set_pending_direction(turns[i // 13])
            if i % 7 == 0:
                state.apple = state.snake.head
            state.tick()
            if state.ended:
                break
            for cell in state.snake.positions:
                assert state.grid.contains(cell)

    def test_tick_is_not_reentrant(self):
        """A tick triggered from inside a tick is refused."""
        renderer = Mock()
        state = make_state()
        state.renderer = renderer
        renderer.render.side_effect = lambda body, apple: state.tick()

        with pytest.raises(RuntimeError):
            state.tick()

        renderer.render.side_effect = None
        state.tick()
        assert state.tick_count == 2


class TestDurationCurve:
    """Tests for calculate_duration()."""

    def test_duration_at_zero_score(self):
        """At score 0 the interval equals the base duration."""
        state = make_state(base_duration=200)
        assert state.calculate_duration() == 200

    def test_duration_at_score_ten(self):
        """200 - (100 / 200 / 10) * 2 = 199.9."""
        state = make_state(base_duration=200)
        state.score = 10
        assert state.calculate_duration() == pytest.approx(199.9)

    def test_duration_clamped_to_floor(self):
        """The interval never drops below the positive floor."""
        state = make_state(base_duration=200)
        state.score = 10_000
        assert state.calculate_duration() == MIN_DURATION_MS


class TestLifecycle:
    """Tests for go(), the clock and destroy()."""

    def test_go_ticks_immediately_and_starts_clock(self):
        """go() runs one tick and starts the clock at the computed interval."""
        display = Mock()
        clock = FakeClock()
        state = make_state(display=display, clock=clock, base_duration=150)

        state.go()

        assert state.running is True
        assert state.tick_count == 1
        assert clock.cancels == 1
        assert clock.starts == [150]
        display.clear_game_over_message.assert_called_once()
        display.show_score.assert_called_once_with(0)

    def test_clock_callback_ticks(self):
        """Each clock callback advances the game one tick."""
        clock = FakeClock()
        state = make_state(clock=clock)
        state.go()

        clock.fire()
        clock.fire()

        assert state.tick_count == 3
        assert state.snake.head == (8, 5)

    def test_eating_reschedules_clock(self):
        """The clock is restarted with the faster interval after an apple."""
        clock = FakeClock()
        state = make_state(clock=clock, base_duration=200)
        state.go()
        state.apple = state.snake.head

        clock.fire()

        assert clock.starts == [200, pytest.approx(200 - (1 / 200 / 10) * 2)]
        assert clock.active is True

    def test_pilot_polled_before_tick(self):
        """A pilot's move is requested before each clock tick."""
        clock = FakeClock()
        pilot = Mock()
        pilot.get_move = Mock(return_value=DOWN)
        state = make_state(clock=clock, pilot=pilot)
        state.go()

        clock.fire()

        pilot.get_move.assert_called_once_with(state)
        assert state.get_velocity() == DOWN

    def test_pilot_none_keeps_direction(self):
        """A pilot returning None leaves the direction alone."""
        clock = FakeClock()
        pilot = Mock()
        pilot.get_move = Mock(return_value=None)
        state = make_state(clock=clock, pilot=pilot)
        state.go()

        clock.fire()

        assert state.get_velocity() == RIGHT

    def test_destroy_cancels_clock(self):
        """destroy() stops the clock and marks the game not running."""
        clock = FakeClock()
        state = make_state(clock=clock)
        state.go()

        state.destroy()

        assert clock.active is False
        assert state.running is False

    def test_go_resets_score(self):
        """Starting the game resets the score to zero."""
        state = make_state(clock=FakeClock())
        state.score = 7
        state.go()
        assert state.score == 0

    def test_repr(self):
        """GameState has a useful string representation."""
        state = make_state()
        repr_str = repr(state)
        assert "tick=0" in repr_str
        assert "direction=RIGHT" in repr_str
