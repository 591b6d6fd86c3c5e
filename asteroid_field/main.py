#!/usr/bin/env python3
"""
ASTEROID FIELD - Terminal Arcade Shooter
=========================================
Steer a ship through a field of drifting asteroids and shoot them down.

Controls:
    W / UP          - Thrust
    A, D / LEFT, RIGHT - Turn
    SPACE           - Fire
    P               - Pause
    ENTER           - New game (after game over)
    F               - Toggle FPS display
    Q               - Quit
"""

import logging
import os
import sys
import time

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .config import GameConfig
from .controls import InputHandler, FOCUS_REPORTING_ON, FOCUS_REPORTING_OFF
from .engine import GameRenderer
from .render import render_frame
from .simulation import (
    SimulationState, Phase, create_state, tick, advance_time, snapshot
)


# =============================================================================
# CONSTANTS
# =============================================================================

TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS
MAX_TICKS_PER_FRAME = 4
MAX_FRAME_DELTA = FRAME_TIME * MAX_TICKS_PER_FRAME  # seconds; longer gaps are stalls
MIN_WIDTH = 60
MIN_HEIGHT = 20

LOG_FILE = 'asteroid_field.log'
LOG_LEVEL_ENV = 'ASTEROID_FIELD_LOG_LEVEL'

logger = logging.getLogger(__name__)


def setup_logging(path: str = LOG_FILE) -> logging.Logger:
    """
    Log to a file; the terminal belongs to the renderer.

    The level comes from $ASTEROID_FIELD_LOG_LEVEL (default WARNING).
    Calling this twice does not add a second handler.
    """
    root = logging.getLogger()
    if not any(isinstance(h, logging.FileHandler) for h in root.handlers):
        level_name = os.environ.get(LOG_LEVEL_ENV, 'WARNING').upper()
        level = getattr(logging, level_name, logging.WARNING)
        handler = logging.FileHandler(path)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'
        ))
        root.addHandler(handler)
        root.setLevel(level)
    return logging.getLogger('asteroid_field')


# =============================================================================
# GAME APP
# =============================================================================

class GameApp:
    """Binds the terminal, the input handler and one simulation session."""

    def __init__(self, term: Terminal, config: GameConfig = None):
        self.term = term
        self.renderer = GameRenderer(term)
        self.input_handler = InputHandler()
        self.running = True

        width, height = self.renderer.world_size
        self.state: SimulationState = create_state(
            (config or GameConfig()).with_size(width, height)
        )

    def handle_input(self):
        """Drain all pending keystrokes."""
        key = self.term.inkey(timeout=0)
        while key:
            if not key.is_sequence and key.lower() == 'f':
                self.renderer.show_fps = not self.renderer.show_fps
            else:
                self.input_handler.process_key(key)
            key = self.term.inkey(timeout=0)

        if self.input_handler.consume_quit():
            self.running = False

    def update(self):
        """One fixed-timestep tick."""
        if self.state.phase is not Phase.PLAYING:
            self.input_handler.clear_fire_queue()
        tick(self.state, self.input_handler.snapshot())

    def advance_time(self, elapsed_ms: float):
        """Feed wall-clock time to the timers, clamped like the tick loop."""
        advance_time(self.state, min(elapsed_ms, MAX_FRAME_DELTA * 1000.0))

    def render(self):
        output = render_frame(self.renderer, snapshot(self.state))
        if output:
            print(output, end='', flush=True)


# =============================================================================
# MAIN LOOP
# =============================================================================

def main():
    """Entry point. Sets up the terminal and runs the 60 FPS game loop."""
    setup_logging()
    term = Terminal()

    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        print(FOCUS_REPORTING_ON + term.home + term.clear, end='', flush=True)
        game = GameApp(term)

        last_time = time.perf_counter()
        accumulator = 0.0
        fps_timer = 0.0
        fps_frames = 0

        try:
            while game.running:
                now = time.perf_counter()
                # Clamp so a stall (suspend, debugger) is not replayed
                delta = min(now - last_time, MAX_FRAME_DELTA)
                last_time = now

                game.handle_input()

                # Timers run on wall-clock time, independent of ticks
                game.advance_time(delta * 1000.0)

                accumulator += delta
                fps_timer += delta

                ticks = 0
                while accumulator >= FRAME_TIME and ticks < MAX_TICKS_PER_FRAME:
                    game.update()
                    accumulator -= FRAME_TIME
                    ticks += 1
                    fps_frames += 1

                game.render()

                if fps_timer >= 0.5:
                    game.renderer.current_fps = fps_frames / fps_timer
                    fps_frames = 0
                    fps_timer = 0.0

                elapsed = time.perf_counter() - now
                sleep_time = FRAME_TIME - elapsed
                if sleep_time > 0.001:
                    time.sleep(sleep_time * 0.9)
        finally:
            print(FOCUS_REPORTING_OFF + term.normal, end='', flush=True)

        logger.info('quit with score %d', game.state.score)


if __name__ == '__main__':
    main()
